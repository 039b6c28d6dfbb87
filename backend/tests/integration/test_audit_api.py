"""
End-to-end tests for the template and audit endpoints.

Runs the FastAPI app in-process (httpx ASGITransport) against an
in-memory SQLite database shared through StaticPool.
"""
import pytest
import pytest_asyncio
import httpx

from compliance.infra.db.uow import SqlUnitOfWork
from compliance.main import app
from compliance.models import Audit
from compliance.wiring.bootstrap import get_uow

ORG = {"X-Organization-Id": "org-acme", "X-User-Id": "user-1"}
OTHER_ORG = {"X-Organization-Id": "org-globex"}

TEMPLATE = {
    "name": "Kitchen Daily",
    "category": "food_safety",
    "passing_score": 80,
    "sections": [
        {
            "title": "Hygiene",
            "questions": [
                {"text": "Hands washed?", "type": "yes_no"},
                {"text": "Gloves worn?", "type": "pass_fail", "is_critical": True},
            ],
        },
        {
            "title": "Storage",
            "questions": [
                {
                    "text": "Fridge temperature",
                    "type": "numeric",
                    "weight": 2,
                    "min_value": 0,
                    "max_value": 5,
                    "unit": "°C",
                },
            ],
        },
    ],
}


@pytest_asyncio.fixture
async def client(session_factory):
    def _override_uow():
        yield SqlUnitOfWork(session_factory)

    app.dependency_overrides[get_uow] = _override_uow
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_uow, None)


async def _create_template(client, payload=None) -> str:
    response = await client.post("/api/v1/templates", json=payload or TEMPLATE, headers=ORG)
    assert response.status_code == 201
    return response.json()["template_id"]


async def _start_audit(client, template_id, headers=ORG) -> str:
    response = await client.post(
        "/api/v1/audits",
        json={"template_id": template_id, "site_id": "site-42"},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["audit_id"]


async def _question_ids(client, template_id) -> list[str]:
    response = await client.get(f"/api/v1/templates/{template_id}", headers=ORG)
    return [q["id"] for s in response.json()["sections"] for q in s["questions"]]


@pytest.mark.asyncio
class TestAuditFlow:
    async def test_full_audit_lifecycle(self, client):
        template_id = await _create_template(client)
        washed, gloves, fridge = await _question_ids(client, template_id)
        audit_id = await _start_audit(client, template_id)

        saved = await client.put(
            f"/api/v1/audits/{audit_id}/responses/{washed}",
            json={"bool_value": True},
            headers=ORG,
        )
        assert saved.status_code == 200
        assert saved.json() == {"success": True, "passed": True}

        saved = await client.put(
            f"/api/v1/audits/{audit_id}/responses/{fridge}",
            json={"numeric_value": 3},
            headers=ORG,
        )
        assert saved.json()["passed"] is True

        saved = await client.put(
            f"/api/v1/audits/{audit_id}/responses/{gloves}",
            json={"bool_value": False, "flagged": True, "notes": "box empty"},
            headers=ORG,
        )
        assert saved.json() == {"success": True, "passed": False}

        completed = await client.post(
            f"/api/v1/audits/{audit_id}/complete",
            json={"signature": "data:image/png;base64,AAAA"},
            headers=ORG,
        )
        assert completed.status_code == 200
        assert completed.json() == {"success": True, "passed": False, "percentage": 75.0}

        detail = (await client.get(f"/api/v1/audits/{audit_id}", headers=ORG)).json()
        assert detail["audit"]["status"] == "completed"
        assert detail["audit"]["auditor_id"] == "user-1"
        assert detail["audit"]["template_name"] == "Kitchen Daily"
        assert detail["auditor_signature"] == "data:image/png;base64,AAAA"
        assert len(detail["responses"]) == 3

        report = (await client.get(f"/api/v1/audits/{audit_id}/report", headers=ORG)).json()
        assert report["passing_score"] == 80.0
        assert [s["title"] for s in report["sections"]] == ["Hygiene", "Storage"]
        assert report["sections"][0]["pass_rate"] == 50.0
        assert len(report["failed_items"]) == 1
        assert report["failed_items"][0]["question_text"] == "Gloves worn?"
        assert report["failed_items"][0]["notes"] == "box empty"

        stats = (await client.get("/api/v1/audits/stats", headers=ORG)).json()
        assert stats == {
            "total_audits": 1,
            "completed_audits": 1,
            "in_progress_audits": 0,
            "average_score": 75.0,
            "pass_rate": 0.0,
        }

    async def test_resave_overwrites_and_recomplete_recomputes(self, client):
        template_id = await _create_template(client)
        washed, gloves, fridge = await _question_ids(client, template_id)
        audit_id = await _start_audit(client, template_id)
        for qid, body in (
            (washed, {"bool_value": True}),
            (gloves, {"bool_value": False, "flagged": True}),
            (fridge, {"numeric_value": 3}),
        ):
            await client.put(
                f"/api/v1/audits/{audit_id}/responses/{qid}", json=body, headers=ORG
            )
        first = await client.post(f"/api/v1/audits/{audit_id}/complete", headers=ORG)
        assert first.json()["passed"] is False

        await client.put(
            f"/api/v1/audits/{audit_id}/responses/{gloves}",
            json={"bool_value": True},
            headers=ORG,
        )
        second = await client.post(f"/api/v1/audits/{audit_id}/complete", headers=ORG)

        assert second.json() == {"success": True, "passed": True, "percentage": 100.0}
        detail = (await client.get(f"/api/v1/audits/{audit_id}", headers=ORG)).json()
        assert len(detail["responses"]) == 3

    async def test_list_audits_with_filters(self, client):
        template_id = await _create_template(client)
        audit_id = await _start_audit(client, template_id)
        await client.post(f"/api/v1/audits/{audit_id}/complete", headers=ORG)
        await _start_audit(client, template_id)

        listed = await client.get("/api/v1/audits", params={"status": "completed"}, headers=ORG)

        assert listed.status_code == 200
        body = listed.json()
        assert body["total"] == 1
        assert body["audits"][0]["id"] == audit_id

    async def test_delete_audit(self, client):
        template_id = await _create_template(client)
        audit_id = await _start_audit(client, template_id)

        deleted = await client.delete(f"/api/v1/audits/{audit_id}", headers=ORG)

        assert deleted.json() == {"status": "deleted", "audit_id": audit_id}
        missing = await client.get(f"/api/v1/audits/{audit_id}", headers=ORG)
        assert missing.status_code == 404


@pytest.mark.asyncio
class TestScoringFailures:
    async def test_unknown_audit_returns_failure_body(self, client):
        response = await client.put(
            "/api/v1/audits/missing/responses/q1", json={"bool_value": True}, headers=ORG
        )

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Audit not found"}

    async def test_unknown_question_returns_failure_body(self, client):
        audit_id = await _start_audit(client, await _create_template(client))

        response = await client.put(
            f"/api/v1/audits/{audit_id}/responses/nope", json={}, headers=ORG
        )

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Question not found"}

    async def test_complete_unknown_audit(self, client):
        response = await client.post("/api/v1/audits/missing/complete", headers=ORG)

        assert response.status_code == 404
        assert response.json()["success"] is False

    async def test_complete_archived_audit_conflicts(self, client, session_factory):
        audit_id = await _start_audit(client, await _create_template(client))
        with session_factory() as session:
            session.get(Audit, audit_id).status = "archived"
            session.commit()

        response = await client.post(f"/api/v1/audits/{audit_id}/complete", headers=ORG)

        assert response.status_code == 409
        assert response.json()["success"] is False


@pytest.mark.asyncio
class TestTemplateEndpoints:
    async def test_list_templates(self, client):
        await _create_template(client)

        body = (await client.get("/api/v1/templates", headers=ORG)).json()

        assert body["total"] == 1
        item = body["templates"][0]
        assert item["name"] == "Kitchen Daily"
        assert item["section_count"] == 2
        assert item["audit_count"] == 0

    async def test_update_unused_template_in_place(self, client):
        template_id = await _create_template(client)

        response = await client.put(
            f"/api/v1/templates/{template_id}",
            json={**TEMPLATE, "name": "Kitchen Daily v2"},
            headers=ORG,
        )

        assert response.json() == {
            "template_id": template_id,
            "version": 2,
            "new_version_created": False,
        }

    async def test_template_in_use_is_versioned_and_not_deletable(self, client):
        template_id = await _create_template(client)
        await _start_audit(client, template_id)

        updated = (
            await client.put(
                f"/api/v1/templates/{template_id}",
                json={**TEMPLATE, "passing_score": 90},
                headers=ORG,
            )
        ).json()
        assert updated["new_version_created"] is True
        assert updated["version"] == 2
        new = (await client.get(f"/api/v1/templates/{updated['template_id']}", headers=ORG)).json()
        assert new["previous_version_id"] == template_id
        assert new["passing_score"] == 90.0

        refused = await client.delete(f"/api/v1/templates/{template_id}", headers=ORG)
        assert refused.status_code == 409

    async def test_duplicate_and_delete(self, client):
        template_id = await _create_template(client)

        copy = await client.post(f"/api/v1/templates/{template_id}/duplicate", headers=ORG)
        assert copy.status_code == 201
        copy_id = copy.json()["template_id"]
        body = (await client.get(f"/api/v1/templates/{copy_id}", headers=ORG)).json()
        assert body["name"] == "Kitchen Daily (Copy)"
        assert body["version"] == 1

        deleted = await client.delete(f"/api/v1/templates/{copy_id}", headers=ORG)
        assert deleted.json() == {"status": "deleted", "template_id": copy_id}

    @pytest.mark.parametrize(
        "question",
        [
            {"text": "Temp", "type": "numeric", "min_value": 9, "max_value": 1},
            {"text": "Sign here", "type": "signature"},
            {"text": "Heavy", "type": "yes_no", "weight": -1},
        ],
    )
    async def test_invalid_template_rejected(self, client, question):
        payload = {"name": "Bad", "sections": [{"title": "S", "questions": [question]}]}

        response = await client.post("/api/v1/templates", json=payload, headers=ORG)

        assert response.status_code == 422


@pytest.mark.asyncio
class TestTenancy:
    async def test_missing_organization_header_is_401(self, client):
        response = await client.get("/api/v1/templates")

        assert response.status_code == 401

    async def test_other_organization_sees_nothing(self, client):
        template_id = await _create_template(client)
        audit_id = await _start_audit(client, template_id)

        assert (await client.get(f"/api/v1/templates/{template_id}", headers=OTHER_ORG)).status_code == 404
        assert (await client.get(f"/api/v1/audits/{audit_id}", headers=OTHER_ORG)).status_code == 404
        assert (await client.get("/api/v1/audits", headers=OTHER_ORG)).json()["total"] == 0
        completed = await client.post(f"/api/v1/audits/{audit_id}/complete", headers=OTHER_ORG)
        assert completed.status_code == 404

    async def test_cannot_start_audit_on_foreign_template(self, client):
        template_id = await _create_template(client)

        response = await client.post(
            "/api/v1/audits",
            json={"template_id": template_id, "site_id": "site-1"},
            headers=OTHER_ORG,
        )

        assert response.status_code == 404

    async def test_invalid_status_filter_is_422(self, client):
        response = await client.get("/api/v1/audits", params={"status": "done"}, headers=ORG)

        assert response.status_code == 422
