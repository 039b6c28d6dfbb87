"""
API endpoints for audit templates.
Handles CRUD, duplication and versioned updates.
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from ...domain.common.errors import (
    EntityNotFoundError,
    ValidationError as DomainValidationError,
)
from ...infra.db.uow import SqlUnitOfWork
from ...schemas.template import (
    TemplateIn, TemplateListItemResponse, TemplateListResponse,
    TemplateResponse, TemplateWriteResponse,
)
from ...use_cases.templates.create_template import CreateTemplateCommand, CreateTemplateUseCase
from ...use_cases.templates.delete_template import DeleteTemplateCommand, DeleteTemplateUseCase
from ...use_cases.templates.duplicate_template import (
    DuplicateTemplateCommand, DuplicateTemplateUseCase,
)
from ...use_cases.templates.get_templates import (
    GetTemplateQuery, GetTemplateUseCase, ListTemplatesQuery, ListTemplatesUseCase,
)
from ...use_cases.templates.update_template import UpdateTemplateCommand, UpdateTemplateUseCase
from ...wiring.bootstrap import get_uow
from ..deps import RequestContext, get_request_context

logger = logging.getLogger(__name__)
router = APIRouter()


def _draft(data: TemplateIn):
    try:
        return data.to_draft()
    except DomainValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


# ================= Template CRUD =================

@router.get("", response_model=TemplateListResponse)
async def list_templates(
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
):
    """Get all templates of the organization, most recently updated first."""
    result = ListTemplatesUseCase().execute(
        uow, ListTemplatesQuery(organization_id=ctx.organization_id)
    )
    items = [TemplateListItemResponse.model_validate(t) for t in result.templates]
    return TemplateListResponse(templates=items, total=len(items))


@router.post("", response_model=TemplateWriteResponse, status_code=201)
async def create_template(
    data: TemplateIn,
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
):
    """Create a template with its sections and questions."""
    result = CreateTemplateUseCase().execute(
        uow,
        CreateTemplateCommand(organization_id=ctx.organization_id, draft=_draft(data)),
    )
    return TemplateWriteResponse(template_id=result.template_id)


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: str,
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
):
    """Get a template with ordered sections and questions."""
    try:
        result = GetTemplateUseCase().execute(
            uow,
            GetTemplateQuery(organization_id=ctx.organization_id, template_id=template_id),
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TemplateResponse.model_validate(result.template)


@router.put("/{template_id}", response_model=TemplateWriteResponse)
async def update_template(
    template_id: str,
    data: TemplateIn,
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
):
    """Update a template; templates already used by audits get a new version."""
    try:
        result = UpdateTemplateUseCase().execute(
            uow,
            UpdateTemplateCommand(
                organization_id=ctx.organization_id,
                template_id=template_id,
                draft=_draft(data),
            ),
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TemplateWriteResponse(
        template_id=result.template_id,
        version=result.version,
        new_version_created=result.new_version_created,
    )


@router.post("/{template_id}/duplicate", response_model=TemplateWriteResponse, status_code=201)
async def duplicate_template(
    template_id: str,
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
):
    """Copy a template as "<name> (Copy)"."""
    try:
        result = DuplicateTemplateUseCase().execute(
            uow,
            DuplicateTemplateCommand(organization_id=ctx.organization_id, template_id=template_id),
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TemplateWriteResponse(template_id=result.template_id)


@router.delete("/{template_id}")
async def delete_template(
    template_id: str,
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
):
    """Delete a template that no audit references."""
    try:
        DeleteTemplateUseCase().execute(
            uow,
            DeleteTemplateCommand(organization_id=ctx.organization_id, template_id=template_id),
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DomainValidationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"status": "deleted", "template_id": template_id}
