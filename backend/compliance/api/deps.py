"""Request-scoped dependencies shared by the v1 routers.

Authentication happens upstream: the identity provider's gateway
forwards the caller's organization and user ids as headers.  This
module only reads them.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Header, HTTPException


@dataclass(frozen=True)
class RequestContext:
    organization_id: str
    user_id: Optional[str] = None


def get_request_context(
    x_organization_id: Optional[str] = Header(None),
    x_user_id: Optional[str] = Header(None),
) -> RequestContext:
    """Resolve the tenant for this request; 401 when none was forwarded."""
    if not x_organization_id or not x_organization_id.strip():
        raise HTTPException(status_code=401, detail="Missing organization context")
    return RequestContext(
        organization_id=x_organization_id.strip(),
        user_id=x_user_id.strip() if x_user_id else None,
    )
