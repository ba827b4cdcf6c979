"""
Owner context.

Authentication happens upstream; the proxy forwards the authenticated
user's id in the X-Owner-Id header. Every query below the router layer
is scoped to that id.
"""
from typing import Optional

from fastapi import Header

from app.core.errors import NotFoundError

OWNER_HEADER = "X-Owner-Id"


def current_owner(
    x_owner_id: Optional[str] = Header(default=None, description="Authenticated owner id."),
) -> str:
    owner = (x_owner_id or "").strip()
    if not owner:
        raise NotFoundError(
            message=f"No owner context: the {OWNER_HEADER} header is missing.",
            details={"header": OWNER_HEADER},
        )
    return owner
