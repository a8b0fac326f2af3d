"""
Route Dependencies — Caller identity as asserted by the external identity provider.
"""
from typing import Optional

from fastapi import Header

from paydesk.services.access_control import ANONYMOUS_PRINCIPAL


def get_principal(x_principal: Optional[str] = Header(None, alias="x-principal")) -> str:
    """Authenticated principal of the caller, or ``anonymous`` when absent."""
    principal = (x_principal or "").strip()
    return principal or ANONYMOUS_PRINCIPAL
