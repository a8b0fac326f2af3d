"""
Access Control — Capability checks consulted by every gated operation.
"""
from paydesk.config import get_settings
from paydesk.errors import AuthorizationError

ANONYMOUS_PRINCIPAL = "anonymous"


class AccessControl:
    """Answers "may this principal do X" with plain booleans."""

    @staticmethod
    def is_authenticated(principal: str | None) -> bool:
        return bool(principal) and principal != ANONYMOUS_PRINCIPAL

    @staticmethod
    def is_admin(principal: str | None) -> bool:
        """Admin capability: membership of the configured allowlist."""
        if not AccessControl.is_authenticated(principal):
            return False
        return principal in get_settings().ADMIN_PRINCIPALS

    @staticmethod
    def require_admin(principal: str | None) -> None:
        if not AccessControl.is_admin(principal):
            raise AuthorizationError(f"Principal {principal!r} is not an administrator")
