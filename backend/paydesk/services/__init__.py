from paydesk.services.access_control import AccessControl
from paydesk.services.identity_service import IdentityService
from paydesk.services.configuration_service import ConfigurationService
from paydesk.services.checkout_service import CheckoutOrchestrator
from paydesk.services.ledger_service import LedgerService
from paydesk.services.audit_service import AuditService

__all__ = [
    "AccessControl", "IdentityService", "ConfigurationService",
    "CheckoutOrchestrator", "LedgerService", "AuditService",
]
