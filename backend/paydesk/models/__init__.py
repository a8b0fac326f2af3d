from paydesk.models.profile import UserProfile
from paydesk.models.configuration import StripeConfiguration
from paydesk.models.payment import PaymentRecord
from paydesk.models.audit import AuditLog

__all__ = ["UserProfile", "StripeConfiguration", "PaymentRecord", "AuditLog"]
