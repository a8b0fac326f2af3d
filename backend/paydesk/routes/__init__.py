from paydesk.routes.profile import router as profile_router
from paydesk.routes.config import router as config_router
from paydesk.routes.checkout import router as checkout_router
from paydesk.routes.payment import router as payment_router
from paydesk.routes.admin import router as admin_router

__all__ = ["profile_router", "config_router", "checkout_router", "payment_router", "admin_router"]
