"""
Pydantic Schemas — Request & Response models for API validation.
Money fields are StrictInt so no float ever reaches the core.
"""
from datetime import datetime
from typing import Optional, Dict, List
from pydantic import BaseModel, Field, StrictInt


# ──────────────── Profile ────────────────

class RegisterUserRequest(BaseModel):
    national_id: str = Field(..., description="12-digit Aadhaar number (never stored)")
    email: str
    name: str


class UserProfileSchema(BaseModel):
    user_id: str
    name: str
    email: str
    aadhaar_masked: str

    class Config:
        from_attributes = True


class UserProfileResponse(UserProfileSchema):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ──────────────── Configuration ────────────────

class AdminStatusResponse(BaseModel):
    is_admin: bool


class StripeStatusResponse(BaseModel):
    configured: bool


class StripeConfigurationRequest(BaseModel):
    secret_key: str = Field(..., description="Stripe secret key (sk_test_... / sk_live_...)")
    allowed_countries: List[str] = Field(..., description="ISO-3166 alpha-2 codes, e.g. ['US', 'CA']")


class StripeConfigurationSummary(BaseModel):
    configured: bool
    allowed_countries: List[str] = []
    configured_by: Optional[str] = None
    configured_at: Optional[datetime] = None
    key_hint: Optional[str] = None


# ──────────────── Checkout ────────────────

class ShoppingItemSchema(BaseModel):
    currency: str = Field(..., description="ISO-4217 code, e.g. USD")
    product_name: str
    product_description: str = ""
    price_in_cents: StrictInt = Field(..., description="Unit price in minor units")
    quantity: StrictInt = 1


class CheckoutSessionRequest(BaseModel):
    items: List[ShoppingItemSchema]
    success_url: str
    cancel_url: str


class CheckoutSessionResponse(BaseModel):
    id: str
    url: str


# ──────────────── Ledger ────────────────

class RecordPaymentRequest(BaseModel):
    user_id: str
    transaction_id: str
    amount: StrictInt = Field(..., description="Amount in minor units (cents, paisa)")
    currency: str
    status: str
    payment_method: str = "card"
    description: str = ""


class PaymentRecordSchema(BaseModel):
    transaction_id: str
    user_id: str
    amount: int
    currency: str
    status: str
    payment_method: str
    description: str
    timestamp: int  # Nanoseconds since epoch

    class Config:
        from_attributes = True


class RecordPaymentResponse(BaseModel):
    success: bool = True
    transaction_id: str
    timestamp: int
    message: str = "Payment recorded"


# ──────────────── Admin / Audit ────────────────

class AuditLogEntry(BaseModel):
    id: int
    principal: str
    action: str
    payload_hash: Optional[str] = None
    timestamp: datetime
    log_metadata: Optional[Dict] = None

    class Config:
        from_attributes = True


class AuditChainStatus(BaseModel):
    valid: bool
    total_entries: int
    broken_at: Optional[int] = None
    message: Optional[str] = None


class AdminDashboardResponse(BaseModel):
    total_users: int
    total_payments: int
    stripe_configured: bool
    volume_by_currency: Dict[str, int]   # Minor units per currency
    status_distribution: Dict[str, int]


# ──────────────── Generic ────────────────

class HealthResponse(BaseModel):
    status: str
    database: str
    stripe_configured: bool
    version: str
    uptime_seconds: float


class ErrorResponse(BaseModel):
    detail: str
    error_code: Optional[str] = None
