from paydesk.utils.hashing import generate_hash, generate_chain_hash, fingerprint
from paydesk.utils.masking import mask_identifier, mask_aadhaar, key_hint
from paydesk.utils.validators import (
    validate_aadhaar, validate_email, validate_country_code,
    validate_currency, validate_redirect_url,
)

__all__ = [
    "generate_hash", "generate_chain_hash", "fingerprint",
    "mask_identifier", "mask_aadhaar", "key_hint",
    "validate_aadhaar", "validate_email", "validate_country_code",
    "validate_currency", "validate_redirect_url",
]
