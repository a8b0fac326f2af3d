"""
Validators — Regex and rule-based validation for identity and payment input.
"""
import re
from urllib.parse import urlparse


def validate_aadhaar(aadhaar: str | None) -> bool:
    """Validate Aadhaar number: exactly 12 ASCII digits once whitespace is removed."""
    if not aadhaar:
        return False
    return bool(re.fullmatch(r"[0-9]{12}", normalize_aadhaar(aadhaar)))


def normalize_aadhaar(aadhaar: str) -> str:
    """Drop the spaces people type between Aadhaar digit groups."""
    return re.sub(r"\s", "", aadhaar)


def validate_email(email: str | None) -> bool:
    """Validate email shape: local@domain.tld (no deliverability check)."""
    if not email:
        return False
    return bool(re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", email.strip()))


def validate_country_code(code: str | None) -> bool:
    """Validate an ISO-3166 alpha-2 code, already upper-cased (e.g. US, IN)."""
    if not code:
        return False
    return bool(re.match(r"^[A-Z]{2}$", code))


def validate_currency(currency: str | None) -> bool:
    """Validate an ISO-4217 currency code in any case (e.g. USD, inr)."""
    if not currency:
        return False
    return bool(re.match(r"^[A-Za-z]{3}$", currency.strip()))


def validate_redirect_url(url: str | None) -> bool:
    """Validate an absolute http(s) URL usable as a checkout redirect."""
    if not url:
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def sanitize_name(name: str | None) -> str:
    """Basic sanitization for names: strip and collapse inner whitespace."""
    if not name:
        return ""
    return re.sub(r"\s+", " ", name.strip())
