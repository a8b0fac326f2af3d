"""
Identifier Masking — Derives display-safe values from sensitive national IDs.
"""
from paydesk.config import get_settings


def mask_identifier(value: str, prefix: int = 4, suffix: int = 4, mask_char: str = "*") -> str:
    """Keep ``prefix`` leading and ``suffix`` trailing characters, mask the rest.

    The result always has the same length as ``value`` and at least one
    masked character, so it can never reproduce the source.

    Raises:
        ValueError: if the identifier is too short to hide anything.
    """
    if len(mask_char) != 1:
        raise ValueError("mask_char must be a single character")
    hidden = len(value) - prefix - suffix
    if prefix < 0 or suffix < 0 or hidden < 1:
        raise ValueError("Identifier too short to mask")
    return f"{value[:prefix]}{mask_char * hidden}{value[len(value) - suffix:]}"


def mask_aadhaar(aadhaar: str) -> str:
    """Mask a normalized 12-digit Aadhaar using the configured pattern.

    >>> mask_aadhaar("123456789012")
    '1234****9012'
    """
    settings = get_settings()
    return mask_identifier(
        aadhaar,
        prefix=settings.MASK_PREFIX,
        suffix=settings.MASK_SUFFIX,
        mask_char=settings.MASK_CHAR,
    )


def key_hint(secret: str) -> str:
    """Redacted hint for a credential, e.g. ``sk_test_...4242``."""
    head = secret.split("_")
    visible_prefix = "_".join(head[:2]) + "_" if len(head) > 2 else ""
    return f"{visible_prefix}...{secret[-4:]}" if len(secret) > 8 else "..."
