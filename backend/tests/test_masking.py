"""Tests for identifier masking and input validators."""
import random

import pytest

from paydesk.utils.masking import key_hint, mask_aadhaar, mask_identifier
from paydesk.utils.validators import (
    normalize_aadhaar, validate_aadhaar, validate_country_code,
    validate_currency, validate_email, validate_redirect_url,
)


def test_mask_aadhaar_keeps_first_and_last_four():
    assert mask_aadhaar("123456789012") == "1234****9012"


def test_mask_never_reproduces_source():
    rng = random.Random(1337)
    for _ in range(200):
        aadhaar = "".join(rng.choice("0123456789") for _ in range(12))
        masked = mask_aadhaar(aadhaar)
        assert masked != aadhaar
        assert len(masked) == 12
        assert masked[:4] == aadhaar[:4]
        assert masked[-4:] == aadhaar[-4:]
        assert masked[4:8] == "****"


def test_mask_identifier_custom_pattern():
    assert mask_identifier("ABCDEFGH", prefix=2, suffix=1, mask_char="#") == "AB#####H"


@pytest.mark.parametrize("value", ["", "1234", "12345678"])
def test_mask_identifier_rejects_values_too_short_to_hide(value):
    with pytest.raises(ValueError):
        mask_identifier(value)


@pytest.mark.parametrize("aadhaar", ["123456789012", "000000000000", "1234 5678 9012"])
def test_validate_aadhaar_accepts_twelve_digits(aadhaar):
    assert validate_aadhaar(aadhaar)


@pytest.mark.parametrize("aadhaar", [
    None, "", "12345678901", "1234567890123", "12345678901a", "abcdefghijkl",
    "١٢٣٤٥٦٧٨٩٠١٢",  # Arabic-Indic digits
    "１２３４５６７８９０１２",  # fullwidth digits
])
def test_validate_aadhaar_rejects_malformed(aadhaar):
    assert not validate_aadhaar(aadhaar)


def test_normalize_aadhaar_strips_spaces():
    assert normalize_aadhaar("1234 5678 9012") == "123456789012"


def test_validate_email():
    assert validate_email("a@b.com")
    assert not validate_email("not-an-email")
    assert not validate_email("a@b")
    assert not validate_email(None)


def test_validate_country_code_requires_upper_alpha2():
    assert validate_country_code("US")
    assert not validate_country_code("us")
    assert not validate_country_code("USA")
    assert not validate_country_code("1A")


def test_validate_currency():
    assert validate_currency("USD")
    assert validate_currency("inr")
    assert not validate_currency("US")
    assert not validate_currency("U5D")


def test_validate_redirect_url():
    assert validate_redirect_url("https://shop.example.com/#/payment-success")
    assert validate_redirect_url("http://localhost:3000/cancel")
    assert not validate_redirect_url("/relative/path")
    assert not validate_redirect_url("javascript:alert(1)")


def test_key_hint_hides_secret():
    hint = key_hint("sk_test_51Hq2xKeyValue4242")
    assert hint == "sk_test_...4242"
    assert "51Hq2x" not in hint
