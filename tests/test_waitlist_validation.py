import pytest

from app.core.exceptions import ValidationError
from app.services.waitlist_validation import (
    INVALID_EMAIL,
    INVALID_PHONE,
    NAME_LENGTH,
    NAME_REQUIRED,
    PHONE_LENGTH,
    validate_registration,
)


def test_normalizes_email_and_trims_fields():
    reg = validate_registration({"email": "  Alice@Example.COM ", "name": "  Alice  ", "phone": " +1 (555) 123-4567 "})
    assert reg.email == "alice@example.com"
    assert reg.name == "Alice"
    assert reg.phone == "+1 (555) 123-4567"


@pytest.mark.parametrize("phone", [None, "", "   "])
def test_missing_or_blank_phone_is_not_provided(phone):
    payload = {"email": "a@x.com", "name": "Alice"}
    if phone is not None:
        payload["phone"] = phone
    assert validate_registration(payload).phone is None


@pytest.mark.parametrize("length", [1, 100])
def test_name_length_boundaries_pass(length):
    assert validate_registration({"email": "a@x.com", "name": "n" * length}).name == "n" * length


@pytest.mark.parametrize("name,message", [
    ("", NAME_REQUIRED),
    ("    ", NAME_REQUIRED),
    (None, NAME_REQUIRED),
    ("n" * 101, NAME_LENGTH),
])
def test_name_failures(name, message):
    with pytest.raises(ValidationError) as exc:
        validate_registration({"email": "a@x.com", "name": name})
    assert exc.value.message == message


@pytest.mark.parametrize("email", ["bad-email", "", "a@", "@x.com", "a b@x.com", None, 42])
def test_invalid_email(email):
    with pytest.raises(ValidationError) as exc:
        validate_registration({"email": email, "name": "Bob"})
    assert exc.value.message == INVALID_EMAIL


def test_phone_with_letters_is_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_registration({"email": "a@x.com", "name": "Bob", "phone": "call me"})
    assert exc.value.message == INVALID_PHONE


def test_phone_exactly_twenty_characters_passes():
    assert validate_registration({"email": "a@x.com", "name": "Bob", "phone": "1" * 20}).phone == "1" * 20


def test_phone_can_fail_both_rules():
    with pytest.raises(ValidationError) as exc:
        validate_registration({"email": "a@x.com", "name": "Bob", "phone": "x" * 21})
    assert exc.value.message == f"{PHONE_LENGTH}, {INVALID_PHONE}"


def test_all_violations_reported_in_one_message():
    with pytest.raises(ValidationError) as exc:
        validate_registration({"email": "nope", "name": " ", "phone": "abc"})
    assert exc.value.message == f"{INVALID_EMAIL}, {NAME_REQUIRED}, {INVALID_PHONE}"


def test_empty_name_and_bad_phone_both_reported():
    with pytest.raises(ValidationError) as exc:
        validate_registration({"email": "a@x.com", "name": "", "phone": "12ab"})
    assert NAME_REQUIRED in exc.value.message
    assert INVALID_PHONE in exc.value.message


@pytest.mark.parametrize("phone", ["١٢٣٤٥", "０１２３４", "555 ０１"])
def test_phone_accepts_ascii_digits_only(phone):
    with pytest.raises(ValidationError) as exc:
        validate_registration({"email": "a@x.com", "name": "Bob", "phone": phone})
    assert exc.value.message == INVALID_PHONE
