import pytest

from app.core.constants import REQUIRED_FIELDS
from app.services.validation_service import (
    validate_form,
    is_valid_email,
    is_valid_phone,
    normalize_phone,
)


def test_valid_form_has_no_errors(valid_details):
    assert validate_form(valid_details) == {}


def test_empty_form_flags_every_required_field():
    errors = validate_form({})
    assert set(errors) == set(REQUIRED_FIELDS)
    assert all(msg == "This field is required" for msg in errors.values())


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
def test_missing_field_is_reported(valid_details, field):
    del valid_details[field]
    errors = validate_form(valid_details)
    assert errors == {field: "This field is required"}


@pytest.mark.parametrize("field", ["fullName", "gender", "chooseBCA"])
def test_blank_or_none_counts_as_missing(valid_details, field):
    valid_details[field] = ""
    assert field in validate_form(valid_details)
    valid_details[field] = None
    assert field in validate_form(valid_details)


@pytest.mark.parametrize("phone", [
    "9876543210",
    "98765 43210",
    "(987) 654-3210",
    "987-654-3210",
    "98.76.54.32.10",
])
def test_ten_digit_phones_with_separators_pass(valid_details, phone):
    valid_details["phone"] = phone
    assert validate_form(valid_details) == {}


@pytest.mark.parametrize("phone", [
    "987654321",
    "98765432101",
    "+91 98765 43210",
    "phone",
    "12-34",
])
def test_phone_without_exactly_ten_digits_is_rejected(valid_details, phone):
    valid_details["phone"] = phone
    assert validate_form(valid_details) == {"phone": "Please enter a valid 10-digit phone number"}


@pytest.mark.parametrize("email", [
    "plainaddress",
    "missing-at.example.com",
    "no-tld@example",
    "two@@example.com",
    "space in@example.com",
    "@example.com",
    "user@.com ",
    "a@b.c\n",
    "a@b.c\nx@y.z",
])
def test_malformed_email_is_rejected(valid_details, email):
    valid_details["email"] = email
    assert validate_form(valid_details) == {"email": "Please enter a valid email address"}


@pytest.mark.parametrize("email", [
    "a@b.c",
    "first.last@college.ac.in",
    "x+tag@mail.example.org",
])
def test_well_formed_email_passes(email):
    assert is_valid_email(email)


def test_format_errors_combine_with_required_errors():
    errors = validate_form({"email": "bad", "phone": "123"})
    assert errors["email"] == "Please enter a valid email address"
    assert errors["phone"] == "Please enter a valid 10-digit phone number"
    assert errors["fullName"] == "This field is required"


def test_phone_helpers():
    assert normalize_phone("(987) 654-3210") == "9876543210"
    assert is_valid_phone("987 654 3210")
    assert not is_valid_phone("")
