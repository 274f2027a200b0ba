import pytest

from photobooth.shared.validators import (
    format_phone_while_typing,
    generate_secure_password,
    is_valid_email,
    validate_email_strict,
    validate_password,
    validate_phone_strict,
)


def test_strict_phone_formats_national_number():
    result = validate_phone_strict("0612345678")
    assert result.is_valid
    assert result.formatted == "06 12 34 56 78"


def test_strict_phone_formats_international_number():
    result = validate_phone_strict("+33612345678")
    assert result.is_valid
    assert result.formatted == "+33 6 12 34 56 78"


def test_strict_phone_ignores_separators():
    result = validate_phone_strict("06.12.34-56 (78)")
    assert result.is_valid
    assert result.formatted == "06 12 34 56 78"


@pytest.mark.parametrize(
    "phone",
    ["123456", "0012345678", "061234567", "+330612345678", "+3361234567", "", "   "],
)
def test_strict_phone_rejects(phone):
    result = validate_phone_strict(phone)
    assert not result.is_valid
    assert result.error
    assert result.formatted is None


def test_format_while_typing_groups_digits():
    assert format_phone_while_typing("061234") == "06 12 34"
    assert format_phone_while_typing("+336123") == "+33 6 12 3"
    assert format_phone_while_typing("abc") == "abc"


@pytest.mark.parametrize(
    "email",
    ["marie.dupont@gmail.com", "Jean.Martin@Outlook.fr", "contact@photomariage.fr", "paul.durand@agence-photo.eu"],
)
def test_strict_email_accepts(email):
    assert validate_email_strict(email).is_valid


@pytest.mark.parametrize(
    "email",
    [
        "test@test.com",
        "admin@admin.fr",
        "demo@demo.org",
        "john@gmail.com",
        "someone@testmail.com",
        "someone@abc.com",
        "someone@12345.fr",
        "someone@domain.xyz",
        "not-an-email",
        "",
    ],
)
def test_strict_email_rejects(email):
    result = validate_email_strict(email)
    assert not result.is_valid
    assert result.error


def test_password_strength_feedback():
    weak = validate_password("abc1")
    assert weak.score == 2
    assert not weak.is_valid
    assert "Au moins 8 caractères" in weak.feedback

    strong = validate_password("Photo!Booth2026")
    assert strong.score == 5
    assert strong.is_valid


def test_generated_password_is_always_strong():
    for _ in range(50):
        password = generate_secure_password()
        assert len(password) == 12
        assert validate_password(password).is_valid


@pytest.mark.parametrize(
    "email",
    ["marie.dupont@gmail.com\n", "marie dupont@gmail.com", "marie@gmail", "@gmail.com", ""],
)
def test_basic_email_rejects(email):
    assert not is_valid_email(email)


def test_basic_email_accepts_plain_address():
    assert is_valid_email("john@example.com")
