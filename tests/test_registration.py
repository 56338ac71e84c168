import pytest

from simpletotp import base32
from simpletotp.exceptions import InvalidArgumentError
from simpletotp.registration import (
    RegistrationData,
    get_authenticator_registration_data,
    get_base32_encoded_secret_key,
    get_register_uri_for_qr_code,
    random_secret,
)

BLANK = [None, "", "   ", "\t"]


@pytest.mark.parametrize("account_name", BLANK)
def test_blank_account_name(account_name):
    with pytest.raises(InvalidArgumentError) as excinfo:
        get_authenticator_registration_data(account_name, "ISSUER")

    assert excinfo.value.argument_name == "account_name"


@pytest.mark.parametrize("issuer", BLANK)
def test_blank_issuer(issuer):
    with pytest.raises(InvalidArgumentError) as excinfo:
        get_authenticator_registration_data("ACCOUNTNAME", issuer)

    assert excinfo.value.argument_name == "issuer"


def test_account_name_with_colon():
    with pytest.raises(InvalidArgumentError):
        get_authenticator_registration_data("ACCOUNT:NAME", "ISSUER")


def test_issuer_with_colon():
    with pytest.raises(InvalidArgumentError):
        get_authenticator_registration_data("ACCOUNTNAME", "ISS:UER")


@pytest.mark.parametrize("secret_key", BLANK)
def test_blank_secret_is_generated(secret_key):
    result = get_authenticator_registration_data("ACCOUNT_NAME", "ISSUER", secret_key)

    assert result.secret_key.strip()
    assert base32.decode(result.manual_registration_key) == result.secret_key.encode("utf-8")


@pytest.mark.parametrize(
    "secret_key, expected",
    [
        ("12345", "GEZDGNBV"),
        ("123456", "GEZDGNBVGY"),
        ("1234567", "GEZDGNBVGY3Q"),
        ("12345678", "GEZDGNBVGY3TQ"),
        ("123456789", "GEZDGNBVGY3TQOI"),
        ("1234567890", "GEZDGNBVGY3TQOJQ"),
    ],
)
def test_manual_registration_key(secret_key, expected):
    result = get_authenticator_registration_data("ACCOUNT_NAME", "ISSUER", secret_key)

    assert result.manual_registration_key == expected


@pytest.mark.parametrize(
    "issuer, account_name, prefix, expected",
    [
        (
            "ISSUER",
            "ACCOUNT_NAME",
            True,
            "otpauth://totp/ISSUER:ACCOUNT_NAME?secret=GEZDGNBVGY&issuer=ISSUER",
        ),
        (
            "ISSUER(TEST#ME%)",
            "ACCOUNT&NAME(%3A)",
            True,
            "otpauth://totp/ISSUER%28TEST%23ME%25%29:ACCOUNT%26NAME%28%253A%29"
            "?secret=GEZDGNBVGY&issuer=ISSUER%28TEST%23ME%25%29",
        ),
        (
            "ISSUER",
            "ACCOUNT_NAME",
            False,
            "otpauth://totp/ACCOUNT_NAME?secret=GEZDGNBVGY&issuer=ISSUER",
        ),
        (
            "ISSUER(TEST#ME%)",
            "ACCOUNT&NAME(%3A)",
            False,
            "otpauth://totp/ACCOUNT%26NAME%28%253A%29?secret=GEZDGNBVGY&issuer=ISSUER%28TEST%23ME%25%29",
        ),
    ],
)
def test_registration_data(issuer, account_name, prefix, expected):
    result = get_authenticator_registration_data(account_name, issuer, "123456", prefix)

    assert result == RegistrationData(
        secret_key="123456",
        manual_registration_key="GEZDGNBVGY",
        issuer=issuer,
        account_name=account_name,
        qr_code_uri=expected,
    )


def test_register_uri_escapes_slash_and_space():
    uri = get_register_uri_for_qr_code("123456", "ACME Corp", "alice/bob@example.com")

    assert uri == "otpauth://totp/ACME%20Corp:alice%2Fbob%40example.com?secret=GEZDGNBVGY&issuer=ACME%20Corp"


def test_registration_data_is_immutable():
    result = get_authenticator_registration_data("ACCOUNT_NAME", "ISSUER", "123456")

    with pytest.raises(AttributeError):
        result.secret_key = "other"


@pytest.mark.parametrize("secret_key", BLANK)
def test_base32_encoded_secret_key_rejects_blank(secret_key):
    with pytest.raises(InvalidArgumentError):
        get_base32_encoded_secret_key(secret_key)


def test_random_secret():
    first = random_secret()

    assert len(first) == 32
    assert set(first) <= set(base32.ALPHABET)
    assert first != random_secret()


def test_random_secret_minimum_length():
    with pytest.raises(ValueError):
        random_secret(16)
