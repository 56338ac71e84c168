"""
Everything needed to enrol an account in an authenticator app.

Given an account name and an issuer, ``get_authenticator_registration_data``
returns the secret to keep server-side, its Base32 form for manual entry and
the ``otpauth://`` URI to render as a QR code. Storing the secret and drawing
the QR code are left to the caller.
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from . import base32, utils
from .totp import TOTP

logger = logging.getLogger(__name__)

_random = random.SystemRandom()


@dataclass(frozen=True)
class RegistrationData:
    # the raw secret; needed again to validate codes, so only reversible
    # encryption can be applied when persisting it
    secret_key: str
    # Base32, what a user types into an authenticator by hand
    manual_registration_key: str
    issuer: str
    account_name: str
    qr_code_uri: str


def random_secret(length: int = 32, chars: Sequence[str] = base32.ALPHABET) -> str:
    if length < 32:
        raise ValueError("Secrets should be at least 32 characters long")

    return "".join(_random.choice(chars) for _ in range(length))


def get_base32_encoded_secret_key(secret_key: str) -> str:
    """
    Base32 (unpadded) form of a secret, as authenticator apps expect it.
    """
    utils.require_not_blank(secret_key, "secret_key")
    return base32.encode(secret_key.encode("utf-8"), apply_padding=False)


def get_register_uri_for_qr_code(
    secret_key: str,
    issuer: str,
    account_name: str,
    prefix_account_name_with_issuer: bool = True,
) -> str:
    return TOTP(secret_key, issuer=issuer, name=account_name).provisioning_uri(
        prefix_account_name_with_issuer=prefix_account_name_with_issuer
    )


def get_authenticator_registration_data(
    account_name: str,
    issuer: str,
    secret_key: Optional[str] = None,
    prefix_account_name_with_issuer: bool = True,
) -> RegistrationData:
    """
    Collects the data required for a user to add an account to a TOTP
    authenticator.

    :param account_name: name of the account; only shown to the user
    :param issuer: issuer of the secret; only shown to the user
    :param secret_key: the user's secret; generated when missing or blank
    :param prefix_account_name_with_issuer: label the entry "issuer:account"
        in the QR code URI (recommended)
    :returns: RegistrationData
    """
    utils.require_not_blank(account_name, "account_name")
    utils.require_not_blank(issuer, "issuer")

    if secret_key is None or not secret_key.strip():
        logger.debug("No secret supplied for %r, generating one", account_name)
        secret_key = random_secret()

    return RegistrationData(
        secret_key=secret_key,
        manual_registration_key=get_base32_encoded_secret_key(secret_key),
        issuer=issuer,
        account_name=account_name,
        qr_code_uri=get_register_uri_for_qr_code(
            secret_key, issuer, account_name, prefix_account_name_with_issuer
        ),
    )
