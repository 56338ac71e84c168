import datetime
from hmac import compare_digest
from typing import Any, Union
from urllib.parse import quote

from .exceptions import InvalidArgumentError

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
MICROSECONDS_PER_SECOND = 1_000_000

Instant = Union[datetime.datetime, int, float]
Duration = Union[datetime.timedelta, int, float]


def build_uri(
    secret: str,
    issuer: str,
    account_name: str,
    prefix_account_name_with_issuer: bool = True,
) -> str:
    # -> "otpauth://totp/GitHub:alice%40gmail.com?secret=GEZDGNBVGY&issuer=GitHub"
    """
    Returns the provisioning URI for a TOTP secret.

    This can then be encoded in a QR Code and used to provision an
    authenticator app.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the Base32 form of the secret
    :param issuer: the name of the issuer; this will be the organization
        title of the entry in the authenticator
    :param account_name: name of the account
    :param prefix_account_name_with_issuer: label the entry "issuer:account"
        rather than just "account"
    :returns: provisioning uri
    """
    require_not_blank(issuer, "issuer")
    require_not_blank(account_name, "account_name")
    # The label separator is a colon, so neither half may contain one.
    if ":" in issuer:
        raise InvalidArgumentError("issuer contains a colon, which is not allowed", "issuer")
    if ":" in account_name:
        raise InvalidArgumentError("account_name contains a colon, which is not allowed", "account_name")

    # safe="" escapes everything but the RFC 3986 unreserved set, "/" included
    issuer_escaped = quote(issuer, safe="")
    label = quote(account_name, safe="")
    if prefix_account_name_with_issuer:
        label = issuer_escaped + ":" + label

    return "otpauth://totp/{0}?secret={1}&issuer={2}".format(label, secret, issuer_escaped)


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant, case-insensitive string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    # ordinal ignore-case; fullwidth or superscript digits stay distinct
    return compare_digest(s1.upper().encode("utf-8"), s2.upper().encode("utf-8"))


def require_not_blank(value: Any, argument_name: str) -> None:
    """
    Raises InvalidArgumentError when value is None, empty, or (for text)
    whitespace only.
    """
    if value is None or len(value) == 0:
        raise InvalidArgumentError.empty(argument_name)
    if isinstance(value, str) and not value.strip():
        raise InvalidArgumentError.empty(argument_name)


def to_microseconds(for_time: Instant) -> int:
    """
    Converts an instant to whole microseconds since the Unix epoch.

    Naive datetimes are read as local time. Numbers are Unix timestamps in
    seconds.
    """
    if isinstance(for_time, datetime.datetime):
        if not for_time.tzinfo:
            for_time = for_time.astimezone()
        return (for_time - EPOCH) // datetime.timedelta(microseconds=1)
    return round(for_time * MICROSECONDS_PER_SECOND)


def to_duration(value: Duration) -> datetime.timedelta:
    """
    Accepts a timedelta or a number of seconds.
    """
    if isinstance(value, datetime.timedelta):
        return value
    return datetime.timedelta(seconds=value)
