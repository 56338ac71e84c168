import datetime
from typing import Optional, Tuple, Union

from . import base32
from .exceptions import InvalidArgumentError as InvalidArgumentError
from .exceptions import InvalidEncodingError as InvalidEncodingError
from .exceptions import OutOfRangeError as OutOfRangeError
from .exceptions import SimpleTotpError as SimpleTotpError
from .hotp import HOTP as HOTP
from .otp import OTP as OTP
from .registration import RegistrationData as RegistrationData
from .registration import get_authenticator_registration_data as get_authenticator_registration_data
from .registration import get_base32_encoded_secret_key as get_base32_encoded_secret_key
from .registration import get_register_uri_for_qr_code as get_register_uri_for_qr_code
from .registration import random_secret as random_secret
from .totp import TOTP as TOTP
from .utils import Duration, Instant


def encode_base32(data: Optional[bytes], apply_padding: bool = True) -> Optional[str]:
    return base32.encode(data, apply_padding=apply_padding)


def decode_base32(text: Optional[str]) -> Optional[bytes]:
    return base32.decode(text)


def get_code(secret_key: Union[str, bytes], instant: Instant) -> Tuple[str, datetime.timedelta]:
    """
    Gets the TOTP code for a secret at a given time.

    :param secret_key: the user's secret key
    :param instant: time to generate the code for, after the Unix epoch
    :returns: (code, time left before the code changes)
    """
    return TOTP(secret_key).get_code(instant)


def validate_code(
    secret_key: Union[str, bytes],
    code: str,
    instant: Instant,
    past_tolerance: Optional[Duration] = None,
    future_tolerance: Optional[Duration] = None,
    tolerance: Optional[Duration] = None,
) -> bool:
    """
    Checks a code against every code valid in the window
    ``[instant - past_tolerance, instant + future_tolerance]``.

    With no tolerance given, 60 seconds either way are accepted; ``tolerance``
    alone sets both sides.
    """
    return TOTP(secret_key).verify(
        code,
        for_time=instant,
        tolerance=tolerance,
        past_tolerance=past_tolerance,
        future_tolerance=future_tolerance,
    )
