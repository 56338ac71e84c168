import hashlib
import hmac
from typing import Optional, Union

from . import utils
from .exceptions import InvalidArgumentError, OutOfRangeError

DEFAULT_DIGITS = 6
MAX_COUNTER = 2**64 - 1

# OTP (base class)


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(
        self,
        s: Union[str, bytes],
        digits: int = DEFAULT_DIGITS,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
    ) -> None:
        """
        :param s: the secret key, raw bytes or text (used as UTF-8)
        :param digits: number of integers in the OTP
        :param name: account name
        :param issuer: issuer
        """
        utils.require_not_blank(s, "secret_key")
        if not 1 <= digits <= 10:
            raise InvalidArgumentError("digits must be between 1 and 10", "digits")
        self.digits = digits
        self.secret = s
        self.name = name
        self.issuer = issuer

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        # Implements RFC 4226

        if input < 0 or input > MAX_COUNTER:
            raise OutOfRangeError("input must be an unsigned 64-bit integer")
        # hmac objects carry state, so one is built per call
        hasher = hmac.new(self.byte_secret(), self.int_to_bytestring(input), hashlib.sha1)
        hmac_hash = bytearray(hasher.digest())
        # Dynamic truncation: the low nibble of the last byte (0..15) picks
        # where the 4 bytes start; 0x7F drops the top bit so the value is a
        # non-negative 31-bit integer.
        offset = hmac_hash[-1] & 0xF
        code = (
            (hmac_hash[offset] & 0x7F) << 24
            | (hmac_hash[offset + 1] & 0xFF) << 16
            | (hmac_hash[offset + 2] & 0xFF) << 8
            | (hmac_hash[offset + 3] & 0xFF)
        )
        # 1284755224 % 10**6 = 755224
        return str(code % 10**self.digits).rjust(self.digits, "0")

    def byte_secret(self) -> bytes:
        # "123456" -> b"123456"; the key is used as-is, never Base32-decoded
        if isinstance(self.secret, str):
            return self.secret.encode("utf-8")
        return bytes(self.secret)

    @staticmethod
    def int_to_bytestring(i: int, padding: int = 8) -> bytes:
        """
        Turns an integer to the OATH specified
        bytestring, which is fed to the HMAC
        along with the secret
        """
        # 12345 -> b"\x00\x00\x00\x00\x00\x00\x30\x39"
        return i.to_bytes(padding, "big")
