from typing import Optional, Union

from . import utils
from .otp import DEFAULT_DIGITS, OTP


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.
    """

    def __init__(
        self,
        s: Union[str, bytes],
        digits: int = DEFAULT_DIGITS,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
        initial_count: int = 0,
    ) -> None:
        """
        :param s: the secret key, raw bytes or text (used as UTF-8)
        :param initial_count: starting HMAC counter value, defaults to 0
        :param digits: number of integers in the OTP
        :param name: account name
        :param issuer: issuer
        """
        self.initial_count = initial_count
        super().__init__(s=s, digits=digits, name=name, issuer=issuer)

    def at(self, count: int) -> str:
        """
        Generates the OTP for the given count.

        :param count: the OTP HMAC counter
        :returns: OTP
        """
        return self.generate_otp(self.initial_count + count)

    # hotp = HOTP(b"12345678901234567890")
    # hotp.at(0) -> "755224"
    # hotp.at(1) -> "287082"

    def verify(self, otp: str, counter: int) -> bool:
        """
        Verifies the OTP passed in against the current counter OTP.

        :param otp: the OTP to check against
        :param counter: the OTP HMAC counter
        """
        if otp is not None:
            otp = str(otp)
        utils.require_not_blank(otp, "code")
        return utils.strings_equal(otp, self.at(counter))
