import datetime
import logging
import time
from typing import Iterator, Optional, Tuple, Union

from . import base32, utils
from .exceptions import InvalidArgumentError, OutOfRangeError
from .otp import DEFAULT_DIGITS, OTP

DEFAULT_INTERVAL = 30
DEFAULT_TOLERANCE = datetime.timedelta(seconds=60)

logger = logging.getLogger(__name__)


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(
        self,
        s: Union[str, bytes],
        digits: int = DEFAULT_DIGITS,
        interval: int = DEFAULT_INTERVAL,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
    ) -> None:
        """
        :param s: the secret key, raw bytes or text (used as UTF-8)
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        :param name: account name
        :param issuer: issuer
        """
        if interval <= 0:
            raise InvalidArgumentError("interval must be a positive number of seconds", "interval")
        self.interval = interval
        super().__init__(s=s, digits=digits, name=name, issuer=issuer)

    def at(self, for_time: utils.Instant) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time))

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at(time.time())

    def get_code(self, for_time: Optional[utils.Instant] = None) -> Tuple[str, datetime.timedelta]:
        """
        Generates the OTP for a point in time together with how long it
        stays current.

        :param for_time: time to generate the OTP for, defaults to now
        :returns: (OTP, time left before the OTP changes)
        """
        if for_time is None:
            for_time = time.time()
        return self.at(for_time), self.remaining(for_time)

    def remaining(self, for_time: utils.Instant) -> datetime.timedelta:
        """
        Time left until the counter, and so the OTP, rolls over.
        """
        period = self._period()
        return datetime.timedelta(microseconds=period - utils.to_microseconds(for_time) % period)

    def valid_codes(
        self,
        for_time: utils.Instant,
        past_tolerance: utils.Duration = DEFAULT_TOLERANCE,
        future_tolerance: utils.Duration = DEFAULT_TOLERANCE,
    ) -> Iterator[str]:
        """
        Lists every OTP accepted around a point in time, oldest first.

        The window covers the counters of ``for_time - past_tolerance``
        through ``for_time + future_tolerance``, both ends included.

        :param for_time: the reference time
        :param past_tolerance: how far back to accept codes (timedelta or seconds)
        :param future_tolerance: how far ahead to accept codes (timedelta or seconds)
        :returns: iterator of OTP values in ascending counter order
        """
        past = self._tolerance(past_tolerance, "past_tolerance")
        future = self._tolerance(future_tolerance, "future_tolerance")
        elapsed = utils.to_microseconds(for_time)

        first = self._counter(elapsed - past)
        last = self._counter(elapsed + future)
        logger.debug("Checking TOTP window of counters %d..%d", first, last)
        return (self.generate_otp(counter) for counter in range(first, last + 1))

    def verify(
        self,
        otp: str,
        for_time: Optional[utils.Instant] = None,
        tolerance: Optional[utils.Duration] = None,
        past_tolerance: Optional[utils.Duration] = None,
        future_tolerance: Optional[utils.Duration] = None,
    ) -> bool:
        """
        Verifies the OTP passed in against the OTPs around a point in time.

        :param otp: the OTP to check against
        :param for_time: time to check the OTP at (defaults to now)
        :param tolerance: accepted drift on both sides, defaults to 60 seconds
        :param past_tolerance: accepted drift into the past, overrides tolerance
        :param future_tolerance: accepted drift into the future, overrides tolerance
        :returns: True if verification succeeded, False otherwise
        """
        if otp is not None:
            otp = str(otp)
        utils.require_not_blank(otp, "code")

        if for_time is None:
            for_time = time.time()
        if tolerance is None:
            tolerance = DEFAULT_TOLERANCE
        if past_tolerance is None:
            past_tolerance = tolerance
        if future_tolerance is None:
            future_tolerance = tolerance

        return any(
            utils.strings_equal(otp, code)
            for code in self.valid_codes(for_time, past_tolerance, future_tolerance)
        )

    def provisioning_uri(
        self,
        name: Optional[str] = None,
        issuer_name: Optional[str] = None,
        prefix_account_name_with_issuer: bool = True,
    ) -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        See also:
            https://github.com/google/google-authenticator/wiki/Key-Uri-Format

        :param name: name of the user account
        :param issuer_name: the name of the OTP issuer; this will be the
            organization title of the OTP entry in Authenticator
        :param prefix_account_name_with_issuer: label the entry "issuer:name"
        :returns: provisioning URI
        """
        return utils.build_uri(
            base32.encode(self.byte_secret(), apply_padding=False),
            issuer=issuer_name if issuer_name else self.issuer,
            account_name=name if name else self.name,
            prefix_account_name_with_issuer=prefix_account_name_with_issuer,
        )

    def timecode(self, for_time: utils.Instant) -> int:
        """
        Accepts either a timezone naive (local time) or aware `for_time`,
        or a Unix timestamp, and returns the number of whole intervals
        since the Unix epoch.
        """
        return self._counter(utils.to_microseconds(for_time))

    def _counter(self, elapsed: int) -> int:
        # elapsed is in microseconds since the epoch
        if elapsed <= 0:
            raise OutOfRangeError("time must be after the Unix epoch")
        return elapsed // self._period()

    def _period(self) -> int:
        return round(self.interval * utils.MICROSECONDS_PER_SECOND)

    @staticmethod
    def _tolerance(value: utils.Duration, argument_name: str) -> int:
        duration = utils.to_duration(value)
        if duration < datetime.timedelta(0):
            raise InvalidArgumentError("{} must not be negative".format(argument_name), argument_name)
        return duration // datetime.timedelta(microseconds=1)
