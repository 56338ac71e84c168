import datetime

import pytest

from simpletotp import utils
from simpletotp.exceptions import InvalidArgumentError, SimpleTotpError


def test_strings_equal_ignores_case():
    assert utils.strings_equal("abc123", "ABC123")
    assert not utils.strings_equal("abc123", "abc124")
    assert not utils.strings_equal("abc", "abcd")


def test_strings_equal_does_not_fold_compatibility_characters():
    assert not utils.strings_equal("３１６６４７", "316647")
    assert not utils.strings_equal("³¹⁶⁶⁴⁷", "316647")


def test_require_not_blank_reports_argument_name():
    with pytest.raises(InvalidArgumentError) as excinfo:
        utils.require_not_blank("  ", "secret_key")

    assert excinfo.value.argument_name == "secret_key"
    assert str(excinfo.value) == "Provided secret_key is empty"
    assert isinstance(excinfo.value, SimpleTotpError)
    assert isinstance(excinfo.value, ValueError)


def test_require_not_blank_accepts_text_and_bytes():
    utils.require_not_blank("test", "value")
    utils.require_not_blank(b" ", "value")


def test_to_microseconds():
    aware = datetime.datetime(1970, 1, 1, 0, 0, 1, 500, tzinfo=datetime.timezone.utc)

    assert utils.to_microseconds(aware) == 1_000_500
    assert utils.to_microseconds(1.5) == 1_500_000
    assert utils.to_microseconds(30) == 30_000_000


def test_to_microseconds_reads_naive_datetime_as_local_time():
    naive = datetime.datetime(2019, 9, 16, 15, 40, 45)

    assert utils.to_microseconds(naive) == round(naive.timestamp() * 1_000_000)


def test_to_duration():
    assert utils.to_duration(60) == datetime.timedelta(seconds=60)
    assert utils.to_duration(datetime.timedelta(minutes=1)) == datetime.timedelta(seconds=60)


def test_build_uri_rejects_colons():
    with pytest.raises(InvalidArgumentError) as excinfo:
        utils.build_uri("GEZDGNBVGY", "ISS:UER", "ACCOUNT")

    assert excinfo.value.argument_name == "issuer"
