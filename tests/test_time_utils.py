from datetime import date, datetime, timezone

import pytest

from errors import InvalidFormat
from time_utils import date_tag, get_local_tz, now_local, validate_date_tag, weekday_name


def test_date_tag_has_no_zero_padding():
    assert date_tag(date(2024, 6, 2)) == "6/2"
    assert date_tag(datetime(2024, 12, 25, 8, 0)) == "12/25"


def test_validate_date_tag():
    assert validate_date_tag(" 6/12 ") == "6/12"
    for bad in ("2024-06-12", "6-12", "", "june/12"):
        with pytest.raises(InvalidFormat):
            validate_date_tag(bad)


def test_weekday_name_is_english():
    assert weekday_name(date(2024, 6, 12)) == "Wednesday"
    assert weekday_name(date(2024, 6, 16)) == "Sunday"


def test_local_tz_falls_back_to_utc_for_unknown_zone():
    assert get_local_tz("Not/AZone") is timezone.utc


def test_now_local_is_aware():
    assert now_local(timezone.utc).tzinfo is not None


def test_validate_date_tag_rejects_non_ascii_digits():
    with pytest.raises(InvalidFormat):
        validate_date_tag("٦/١٢")
