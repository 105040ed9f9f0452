import pytest

from cancellations import is_canceled, with_cancellation
from errors import InvalidFormat
from models import Schedule
from time_of_day import TimeOfDay


def _schedule(**overrides) -> Schedule:
    fields = dict(
        id=1,
        day="Wednesday",
        start_time=TimeOfDay.parse("09:00"),
        end_time=TimeOfDay.parse("10:00"),
        grade="Grade 9",
        curriculum="Edexcel",
        date_tag="6/1",
    )
    fields.update(overrides)
    return Schedule(**fields)


def test_cancel_same_day_twice_keeps_one_tag():
    schedule = _schedule()
    once = with_cancellation(schedule, "6/12")
    twice = with_cancellation(once, "6/12")
    assert twice.canceled_dates == ("6/12",)
    assert twice == once


def test_cancellation_returns_new_record():
    schedule = _schedule(canceled_dates=("6/5",))
    canceled = with_cancellation(schedule, "6/12")
    assert schedule.canceled_dates == ("6/5",)
    assert canceled.canceled_dates == ("6/5", "6/12")
    assert canceled.date_tag == "6/1"


def test_is_canceled_matches_exact_tag_only():
    schedule = _schedule(canceled_dates=("6/12",))
    assert is_canceled(schedule, "6/12")
    assert not is_canceled(schedule, "6/1")


def test_creation_tag_is_not_a_cancellation():
    assert not is_canceled(_schedule(date_tag="6/12"), "6/12")


def test_malformed_tag_is_rejected():
    with pytest.raises(InvalidFormat):
        with_cancellation(_schedule(), "2024-06-12")


def test_duplicate_tags_from_storage_are_collapsed():
    schedule = _schedule(canceled_dates=["6/12", "6/12", "6/19"])
    assert schedule.canceled_dates == ("6/12", "6/19")


def test_lookup_normalises_tag_like_cancellation():
    canceled = with_cancellation(_schedule(), " 6/12")
    assert is_canceled(canceled, " 6/12")
    assert is_canceled(canceled, "6/12 ")
