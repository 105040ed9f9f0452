from models import Schedule
from ordering import bucket_by_status, for_day, order, order_past
from time_of_day import TimeOfDay


def _schedule(schedule_id: int, start: str, end: str, day: str = "Wednesday") -> Schedule:
    return Schedule(
        id=schedule_id,
        day=day,
        start_time=TimeOfDay.parse(start),
        end_time=TimeOfDay.parse(end),
        grade="Grade 9",
        curriculum="Edexcel",
    )


NOW = TimeOfDay.parse("10:30")


def test_active_first_then_by_start():
    ended = _schedule(1, "09:00", "09:45")
    active = _schedule(2, "10:00", "10:50")
    upcoming = _schedule(3, "11:00", "11:45")
    ordered = order([upcoming, ended, active], NOW)
    assert [item.id for item in ordered] == [2, 1, 3]
    non_past = [item for item in ordered if item is not ended]
    assert [item.start_time.format24h() for item in non_past] == ["10:00", "11:00"]


def test_past_list_is_most_recent_first():
    first = _schedule(1, "07:00", "07:45")
    second = _schedule(2, "08:00", "08:45")
    active = _schedule(3, "10:00", "11:00")
    assert [item.id for item in order_past([first, active, second], NOW)] == [2, 1]


def test_ties_keep_input_order():
    a = _schedule(1, "11:00", "11:30")
    b = _schedule(2, "11:00", "12:00")
    c = _schedule(3, "11:00", "11:45")
    assert [item.id for item in order([b, a, c], NOW)] == [2, 1, 3]
    p = _schedule(4, "08:00", "09:00")
    q = _schedule(5, "08:00", "08:30")
    assert [item.id for item in order_past([q, p], NOW)] == [5, 4]


def test_ordering_is_repeatable():
    items = [_schedule(i, f"{8 + i % 4}:00", f"{8 + i % 4}:30") for i in range(8)]
    assert order(items, NOW) == order(items, NOW)


def test_bucket_by_status():
    items = [
        _schedule(1, "09:00", "09:45"),
        _schedule(2, "10:00", "10:50"),
        _schedule(3, "11:00", "11:45"),
        _schedule(4, "10:30", "12:00"),
        _schedule(5, "08:00", "08:45"),
    ]
    buckets = bucket_by_status(items, NOW)
    assert [item.id for item in buckets.active] == [2, 4]
    assert [item.id for item in buckets.upcoming] == [3]
    assert [item.id for item in buckets.past] == [1, 5]


def test_for_day_filters_weekday():
    items = [_schedule(1, "09:00", "10:00"), _schedule(2, "09:00", "10:00", day="Friday")]
    assert [item.id for item in for_day(items, "Friday")] == [2]
