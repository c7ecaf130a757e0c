"""Tests for TimeRule."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from flex_equality import TimeRule, check
from flex_equality.rules.time import is_instant

NOW = datetime.now(UTC)
NOT_UTC = timezone(timedelta(hours=-7), "PDT")


class TestTimeApplicability:
    """Test which pairs the time rule applies to."""

    def test_datetimes_apply(self):
        """Two datetimes satisfy the rule, naive or aware."""
        rule = TimeRule()
        assert rule.applies(NOW, NOW.astimezone(NOT_UTC))
        assert rule.applies(datetime(2020, 1, 1), datetime(2020, 1, 1))  # noqa: DTZ001

    @pytest.mark.parametrize('value', [date(2020, 1, 1), timedelta(seconds=1), '2020-01-01', 0])
    def test_other_values_do_not_apply(self, value):
        """Dates, durations and strings are not instants."""
        assert not is_instant(value)
        assert not TimeRule().applies(NOW, value)


class TestTimeEquality:
    """Test instant-based equality."""

    def test_same_instant_in_different_zones(self):
        """The display zone does not matter."""
        assert TimeRule().are_equal(NOW.astimezone(NOT_UTC), NOW)
        assert TimeRule().are_equal(NOW, NOW.astimezone(timezone(timedelta(hours=5, minutes=30))))

    def test_one_microsecond_apart(self):
        """The smallest representable difference makes the instants unequal."""
        assert not TimeRule().are_equal(NOW.astimezone(NOT_UTC), NOW + timedelta(microseconds=1))

    def test_naive_and_aware_are_unequal(self):
        """A naive datetime has no instant to compare against."""
        naive = NOW.replace(tzinfo=None)
        assert not TimeRule().are_equal(naive, NOW)

    def test_naive_wall_clock(self):
        """Naive datetimes compare by wall clock."""
        assert TimeRule().are_equal(datetime(2020, 9, 18, 13, 24), datetime(2020, 9, 18, 13, 24))  # noqa: DTZ001


class TestTimeThroughEngine:
    """Test the time rule as part of the default rule set."""

    def test_zones_are_ignored(self):
        """check() accepts the same instant displayed in another zone."""
        assert check(NOW.astimezone(NOT_UTC), NOW)
        assert not check(NOW.astimezone(NOT_UTC), NOW + timedelta(microseconds=1))

    def test_nested_datetimes_are_compared_structurally(self):
        """Inside containers the zone is part of the structure."""
        assert check([NOW], [NOW])
        assert not check([NOW.astimezone(NOT_UTC)], [NOW])
