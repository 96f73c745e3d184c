"""
Tests for anniversary resolution.

Covers:
- Last/next anniversary around the reference date
- Completed years
- February 29 hire normalization
- Reference dates before the hire date
"""

from datetime import date

from severance_engines.anniversary import (
    AnniversaryResolver,
    anniversary_window,
    completed_years,
    last_anniversary,
    next_anniversary,
    normalize_hire_date,
)


class TestNormalizeHireDate:
    """Tests for Feb 29 normalization."""

    def test_leap_day_becomes_feb_28(self):
        assert normalize_hire_date(date(2020, 2, 29)) == date(2020, 2, 28)

    def test_other_dates_unchanged(self):
        assert normalize_hire_date(date(2020, 2, 28)) == date(2020, 2, 28)
        assert normalize_hire_date(date(2021, 3, 1)) == date(2021, 3, 1)


class TestLastAnniversary:
    """Tests for the most recent anniversary on or before a reference date."""

    def test_anniversary_already_passed_this_year(self):
        assert last_anniversary(date(2020, 3, 15), date(2025, 6, 1)) == date(2025, 3, 15)

    def test_anniversary_not_yet_this_year(self):
        assert last_anniversary(date(2024, 2, 10), date(2026, 1, 6)) == date(2025, 2, 10)

    def test_on_the_anniversary(self):
        assert last_anniversary(date(2020, 3, 15), date(2025, 3, 15)) == date(2025, 3, 15)

    def test_within_first_year_is_hire_date(self):
        assert last_anniversary(date(2025, 9, 1), date(2026, 1, 6)) == date(2025, 9, 1)

    def test_leap_day_hire_resolves_to_feb_28(self):
        assert last_anniversary(date(2020, 2, 29), date(2023, 3, 1)) == date(2023, 2, 28)
        assert last_anniversary(date(2020, 2, 29), date(2024, 3, 1)) == date(2024, 2, 28)

    def test_leap_day_hire_on_feb_28(self):
        assert last_anniversary(date(2020, 2, 29), date(2023, 2, 28)) == date(2023, 2, 28)

    def test_reference_before_hire_is_normalized_hire(self):
        assert last_anniversary(date(2020, 2, 29), date(2019, 12, 1)) == date(2020, 2, 28)


class TestNextAnniversary:
    """Tests for the first anniversary after the reference date."""

    def test_next_after_passed(self):
        assert next_anniversary(date(2020, 3, 15), date(2025, 6, 1)) == date(2026, 3, 15)

    def test_on_anniversary_is_next_year(self):
        assert next_anniversary(date(2020, 3, 15), date(2025, 3, 15)) == date(2026, 3, 15)

    def test_reference_before_hire(self):
        assert next_anniversary(date(2025, 9, 1), date(2025, 1, 1)) == date(2025, 9, 1)


class TestCompletedYears:
    """Tests for fully completed service years."""

    def test_zero_on_hire_date(self):
        assert completed_years(date(2024, 2, 10), date(2024, 2, 10)) == 0

    def test_scenario(self):
        assert completed_years(date(2024, 2, 10), date(2026, 1, 6)) == 1

    def test_on_anniversary(self):
        assert completed_years(date(2020, 3, 15), date(2025, 3, 15)) == 5

    def test_day_before_anniversary(self):
        assert completed_years(date(2020, 3, 15), date(2025, 3, 14)) == 4

    def test_floored_at_zero(self):
        assert completed_years(date(2025, 5, 1), date(2024, 1, 1)) == 0

    def test_leap_day_hire_completes_on_feb_28(self):
        assert completed_years(date(2020, 2, 29), date(2021, 2, 28)) == 1
        assert completed_years(date(2020, 2, 29), date(2021, 2, 27)) == 0


class TestAnniversaryWindow:
    """Tests for the anniversary-year window."""

    def test_window_bounds(self):
        window = anniversary_window(date(2020, 3, 15), date(2025, 6, 1))
        assert window.start == date(2025, 3, 15)
        assert window.end == date(2026, 3, 14)

    def test_contains(self):
        window = anniversary_window(date(2020, 3, 15), date(2025, 6, 1))
        assert window.contains(date(2025, 3, 15))
        assert window.contains(date(2026, 3, 14))
        assert not window.contains(date(2026, 3, 15))

    def test_leap_day_window(self):
        window = anniversary_window(date(2020, 2, 29), date(2023, 6, 1))
        assert window.start == date(2023, 2, 28)
        assert window.end == date(2024, 2, 27)


class TestAnniversaryResolver:
    """Tests for the hire-bound resolver."""

    def setup_method(self):
        self.resolver = AnniversaryResolver(date(2020, 2, 29))

    def test_keeps_original_for_display(self):
        assert self.resolver.hire_date == date(2020, 2, 29)
        assert self.resolver.normalized_hire_date == date(2020, 2, 28)

    def test_methods_use_normalized_date(self):
        reference = date(2025, 3, 1)
        assert self.resolver.last(reference) == date(2025, 2, 28)
        assert self.resolver.next(reference) == date(2026, 2, 28)
        assert self.resolver.completed_years(reference) == 5
        assert self.resolver.window(reference).start == date(2025, 2, 28)
