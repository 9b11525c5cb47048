from datetime import date

from carebill.constants import format_date, local_today, weekday_name


class TestFormatDate:
    def test_long_form(self):
        assert format_date(date(2025, 3, 16)) == "March 16, 2025"
        assert format_date(date(2025, 12, 1)) == "December 1, 2025"


class TestWeekdayName:
    def test_names(self):
        assert weekday_name(date(2025, 3, 3)) == "Monday"
        assert weekday_name(date(2025, 3, 9)) == "Sunday"


class TestLocalToday:
    def test_returns_date(self):
        assert isinstance(local_today(), date)
