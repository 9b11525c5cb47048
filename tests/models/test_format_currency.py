from carebill.models import format_currency, format_number


class TestFormatCurrency:
    def test_zero(self):
        assert format_currency(0) == "$0.00"

    def test_cents(self):
        assert format_currency(1.5) == "$1.50"

    def test_thousands_separator(self):
        assert format_currency(1085) == "$1,085.00"

    def test_large_value(self):
        assert format_currency(1234567.891) == "$1,234,567.89"

    def test_negative(self):
        assert format_currency(-5) == "-$5.00"

    def test_negative_rounding_to_zero(self):
        assert format_currency(-0.001) == "$0.00"


class TestFormatNumber:
    def test_whole(self):
        assert format_number(12.0) == "12"
        assert format_number(360) == "360"

    def test_fractional(self):
        assert format_number(37.5) == "37.5"
        assert format_number(11.61) == "11.61"
