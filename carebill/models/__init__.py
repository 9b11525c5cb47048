def format_currency(amount: float) -> str:
    """Format a dollar amount as USD: 1234.5 -> '$1,234.50'"""
    sign = "-" if round(amount, 2) < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_number(value: float) -> str:
    """Render whole numbers without a decimal part: 12.0 -> '12', 11.5 -> '11.5'"""
    if float(value).is_integer():
        return str(int(value))
    return str(float(value))
