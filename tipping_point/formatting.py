"""
Display formatting for dollar amounts, shares and counts.
"""


def format_currency(value: float, compact: bool = False) -> str:
    """
    Format a dollar amount.

    compact=True abbreviates to $1.2B / $3.4M / $56K.
    """
    sign = "-" if value < 0 else ""
    abs_value = abs(value)

    if compact:
        if abs_value >= 1e9:
            return f"{sign}${abs_value / 1e9:.1f}B"
        if abs_value >= 1e6:
            return f"{sign}${abs_value / 1e6:.1f}M"
        if abs_value >= 1e3:
            return f"{sign}${abs_value / 1e3:.0f}K"
        return f"{sign}${abs_value:.0f}"

    return f"{sign}${abs_value:,.0f}"


def format_percent(value: float, decimals: int = 1) -> str:
    """Format a share (0.025) as a percentage ("2.5%")."""
    return f"{value * 100:.{decimals}f}%"


def format_number(value: float) -> str:
    """Format a count with thousands separators."""
    return f"{round(value):,}"


def format_signed_currency(value: float, compact: bool = True) -> str:
    """Currency with an explicit sign for non-negative values."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{format_currency(value, compact)}"
