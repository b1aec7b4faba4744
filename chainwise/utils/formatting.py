"""Number formatting shared by prompt blocks and mock responses."""


def format_number(value: float, max_decimals: int = 3) -> str:
    """Thousands-separated number without trailing zeros, e.g. 112869 -> '112,869'."""
    text = f"{value:,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_usd(value: float) -> str:
    return f"${format_number(value)}"


def signed_percent(value: float, decimals: int = 2) -> str:
    """Percentage with an explicit sign for non-negative values, e.g. '+2.50%'."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.{decimals}f}%"
