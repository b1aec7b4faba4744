from chainwise.utils.formatting import format_number, format_usd, signed_percent


def test_format_usd_integral_values():
    assert format_usd(50000) == "$50,000"
    assert format_usd(112869.0) == "$112,869"


def test_format_usd_keeps_significant_decimals():
    assert format_usd(48755.0) == "$48,755"
    assert format_usd(4358.1) == "$4,358.1"
    assert format_number(0.12345) == "0.123"


def test_signed_percent():
    assert signed_percent(2.5) == "+2.50%"
    assert signed_percent(0) == "+0.00%"
    assert signed_percent(-1.234) == "-1.23%"
    assert signed_percent(6.24, 1) == "+6.2%"
