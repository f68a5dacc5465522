from decimal import Decimal

from utils.numeric import convert_string_to_number, is_number, to_decimal


def from_base_units(value: str | None, decimals: str | int) -> Decimal | None:
    if value is None or not is_number(value) or not is_number(decimals):
        return None

    places = convert_string_to_number(decimals)
    # ERC20 decimals is a uint8
    if not isinstance(places, int) or not 0 <= places <= 255:
        return None

    return to_decimal(value).scaleb(-places)


def format_amount(value: Decimal | None) -> str:
    if value is None:
        return "-"

    if value == 0:
        return "0"

    if value < Decimal("0.0001"):
        return "<0.0001"

    if value > Decimal("1"):
        return f"{value:.2f}".rstrip("0").rstrip(".")

    return f"{value:.4f}".rstrip("0").rstrip(".")
