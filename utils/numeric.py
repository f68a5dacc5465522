import re
from decimal import Context, Decimal

from clients.errors import MalformedResponseError

# wei-scale products easily exceed the default 28 digits
_CONTEXT = Context(prec=200)

# sign, digits and one decimal point; no exponent, NaN or Infinity
PLAIN_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")


def _to_decimal(value: str | int | Decimal) -> Decimal | None:
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        if value.as_tuple().exponent < -_CONTEXT.prec or value.adjusted() >= _CONTEXT.prec:
            return None
        return value

    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None

    text = str(value).strip()
    if not PLAIN_NUMBER_RE.match(text):
        return None
    return Decimal(text)


def is_number(value) -> bool:
    return _to_decimal(value) is not None


def to_decimal(value: str | int | Decimal) -> Decimal:
    number = _to_decimal(value)

    if number is None:
        raise MalformedResponseError(f"Not a number: {value!r}")
    return number


def convert_string_to_number(value: str | int | Decimal) -> int | Decimal:
    number = to_decimal(value)

    if number == number.to_integral_value():
        return int(number)
    return number


def _render(number: Decimal) -> str:
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def multiply(a: str | int | Decimal, b: str | int | Decimal) -> str:
    """Exact product of two decimal values, rendered as a plain decimal string."""
    left = _to_decimal(a)
    right = _to_decimal(b)

    if left is None or right is None:
        raise MalformedResponseError(f"Cannot multiply {a!r} by {b!r}")

    return _render(_CONTEXT.multiply(left, right))
