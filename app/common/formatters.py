"""
Display helpers: money, dates and amounts in words (Indian numbering)
"""
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str]

TWO_PLACES = Decimal('0.01')
THREE_PLACES = Decimal('0.001')

_ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine", "Ten",
    "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen", "Seventeen",
    "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]


def to_money(value: Number) -> Decimal:
    """Decimal rounded half-up to two places"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def to_quantity(value: Number) -> Decimal:
    """Decimal rounded half-up to three places (stored quantity precision)"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(THREE_PLACES, rounding=ROUND_HALF_UP)


def format_currency(amount: Number) -> str:
    """
    Format with Indian digit grouping and two decimals.

    1234567.5 -> "12,34,567.50"
    """
    value = to_money(amount)
    sign = "-" if value < 0 else ""
    integer, _, fraction = f"{abs(value):.2f}".partition(".")

    if len(integer) > 3:
        head, tail = integer[:-3], integer[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        integer = ",".join(groups + [tail])

    return f"{sign}{integer}.{fraction}"


def format_display_date(value: date) -> str:
    """Invoice/ledger display form, e.g. 18-Oct-26"""
    return value.strftime("%d-%b-%y")


def _two_digits(n: int) -> str:
    if n < 20:
        return _ONES[n]
    tens, ones = divmod(n, 10)
    return _TENS[tens] + (f" {_ONES[ones]}" if ones else "")


def _three_digits(n: int) -> str:
    hundreds, rest = divmod(n, 100)
    parts = []
    if hundreds:
        parts.append(f"{_ONES[hundreds]} Hundred")
    if rest:
        parts.append(_two_digits(rest))
    return " ".join(parts)


def number_to_words(n: int) -> str:
    """Whole number in words using crore / lakh / thousand grouping"""
    if n == 0:
        return "Zero"

    crore, n = divmod(n, 10_000_000)
    lakh, n = divmod(n, 100_000)
    thousand, n = divmod(n, 1000)

    parts = []
    if crore:
        parts.append(f"{number_to_words(crore)} Crore")
    if lakh:
        parts.append(f"{_two_digits(lakh)} Lakh")
    if thousand:
        parts.append(f"{_two_digits(thousand)} Thousand")
    if n:
        parts.append(_three_digits(n))
    return " ".join(parts)


def amount_in_words(amount: Number) -> str:
    """
    560 -> "Rupees Five Hundred Sixty Only"
    12.5 -> "Rupees Twelve and Fifty Paise Only"
    """
    value = abs(to_money(amount))
    rupees = int(value)
    paise = int((value - rupees) * 100)

    words = f"Rupees {number_to_words(rupees)}"
    if paise:
        words += f" and {number_to_words(paise)} Paise"
    return f"{words} Only"
