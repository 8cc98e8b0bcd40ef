from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from num2words import num2words


def _to_decimal(amount: Any) -> Decimal:
    if amount is None or amount == "":
        return Decimal(0)
    try:
        return Decimal(str(amount))
    except InvalidOperation:
        return Decimal(0)


def to_words(amount: Any) -> str:
    """
    Cardinal prose of the integer part of `amount` in Brazilian Portuguese.

    to_words(1200) -> "mil e duzentos". The currency word is up to the caller.
    """
    value = int(_to_decimal(amount))
    if value <= 0:
        return "zero"
    return num2words(value, lang="pt_BR")


def amount_in_words(amount: Any) -> str:
    """Full currency prose for receipts: "Mil e duzentos reais e cinquenta centavos"."""
    value = _to_decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if value < 0:
        value = Decimal(0)

    reais = int(value)
    centavos = int((value - reais) * 100)

    if reais == 0:
        result = "zero reais"
    else:
        result = f"{to_words(reais)} {'real' if reais == 1 else 'reais'}"

    if centavos > 0:
        result += f" e {num2words(centavos, lang='pt_BR')} {'centavo' if centavos == 1 else 'centavos'}"

    return result[0].upper() + result[1:]
