import math
from decimal import Decimal
from typing import Any


class TextValidator:
    """Presence checks and text coercion for book fields.

    Request bodies are arbitrary JSON, so title/author may arrive as
    numbers, booleans, lists or objects. Values are judged and rendered
    the way a JavaScript client would expect.
    """

    @staticmethod
    def is_present(value: Any) -> bool:
        """False for missing, null, false, 0, NaN and the empty string.

        Whitespace-only strings count as present; trimming happens later.
        """
        if value is None or value is False:
            return False
        if isinstance(value, str):
            return value != ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value != 0 and not (isinstance(value, float) and math.isnan(value))
        return True

    @staticmethod
    def to_text(value: Any) -> str:
        if isinstance(value, str):
            return value
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            if abs(value) < 10 ** 21:
                return str(value)
            try:
                value = float(value)
            except OverflowError:
                return "Infinity" if value > 0 else "-Infinity"
        if isinstance(value, float):
            return TextValidator._number_to_text(value)
        if isinstance(value, (list, tuple)):
            # nested nulls render as empty, like Array.prototype.join
            return ",".join("" if item is None else TextValidator.to_text(item) for item in value)
        if isinstance(value, dict):
            return "[object Object]"
        return str(value)

    @staticmethod
    def clean(value: Any) -> str:
        """Coerce to text and strip surrounding whitespace."""
        return TextValidator.to_text(value).strip()

    @staticmethod
    def _number_to_text(value: float) -> str:
        """Render a float as Number.prototype.toString does.

        Plain notation for decimal exponents in [-6, 21), exponent
        notation (``1e+21``, ``1.5e-7``) outside that range.
        """
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value == 0:
            return "0"
        sign = "-" if value < 0 else ""
        # repr gives the shortest digits that round-trip, as JS does
        parsed = Decimal(repr(abs(value))).normalize().as_tuple()
        digits = "".join(str(d) for d in parsed.digits)
        k = len(digits)
        n = parsed.exponent + k
        if k <= n <= 21:
            text = digits + "0" * (n - k)
        elif 0 < n <= 21:
            text = digits[:n] + "." + digits[n:]
        elif -6 < n <= 0:
            text = "0." + "0" * -n + digits
        else:
            e = n - 1
            mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
            text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
        return sign + text
