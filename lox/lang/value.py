"""Runtime values of the lox language and the rules that apply to them. Values are plain Python objects:

```
<value> ::= float   ; Number
          | str     ; String
          | bool    ; Boolean
          | None    ; Nil
```

Since Python considers True == 1.0, equality cannot be delegated to == and is defined here per variant.
"""

import math
from decimal import Decimal

NUMBER_PRECISION = 8  # decimal places kept when displaying numbers


def is_number(value):
    # bool is a subclass of int, so isinstance would accept True
    return type(value) is float


def is_truthy(value):
    """nil and false are falsy, everything else (including 0 and "") is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    """Structural equality. Values of different variants are never equal, and never raise."""
    if type(left) is not type(right):
        return False
    return left == right


def type_name(value):
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    return "string"


def stringify(value):
    """Display form of value, as written by print."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return stringify_number(value)
    return value


def stringify_number(num):
    """Rounds away trailing floating point noise and writes the result in positional notation, without trailing zeros
    (so 7.0 is "7", 1e-05 is "0.00001" and -0.0 keeps its sign as "-0").
    """
    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "inf" if num > 0 else "-inf"

    # repr gives the shortest digits that round-trip, Decimal lays them out without an exponent
    text = format(Decimal(repr(round(num, NUMBER_PRECISION))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
