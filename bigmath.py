"""
Exact arithmetic over arbitrary-precision integers.

Operands may be Python ints or strings of decimal digits (the form secrets
take when read from the environment). Results are always ints, so nothing
here can overflow no matter how long the configured code length grows.
"""
from typing import Union

Number = Union[int, str]


def to_integer(value: Number) -> int:
    """
    Coerces an int or a decimal digit string into an int.
    """
    # bool is an int subclass but never a meaningful operand here
    if isinstance(value, bool):
        raise ValueError("Non-numeric input: booleans are not integers")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        digits = text[1:] if text.startswith("-") else text
        if digits and digits.isascii() and digits.isdigit():
            return int(text)
    raise ValueError(f"Non-numeric input: {value!r}")


def add(a: Number, b: Number) -> int:
    return to_integer(a) + to_integer(b)


def subtract(a: Number, b: Number) -> int:
    """Returns a - b, which may be negative."""
    return to_integer(a) - to_integer(b)


def multiply(a: Number, b: Number) -> int:
    return to_integer(a) * to_integer(b)


def divide(a: Number, b: Number) -> int:
    """
    Integer division truncated toward zero.
    """
    a, b = to_integer(a), to_integer(b)
    if b == 0:
        raise ZeroDivisionError("Division by zero")
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def modulo(a: Number, b: Number) -> int:
    """
    Remainder of a / b. Non-negative whenever the divisor is positive.
    """
    a, b = to_integer(a), to_integer(b)
    if b == 0:
        raise ZeroDivisionError("Modulo by zero")
    return a % b


def power(base: Number, exponent: Number) -> int:
    base, exponent = to_integer(base), to_integer(exponent)
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    return base ** exponent


def compare(a: Number, b: Number) -> int:
    """Three-way comparison: -1, 0 or 1."""
    a, b = to_integer(a), to_integer(b)
    return (a > b) - (a < b)
