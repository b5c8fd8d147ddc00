"""
A keyed, reversible integer obfuscation scheme to hide sequential database IDs.

An ID is XORed with a secret key, shifted by a secret salt and then permuted by
multiplying with a secret multiplier modulo 9 * 10**(length - 1). Adding the
offset 10**(length - 1) afterwards makes every code exactly `length` digits
long with a non-zero leading digit. Decoding multiplies by the modular inverse
of the multiplier and undoes the salt and the XOR.

It is not cryptographically secure. It only makes IDs look random and
non-sequential to someone who does not hold the parameters.
"""
import logging
import re
import sys
from typing import Optional

from bigmath import Number, add, compare, modulo, multiply, power, subtract, to_integer

logger = logging.getLogger("id_obfuscator.obfuscation")

# Interoperable defaults. Any deployment should pick its own.
DEFAULT_SALT = 1357913579
DEFAULT_KEY = 987654321
DEFAULT_LENGTH = 11
DEFAULT_MULTIPLIER = 1234567

# Recommended upper bounds; larger values work but are logged.
SALT_LIMIT = 10**10
KEY_LIMIT = 2**31

MIN_LENGTH = 2

_NON_DIGITS = re.compile(r"[^0-9]")


class ObfuscationError(ValueError):
    """Base class for every error raised by the obfuscator."""


class ConfigurationError(ObfuscationError):
    """The obfuscator parameters are malformed or inconsistent."""


class InvalidInput(ObfuscationError):
    """An ID or code handed to encode/decode cannot be processed."""


def xor_decimal(a: Number, b: Number) -> int:
    """
    Bitwise XOR of two arbitrary-precision integers.

    Negative operands follow Python's two's complement semantics, which keeps
    the operation self-inverse: xor_decimal(xor_decimal(a, b), b) == a.
    """
    return to_integer(a) ^ to_integer(b)


def mod_inverse(a: Number, m: Number) -> int:
    """
    Returns x in [0, m) such that a * x % m == 1, using the iterative
    extended Euclidean algorithm.

    Raises:
        ValueError: if a or m is not positive, or gcd(a, m) != 1.
    """
    a, m = to_integer(a), to_integer(m)
    if a < 1 or m < 1:
        raise ValueError("Both the number and the modulus must be positive")
    if m == 1:
        return 0

    m0 = m
    a %= m
    x0, x1 = 0, 1
    while a > 1:
        if m == 0:
            raise ValueError(f"{a} has no inverse: operands are not coprime")
        q = a // m
        a, m = m, a % m
        x0, x1 = x1 - q * x0, x0
    if a != 1:
        raise ValueError("No inverse: the number is a multiple of the modulus")
    if x1 < 0:
        x1 += m0
    return x1


def _parameter(name: str, value: Number, minimum: int) -> int:
    try:
        number = to_integer(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer") from e
    if number < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}")
    return number


class Obfuscator:
    """
    Encodes non-negative integers into fixed-length digit strings and back.

    Instances are immutable once constructed and can be shared freely across
    threads. Two instances only agree on codes when every parameter matches.
    """

    __slots__ = ("_salt", "_key", "_length", "_multiplier", "_multiplier_inverse", "_offset", "_modulus")

    def __init__(
        self,
        salt: Number = DEFAULT_SALT,
        key: Number = DEFAULT_KEY,
        length: int = DEFAULT_LENGTH,
        multiplier: Number = DEFAULT_MULTIPLIER,
        multiplier_inverse: Optional[Number] = None,
    ):
        self._salt = _parameter("Salt", salt, 0)
        self._key = _parameter("Key", key, 0)
        self._length = _parameter("Length", length, MIN_LENGTH)
        self._multiplier = _parameter("Multiplier", multiplier, 1)

        # Codes are rendered with str(), which refuses ints past this many digits
        max_digits = sys.get_int_max_str_digits()
        if max_digits and self._length > max_digits:
            raise ConfigurationError(f"Length must be <= {max_digits}")

        if compare(self._salt, SALT_LIMIT) >= 0:
            logger.warning("Salt exceeds the recommended bound of 10**10")
        if compare(self._key, KEY_LIMIT) >= 0:
            logger.warning("Key exceeds the recommended bound of 2**31")

        self._offset = power(10, self._length - 1)
        self._modulus = multiply(9, self._offset)

        if compare(add(self._salt, self._key), self._modulus) >= 0:
            logger.warning(
                "Salt + key reaches the modulus of %d-digit codes; most IDs will not decode back", self._length
            )

        if multiplier_inverse is None:
            try:
                self._multiplier_inverse = mod_inverse(self._multiplier, self._modulus)
            except ValueError as e:
                raise ConfigurationError(
                    f"Multiplier must be coprime with the modulus {self._modulus}"
                ) from e
        else:
            self._multiplier_inverse = _parameter("Multiplier inverse", multiplier_inverse, 0)

        if modulo(multiply(self._multiplier, self._multiplier_inverse), self._modulus) != 1:
            raise ConfigurationError("Provided multiplier inverse is incorrect")

        logger.debug("Obfuscator ready for %d-digit codes", self._length)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(length={self._length})"

    @property
    def salt(self) -> int:
        return self._salt

    @property
    def key(self) -> int:
        return self._key

    @property
    def length(self) -> int:
        return self._length

    @property
    def multiplier(self) -> int:
        return self._multiplier

    @property
    def multiplier_inverse(self) -> int:
        return self._multiplier_inverse

    @property
    def offset(self) -> int:
        """Smallest code value, 10**(length - 1)."""
        return self._offset

    @property
    def modulus(self) -> int:
        """Number of distinct codes, 9 * offset."""
        return self._modulus

    def encode(self, id: Number) -> str:
        """Scrambles a non-negative integer ID into a `length`-digit code."""
        try:
            value = to_integer(id)
        except ValueError as e:
            raise InvalidInput("ID must be a non-negative integer") from e
        if value < 0:
            raise InvalidInput("ID must be a non-negative integer")

        step1 = xor_decimal(value, self._key)
        step2 = add(step1, self._salt)
        perm = modulo(multiply(step2, self._multiplier), self._modulus)
        return str(add(perm, self._offset)).zfill(self._length)

    def decode(self, code: str) -> int:
        """
        Recovers the ID from a code. Anything that is not a digit is ignored,
        so formatted codes such as "123-4567-8901" are accepted.

        The result is not authenticated: a code produced with other
        parameters decodes to an unrelated integer.
        """
        digits = _NON_DIGITS.sub("", str(code))
        if len(digits) < self._length:
            raise InvalidInput(f"Code must be at least {self._length} digits")

        try:
            perm = subtract(digits, self._offset)
        except ValueError as e:
            # int() refuses strings past the interpreter's digit limit
            raise InvalidInput("Code is too long") from e
        if compare(perm, 0) < 0:
            raise InvalidInput("Invalid code")

        step2 = modulo(multiply(perm, self._multiplier_inverse), self._modulus)
        step1 = subtract(step2, self._salt)
        # No encode produces a step below the salt
        if compare(step1, 0) < 0:
            raise InvalidInput("Invalid code")
        return int(xor_decimal(step1, self._key))


def obfuscate(id: Number, salt: Number = DEFAULT_SALT, key: Number = DEFAULT_KEY, length: int = DEFAULT_LENGTH) -> str:
    """Encodes a single ID with a throwaway obfuscator."""
    return Obfuscator(salt, key, length).encode(id)


def deobfuscate(code: str, salt: Number = DEFAULT_SALT, key: Number = DEFAULT_KEY, length: int = DEFAULT_LENGTH) -> int:
    """Decodes a single code with a throwaway obfuscator."""
    return Obfuscator(salt, key, length).decode(code)
