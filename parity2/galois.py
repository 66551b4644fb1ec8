"""Arithmetic in the Galois fields GF(2^8) and GF(2^16)."""

from __future__ import annotations

__all__ = ["GaloisTable", "Galois", "Galois8", "Galois16"]


class GaloisTable:
    """Log and antilog tables for GF(2^bits) built from a generator polynomial."""

    def __init__(self, bits, generator):
        if bits <= 0:
            raise ValueError("bits must be positive")
        self.bits = bits
        self.count = 1 << bits
        self.limit = self.count - 1
        self.generator = generator

        log = [0] * self.count
        antilog = [0] * self.count
        b = 1
        for exponent in range(self.limit):
            log[b] = exponent
            antilog[exponent] = b
            b <<= 1
            if b & self.count:
                b ^= generator
        log[0] = self.limit
        antilog[self.limit] = 0

        self.log = tuple(log)
        self.antilog = tuple(antilog)


class Galois:
    """An element of a Galois field.

    Concrete fields are subclasses declared with ``bits`` and ``generator``
    class keywords; instances are immutable.
    """

    __slots__ = ("_value",)

    BITS: int
    COUNT: int
    LIMIT: int
    GENERATOR: int
    _table: GaloisTable

    def __init_subclass__(cls, bits=None, generator=None, **kwargs):
        super().__init_subclass__(**kwargs)
        if bits is not None:
            if generator is None:
                raise TypeError("a Galois field needs a generator")
            table = GaloisTable(bits, generator)
            cls._table = table
            cls.BITS = table.bits
            cls.COUNT = table.count
            cls.LIMIT = table.limit
            cls.GENERATOR = table.generator

    def __init__(self, value=0):
        if not hasattr(type(self), "_table"):
            raise TypeError(f"{type(self).__name__} is not a concrete Galois field")
        self._value = int(value) & (self.COUNT - 1)

    @property
    def value(self) -> int:
        return self._value

    def _other_value(self, other):
        if type(other) is type(self):
            return other._value
        if isinstance(other, int) and not isinstance(other, Galois):
            return other & (self.COUNT - 1)
        return None

    def _make(self, value):
        return type(self)(value)

    def __add__(self, other):
        right = self._other_value(other)
        if right is None:
            return NotImplemented
        return self._make(self._value ^ right)

    __radd__ = __add__

    def __sub__(self, other):
        right = self._other_value(other)
        if right is None:
            return NotImplemented
        return self._make(self._value ^ right)

    __rsub__ = __sub__

    def __mul__(self, other):
        right = self._other_value(other)
        if right is None:
            return NotImplemented
        if self._value == 0 or right == 0:
            return self._make(0)
        table = self._table
        total = table.log[self._value] + table.log[right]
        if total >= table.limit:
            total -= table.limit
        return self._make(table.antilog[total])

    __rmul__ = __mul__

    def __truediv__(self, other):
        right = self._other_value(other)
        if right is None:
            return NotImplemented
        if self._value == 0:
            return self._make(0)
        if right == 0:
            raise ZeroDivisionError("division by zero in a Galois field")
        table = self._table
        diff = table.log[self._value] - table.log[right]
        if diff < 0:
            diff += table.limit
        return self._make(table.antilog[diff])

    def pow(self, power):
        """Raise the element to a non-negative integer power."""
        power = int(power)
        if power < 0:
            raise ValueError("power must not be negative")
        if power == 0:
            return self._make(1)
        if self._value == 0:
            return self._make(0)
        table = self._table
        return self._make(table.antilog[(table.log[self._value] * power) % table.limit])

    def __xor__(self, power):
        if isinstance(power, Galois) or not isinstance(power, int):
            return NotImplemented
        return self.pow(power)

    def log(self) -> int:
        """Discrete logarithm of the value (LIMIT for zero)."""
        return self._table.log[self._value]

    def alog(self) -> int:
        """Antilogarithm: the generator raised to the value."""
        return self._table.antilog[self._value]

    def __int__(self):
        return self._value

    def __index__(self):
        return self._value

    def __eq__(self, other):
        if type(other) is type(self):
            return self._value == other._value
        return NotImplemented

    def __hash__(self):
        return hash((type(self).__name__, self._value))

    def __repr__(self):
        return f"{type(self).__name__}({self._value})"


class Galois8(Galois, bits=8, generator=0x11D):
    """An element of GF(2^8) with generator 0x11D."""

    __slots__ = ()


class Galois16(Galois, bits=16, generator=0x1100B):
    """An element of GF(2^16) with generator 0x1100B."""

    __slots__ = ()