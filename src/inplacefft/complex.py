import math


class ComplexNumber:
    """
    Immutable complex value with double precision parts.

    Every arithmetic operation returns a new instance; operands are never
    modified.
    """

    __slots__ = ("_real", "_imag")

    def __init__(self, real, imag=0.0):
        object.__setattr__(self, "_real", float(real))
        object.__setattr__(self, "_imag", float(imag))

    def __setattr__(self, name, value):
        raise AttributeError("ComplexNumber is immutable")

    def __reduce__(self):
        return (ComplexNumber, (self._real, self._imag))

    @property
    def real(self):
        return self._real

    @property
    def imag(self):
        return self._imag

    @classmethod
    def from_complex(cls, value):
        value = complex(value)
        return cls(value.real, value.imag)

    def __add__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return add(self, other)

    __radd__ = __add__

    def __sub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return subtract(self, other)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return subtract(other, self)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return ComplexNumber(self._real * other, self._imag * other)
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return multiply(self, other)

    __rmul__ = __mul__

    def __neg__(self):
        return ComplexNumber(-self._real, -self._imag)

    def __truediv__(self, scalar):
        return ComplexNumber(self._real / scalar, self._imag / scalar)

    def conjugate(self):
        return ComplexNumber(self._real, -self._imag)

    def __abs__(self):
        return math.hypot(self._real, self._imag)

    def __complex__(self):
        return complex(self._real, self._imag)

    def __eq__(self, other):
        if isinstance(other, ComplexNumber):
            return self._real == other._real and self._imag == other._imag
        if isinstance(other, (int, float, complex)):
            return complex(self) == other
        return NotImplemented

    def __hash__(self):
        return hash(complex(self))

    def __repr__(self):
        return f"ComplexNumber({self._real!r}, {self._imag!r})"

    def __str__(self):
        if self._imag == 0:
            return f"{self._real}"
        if self._real == 0:
            return f"{self._imag}i"
        if self._imag < 0:
            return f"{self._real} - {-self._imag}i"
        return f"{self._real} + {self._imag}i"


def _coerce(value):
    if isinstance(value, ComplexNumber):
        return value
    if isinstance(value, (int, float, complex)):
        return ComplexNumber.from_complex(value)
    return None


def add(a, b):
    return ComplexNumber(a.real + b.real, a.imag + b.imag)


def subtract(a, b):
    return ComplexNumber(a.real - b.real, a.imag - b.imag)


def multiply(a, b):
    # (a + bi)(c + di) = (ac - bd) + (ad + bc)i
    return ComplexNumber(
        a.real * b.real - a.imag * b.imag,
        a.real * b.imag + a.imag * b.real,
    )
