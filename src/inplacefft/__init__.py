from .complex import ComplexNumber, add, multiply, subtract
from .fft import (
    InvalidArgument,
    InvalidLength,
    bit_reverse_permutation,
    butterfly_stages,
    is_power_of_two,
    reverse_bits,
    transform,
)

__all__ = [
    "ComplexNumber",
    "InvalidArgument",
    "InvalidLength",
    "add",
    "bit_reverse_permutation",
    "butterfly_stages",
    "is_power_of_two",
    "multiply",
    "reverse_bits",
    "subtract",
    "transform",
]
