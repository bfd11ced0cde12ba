"""
In-place iterative radix-2 Cooley-Tukey FFT.

The sequence is a mutable list of ComplexNumber whose length is a power of
two. ``transform`` reorders it by bit-reversed index and then runs the
decimation-in-time butterfly stages over the same storage, so the caller's
buffer ends up holding

    X[k] = sum_n x[n] * exp(-2j * pi * k * n / N)

with no normalisation.
"""
import logging
import math

from .complex import ComplexNumber

logger = logging.getLogger(__name__)


class InvalidLength(ValueError):
    """Raised when a sequence length is not a power of two."""

    def __init__(self, length, message=None):
        if message is None:
            message = f"FFT size must be a power of 2. Given: {length}"
        super().__init__(message)
        self.length = length


InvalidArgument = InvalidLength


def is_power_of_two(n):
    return n > 0 and (n & (n - 1)) == 0


def reverse_bits(k, width):
    """Reverse the low ``width`` bits of ``k``."""
    rev = 0
    for _ in range(width):
        rev = (rev << 1) | (k & 1)
        k >>= 1
    return rev


def bit_reverse_permutation(x):
    """
    Move the element at index k to the index with the low log2(n) bits of k
    reversed, in place.

    Args:
        x (list): Mutable sequence whose length is a power of two.

    Returns:
        list: ``x`` itself.
    """
    n = len(x)
    width = n.bit_length() - 1
    for k in range(n):
        j = reverse_bits(k, width)
        # Each pair is swapped once, from its lower index.
        if j > k:
            x[j], x[k] = x[k], x[j]
    return x


def twiddle(j, size):
    """Forward twiddle factor exp(-2j * pi * j / size)."""
    angle = 2 * math.pi * j / size
    return ComplexNumber(math.cos(angle), -math.sin(angle))


def butterfly_stages(x):
    """
    Run the log2(n) butterfly stages over a bit-reversed sequence in place.

    Args:
        x (list): Bit-reversed mutable sequence whose length is a power of two.

    Returns:
        list: ``x`` itself, now holding the DFT in natural order.
    """
    n = len(x)
    group_size = 2
    while group_size <= n:
        half_group = group_size >> 1
        for j in range(half_group):
            w = twiddle(j, group_size)
            for k in range(n // group_size):
                top = k * group_size + j
                bottom = top + half_group
                t = w * x[bottom]
                u = x[top]
                x[bottom] = u - t
                x[top] = u + t
        group_size <<= 1
    return x


def transform(x):
    """
    Compute the forward DFT of ``x`` in place.

    Args:
        x (list): Mutable sequence of ComplexNumber.

    Returns:
        list: ``x`` itself, holding the transform.

    Raises:
        InvalidLength: If ``len(x)`` is not a power of two. An empty
            sequence is rejected as well. ``x`` is left untouched.
    """
    n = len(x)
    if not is_power_of_two(n):
        raise InvalidLength(n)

    logger.debug(f"FFT of size {n} in {n.bit_length() - 1} stages")
    bit_reverse_permutation(x)
    butterfly_stages(x)
    return x
