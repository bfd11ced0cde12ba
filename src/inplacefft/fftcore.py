import logging
import math

import torch

from .complex import ComplexNumber
from .fft import InvalidLength, is_power_of_two, reverse_bits

logger = logging.getLogger(__name__)


class FFTCore(torch.nn.Module):
    def __init__(self, num_samples):
        super().__init__()

        if not is_power_of_two(num_samples):
            raise InvalidLength(num_samples)

        self.num_samples = num_samples
        self.stages = num_samples.bit_length() - 1
        self.bit_reversed_indices = self.bit_reverse_indices(num_samples)

    def forward(self, x):
        """
        Transform a (2, num_samples) tensor of real and imaginary rows in place.

        Args:
            x (torch.Tensor): Row 0 holds real parts, row 1 imaginary parts.

        Returns:
            torch.Tensor: ``x`` itself, holding the forward DFT.

        Raises:
            ValueError: If ``x`` is not a (2, n) tensor, or is a leaf tensor
                that requires grad.
            InvalidLength: If n differs from ``num_samples``.
        """
        if x.requires_grad and x.is_leaf:
            raise ValueError(
                "FFTCore transforms in place; the input must not be a leaf "
                "tensor that requires grad. Pass a non-leaf (e.g. x * 1) or a clone."
            )
        if x.dim() != 2 or x.shape[0] != 2:
            raise ValueError(f"Expected a (2, n) tensor. Given: {tuple(x.shape)}")
        if x.shape[1] != self.num_samples:
            raise InvalidLength(
                x.shape[1],
                f"Expected {self.num_samples} samples. Given: {x.shape[1]}",
            )

        n = self.num_samples
        indices = self.bit_reversed_indices.to(x.device)

        # Advanced indexing copies, so the permuted rows are written back.
        x.copy_(x[:, indices])

        real = x[0]
        imag = x[1]

        for stage in range(self.stages):
            group_size = 1 << (stage + 1)
            half_group = group_size >> 1

            num_groups = n // group_size
            group_indices = torch.arange(num_groups, device=x.device) * group_size

            j = torch.arange(half_group, device=x.device)
            angle = -2.0 * math.pi * j.to(torch.float64) / group_size
            wr = torch.cos(angle).to(x.dtype)
            wi = torch.sin(angle).to(x.dtype)

            twiddle_real = wr.unsqueeze(0).expand(num_groups, half_group)
            twiddle_imag = wi.unsqueeze(0).expand(num_groups, half_group)

            top_indices = group_indices[:, None] + j
            bottom_indices = top_indices + half_group

            # Every butterfly of a stage touches its own pair, so the whole
            # stage runs at once. Stages stay sequential.
            tr_real = (
                twiddle_real * real[bottom_indices]
                - twiddle_imag * imag[bottom_indices]
            )
            tr_imag = (
                twiddle_imag * real[bottom_indices]
                + twiddle_real * imag[bottom_indices]
            )

            real[bottom_indices] = real[top_indices] - tr_real
            imag[bottom_indices] = imag[top_indices] - tr_imag

            real[top_indices] += tr_real
            imag[top_indices] += tr_imag

        logger.debug(f"Tensor FFT of size {n} in {self.stages} stages")
        return x

    def bit_reverse_indices(self, n):
        num_bits = n.bit_length() - 1
        return torch.tensor(
            [reverse_bits(i, num_bits) for i in range(n)], dtype=torch.long
        )


def to_tensor(sequence, dtype=torch.float64):
    """Pack a ComplexNumber sequence into a (2, n) tensor."""
    return torch.tensor(
        [[c.real for c in sequence], [c.imag for c in sequence]], dtype=dtype
    )


def from_tensor(tensor):
    """Unpack a (2, n) tensor into a list of ComplexNumber."""
    real, imag = tensor.tolist()
    return [ComplexNumber(r, i) for r, i in zip(real, imag)]
