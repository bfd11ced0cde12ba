import math
import unittest

import torch

from inplacefft.fft import InvalidLength, transform
from inplacefft.fftcore import FFTCore, from_tensor, to_tensor

from tests.shared import assert_sequences_close, random_sequence


class TestFFTCore(unittest.TestCase):
    def test_fft(self):
        num_samples = int(math.pow(2, 9))

        torch.manual_seed(42)
        input_tensor = torch.rand(num_samples, dtype=torch.float64)
        input_tensor_2d = torch.stack(
            (input_tensor, torch.zeros_like(input_tensor)), dim=0
        )

        torch_fft = torch.fft.fft(input_tensor)

        fft_core = FFTCore(num_samples=num_samples)
        my_fft = fft_core(input_tensor_2d)

        tolerance = 1e-9
        self.assertTrue(
            torch.allclose(torch_fft.real, my_fft[0], atol=tolerance),
            "FFT Real Units Test Failed.",
        )
        self.assertTrue(
            torch.allclose(torch_fft.imag, my_fft[1], atol=tolerance),
            "FFT Imag Units Test Failed.",
        )

    def test_fft_complex_input(self):
        num_samples = 64

        torch.manual_seed(0)
        x = torch.randn(2, num_samples, dtype=torch.float64)
        torch_fft = torch.fft.fft(torch.complex(x[0], x[1]))

        my_fft = FFTCore(num_samples)(x.clone())

        self.assertTrue(torch.allclose(torch_fft.real, my_fft[0], atol=1e-9))
        self.assertTrue(torch.allclose(torch_fft.imag, my_fft[1], atol=1e-9))

    def test_fft_float32(self):
        num_samples = 256

        torch.manual_seed(42)
        input_tensor = torch.rand(num_samples)
        input_tensor_2d = torch.stack(
            (input_tensor, torch.zeros_like(input_tensor)), dim=0
        )

        torch_fft = torch.fft.fft(input_tensor.to(torch.float64))
        my_fft = FFTCore(num_samples)(input_tensor_2d)

        self.assertEqual(my_fft.dtype, torch.float32)
        self.assertTrue(
            torch.allclose(torch_fft.real.float(), my_fft[0], atol=1e-3),
            "FFT float32 Real Units Test Failed.",
        )
        self.assertTrue(
            torch.allclose(torch_fft.imag.float(), my_fft[1], atol=1e-3),
            "FFT float32 Imag Units Test Failed.",
        )

    def test_in_place(self):
        x = torch.rand(2, 32, dtype=torch.float64)
        pointer = x.data_ptr()

        result = FFTCore(32)(x)

        self.assertIs(result, x)
        self.assertEqual(x.data_ptr(), pointer)

    def test_single_sample_unchanged(self):
        x = torch.tensor([[3.0], [-2.0]], dtype=torch.float64)
        FFTCore(1)(x)

        self.assertTrue(torch.equal(x, torch.tensor([[3.0], [-2.0]], dtype=torch.float64)))

    def test_matches_list_transform(self):
        num_samples = 128
        sequence = random_sequence(num_samples, seed=3)

        tensor_result = from_tensor(FFTCore(num_samples)(to_tensor(sequence)))
        list_result = transform(list(sequence))

        assert_sequences_close(self, tensor_result, list_result)

    def test_fft_reversible(self):
        num_samples = int(math.pow(2, 9))
        input_tensor = torch.rand(num_samples, dtype=torch.float64)
        fft_core = FFTCore(num_samples=num_samples)

        x = torch.stack((input_tensor, torch.zeros_like(input_tensor)), dim=0)
        fft_core(x)

        # Inverse through conjugation: conj(FFT(conj(X))) / n.
        x[1] *= -1
        fft_core(x)
        x[1] *= -1
        x /= num_samples

        tolerance = 1e-9
        self.assertTrue(
            torch.allclose(input_tensor, x[0], atol=tolerance),
            "Random input reproducibility test failed!",
        )
        self.assertTrue(torch.allclose(torch.zeros_like(x[1]), x[1], atol=tolerance))

    def test_invalid_num_samples(self):
        for num_samples in (0, 3, 6, 12):
            with self.assertRaises(InvalidLength):
                FFTCore(num_samples)

    def test_mismatched_length_leaves_tensor_untouched(self):
        x = torch.rand(2, 4, dtype=torch.float64)
        snapshot = x.clone()

        with self.assertRaises(InvalidLength):
            FFTCore(8)(x)

        self.assertTrue(torch.equal(x, snapshot))

    def test_grad_leaf_rejected(self):
        x = torch.rand(2, 8, dtype=torch.float64, requires_grad=True)
        snapshot = x.detach().clone()

        with self.assertRaises(ValueError):
            FFTCore(8)(x)

        self.assertTrue(torch.equal(x.detach(), snapshot))

    def test_gradients_flow_through_non_leaf(self):
        num_samples = 8
        leaf = torch.rand(2, num_samples, dtype=torch.float64, requires_grad=True)

        out = FFTCore(num_samples)(leaf * 1)
        out[0].sum().backward()

        # The real parts of the spectrum sum to n times the real part of x[0].
        expected_real = torch.zeros(num_samples, dtype=torch.float64)
        expected_real[0] = num_samples
        self.assertTrue(torch.allclose(leaf.grad[0], expected_real, atol=1e-9))
        self.assertTrue(
            torch.allclose(leaf.grad[1], torch.zeros(num_samples, dtype=torch.float64), atol=1e-9)
        )

    def test_bad_shape(self):
        with self.assertRaises(ValueError):
            FFTCore(8)(torch.rand(3, 8))

    def test_tensor_conversion(self):
        sequence = random_sequence(8)
        tensor = to_tensor(sequence)

        self.assertEqual(tuple(tensor.shape), (2, 8))
        self.assertEqual(tensor.dtype, torch.float64)
        self.assertEqual(from_tensor(tensor), sequence)


if __name__ == "__main__":
    unittest.main()
