"""Neural network layers built on :mod:`gradlite.tensor`."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod

from gradlite.tensor import Tensor, ones, tensor, zeros


class Module(ABC):
    """Base class for layers with parameters and a training mode."""

    def __init__(self) -> None:
        self.is_training = True

    @abstractmethod
    def forward(self, x: Tensor) -> Tensor:
        """Compute the layer output for ``x``."""

    @abstractmethod
    def parameters(self) -> list[Tensor]:
        """Return the trainable tensors of the layer."""

    def train(self) -> None:
        """Switch to training mode."""
        self.is_training = True

    def eval(self) -> None:
        """Switch to evaluation mode."""
        self.is_training = False

    @abstractmethod
    def name(self) -> str:
        """Name of the layer."""

    def __call__(self, x: Tensor) -> Tensor:
        return self.forward(x)


def _validate_conv_args(
    in_channels: int, out_channels: int, kernel_size: int, stride: int, padding: int
) -> None:
    if in_channels <= 0 or out_channels <= 0:
        raise ValueError("Number of channels must be positive")
    if kernel_size <= 0:
        raise ValueError("Kernel size must be positive")
    if stride <= 0:
        raise ValueError("Stride must be positive")
    if padding < 0:
        raise ValueError("Padding must be non-negative")


class ConvTranspose2d(Module):
    """Transposed 2D convolution over (batch, channels, height, width) input.

    The weight has shape (in_channels, out_channels, kernel, kernel).
    """

    def __init__(
        self,
        in_channels: int,
        out_channels: int,
        kernel_size: int,
        stride: int,
        padding: int,
        use_bias: bool,
    ) -> None:
        super().__init__()
        _validate_conv_args(in_channels, out_channels, kernel_size, stride, padding)
        self.in_channels = in_channels
        self.out_channels = out_channels
        self.kernel_size = kernel_size
        self.stride = stride
        self.padding = padding
        self.use_bias = use_bias

        weight_size = in_channels * out_channels * kernel_size * kernel_size
        stdv = 1.0 / math.sqrt(in_channels * kernel_size * kernel_size)
        self.weight = tensor(
            [random.gauss(0.0, stdv) for _ in range(weight_size)],
            [in_channels, out_channels, kernel_size, kernel_size],
            True,
        )
        self.bias: Tensor | None = (
            zeros([out_channels], True) if use_bias else None
        )

    def forward(self, x: Tensor) -> Tensor:
        if x.dim != 4:
            raise ValueError(
                "ConvTranspose2d expects 4D input (batch, channels, height, width)"
            )
        batch_size, in_channels, in_height, in_width = x.shape
        if in_channels != self.in_channels:
            raise ValueError(
                f"Input channels ({in_channels}) don't match layer channels "
                f"({self.in_channels})"
            )

        k, s, p = self.kernel_size, self.stride, self.padding
        out_c = self.out_channels
        out_height = (in_height - 1) * s + k - 2 * p
        out_width = (in_width - 1) * s + k - 2 * p
        if out_height <= 0 or out_width <= 0:
            raise ValueError(
                "Output dimensions must be positive. Calculated: "
                f"{out_height}x{out_width}"
            )

        out_plane = out_height * out_width
        out = [0.0] * (batch_size * out_c * out_plane)
        x_data = x.data
        w_data = self.weight.data
        in_plane = in_height * in_width
        kk = k * k

        for b in range(batch_size):
            for c_in in range(in_channels):
                x_base = (b * in_channels + c_in) * in_plane
                for h_in in range(in_height):
                    for w_in in range(in_width):
                        value = x_data[x_base + h_in * in_width + w_in]
                        for c_out in range(out_c):
                            w_base = (c_in * out_c + c_out) * kk
                            o_base = (b * out_c + c_out) * out_plane
                            for kh in range(k):
                                h_out = h_in * s + kh - p
                                if not 0 <= h_out < out_height:
                                    continue
                                for kw in range(k):
                                    w_out = w_in * s + kw - p
                                    if not 0 <= w_out < out_width:
                                        continue
                                    out[o_base + h_out * out_width + w_out] += (
                                        value * w_data[w_base + kh * k + kw]
                                    )

        if self.use_bias and self.bias is not None:
            for b in range(batch_size):
                for c, bias_val in enumerate(self.bias.data):
                    o_base = (b * out_c + c) * out_plane
                    for i in range(o_base, o_base + out_plane):
                        out[i] += bias_val

        return Tensor(
            out, [batch_size, out_c, out_height, out_width], x.requires_grad
        )

    def parameters(self) -> list[Tensor]:
        if self.use_bias and self.bias is not None:
            return [self.weight, self.bias]
        return [self.weight]

    def name(self) -> str:
        return "ConvTranspose2d"


def dropout2d(input: Tensor, p: float = 0.5, training: bool = True) -> Tensor:
    """Zero whole channels with probability ``p`` and rescale the rest.

    Outside training, or with ``p`` equal to zero, ``input`` is returned as is.
    """
    if not training or p == 0.0:
        return input
    if input.dim != 4:
        raise ValueError("dropout2d: input must be 4D tensor")
    if p < 0 or p >= 1:
        raise ValueError("Dropout probability must be in [0, 1)")

    batch_size, channels, height, width = input.shape
    mask = ones([batch_size, channels, 1, 1])
    keep = 1.0 - p
    mask.data[:] = [
        (1.0 if random.random() < keep else 0.0) / keep for _ in mask.data
    ]

    output = zeros(input.shape, input.requires_grad)
    feature_size = height * width
    for channel, m in enumerate(mask.data):
        start = channel * feature_size
        end = start + feature_size
        output.data[start:end] = [v * m for v in input.data[start:end]]
    return output


class Dropout2d(Module):
    """Channel-wise dropout that is active only in training mode."""

    def __init__(self, p: float = 0.5) -> None:
        super().__init__()
        self.p = p

    def forward(self, x: Tensor) -> Tensor:
        return dropout2d(x, self.p, self.is_training)

    def parameters(self) -> list[Tensor]:
        return []

    def name(self) -> str:
        return "Dropout2d"