"""Tensors with reverse-mode automatic differentiation."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence


def _format_values(values: Iterable[float]) -> str:
    return "[" + ", ".join(f"{v:g}" for v in values) + "]"


class Tensor:
    """A dense tensor stored as a flat row-major list of floats.

    Each tensor carries a gradient buffer of the same size. A tensor
    produced by a :class:`Function` records that function in ``grad_fn``
    and the tensors it was computed from in ``children``.
    """

    def __init__(
        self,
        data: Iterable[float],
        shape: Sequence[int],
        requires_grad: bool = False,
    ) -> None:
        shape = tuple(int(d) for d in shape)
        if any(d <= 0 for d in shape):
            raise ValueError("Tensor dimensions must be positive")
        self.data: list[float] = [float(v) for v in data]
        self.shape: tuple[int, ...] = shape
        self.size: int = math.prod(shape)
        if len(self.data) != self.size:
            raise ValueError("Data size does not match shape")
        self.grad: list[float] = [0.0] * self.size
        self.requires_grad: bool = requires_grad
        self.grad_fn: Function | None = None
        self.children: list[Tensor] = []
        self.is_leaf: bool = True

    @property
    def dim(self) -> int:
        """Number of dimensions."""
        return len(self.shape)

    def backward(self, grad_output: Tensor | None = None) -> None:
        """Accumulate ``grad_output`` into this tensor and propagate it.

        Without ``grad_output`` the tensor must hold a single element and
        a gradient of one is used.
        """
        if grad_output is None:
            if self.size != 1:
                raise ValueError(
                    "grad_output must not be null for non-scalar tensor"
                )
            grad_output = Tensor([1.0], [1])
        elif grad_output.size != self.size:
            raise ValueError("grad_output size does not match tensor size")

        self.grad[:] = [g + d for g, d in zip(self.grad, grad_output.data)]

        if self.grad_fn is None:
            return
        grads = self.grad_fn.backward(grad_output)
        for child, grad in zip(self.children, grads):
            if child.requires_grad and grad is not None:
                child.backward(grad)

    def zero_grad(self) -> None:
        """Reset the gradient buffer to zeros."""
        self.grad[:] = [0.0] * len(self.grad)

    def add_child(self, child: Tensor) -> None:
        """Record a tensor this one was computed from."""
        self.children.append(child)

    def __getitem__(self, index):
        return self.data[index]

    def __setitem__(self, index, value) -> None:
        self.data[index] = float(value)

    def __len__(self) -> int:
        return self.size

    def __str__(self) -> str:
        lines = [
            "Tensor shape: " + _format_values(self.shape),
            "Tensor data: " + _format_values(self.data),
        ]
        if self.requires_grad:
            lines.append("Tensor grad: " + _format_values(self.grad))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Tensor(shape={list(self.shape)}, "
            f"requires_grad={self.requires_grad})"
        )


class Function(ABC):
    """A differentiable operation in the computation graph."""

    def __init__(self) -> None:
        self.inputs: list[Tensor] = []
        self.output: Tensor | None = None

    @abstractmethod
    def apply(self, inputs: Sequence[Tensor]) -> Tensor:
        """Compute the forward result of the operation."""

    @abstractmethod
    def backward(self, grad_output: Tensor) -> list[Tensor | None]:
        """Return one gradient per input, given the gradient of the output."""

    def name(self) -> str:
        """Name of the operation."""
        return type(self).__name__


def tensor(
    data: Iterable[float], shape: Sequence[int], requires_grad: bool = False
) -> Tensor:
    """Create a tensor from flat data and a shape."""
    return Tensor(data, shape, requires_grad)


def _checked_size(shape: Sequence[int]) -> int:
    if any(int(d) <= 0 for d in shape):
        raise ValueError("Tensor dimensions must be positive")
    return math.prod(int(d) for d in shape)


def zeros(shape: Sequence[int], requires_grad: bool = False) -> Tensor:
    """Create a tensor filled with zeros."""
    return Tensor([0.0] * _checked_size(shape), shape, requires_grad)


def ones(shape: Sequence[int], requires_grad: bool = False) -> Tensor:
    """Create a tensor filled with ones."""
    return Tensor([1.0] * _checked_size(shape), shape, requires_grad)


def randn(shape: Sequence[int], requires_grad: bool = False) -> Tensor:
    """Create a tensor of samples from the standard normal distribution."""
    size = _checked_size(shape)
    return Tensor(
        (random.gauss(0.0, 1.0) for _ in range(size)), shape, requires_grad
    )