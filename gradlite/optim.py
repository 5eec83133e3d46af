"""Gradient-based optimizers that update tensors in place."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Iterable

from gradlite.tensor import Tensor


class Optimizer(ABC):
    """Base class for optimizers over a list of parameter tensors."""

    @abstractmethod
    def step(self) -> None:
        """Update every parameter from its current gradient."""

    @abstractmethod
    def zero_grad(self) -> None:
        """Reset the gradients of every parameter."""

    @abstractmethod
    def add_parameters(self, params: Iterable[Tensor]) -> None:
        """Register tensors to be optimized."""


class Adam(Optimizer):
    """Adam with bias-corrected first and second moment estimates."""

    def __init__(
        self,
        lr: float = 0.001,
        beta1: float = 0.9,
        beta2: float = 0.999,
        eps: float = 1e-10,
    ) -> None:
        self.lr = lr
        self.beta1 = beta1
        self.beta2 = beta2
        self.eps = eps
        self._parameters: list[Tensor] = []
        self._m: list[list[float]] = []
        self._v: list[list[float]] = []
        self._t = 0

    def add_parameters(self, params: Iterable[Tensor]) -> None:
        for param in params:
            self._parameters.append(param)
            self._m.append([0.0] * len(param.data))
            self._v.append([0.0] * len(param.data))

    def step(self) -> None:
        self._t += 1
        beta1_correction = 1.0 - self.beta1**self._t
        beta2_correction = 1.0 - self.beta2**self._t
        lr_corrected = self.lr * math.sqrt(beta2_correction) / beta1_correction

        for param, m, v in zip(self._parameters, self._m, self._v):
            data = param.data
            for j, g in enumerate(param.grad[: len(data)]):
                m[j] = self.beta1 * m[j] + (1.0 - self.beta1) * g
                v[j] = self.beta2 * v[j] + (1.0 - self.beta2) * g * g
                data[j] -= lr_corrected * m[j] / (math.sqrt(v[j]) + self.eps)

    def zero_grad(self) -> None:
        for param in self._parameters:
            param.zero_grad()

    def parameters(self) -> list[Tensor]:
        """The registered parameters, in the order they were added."""
        return list(self._parameters)


class SGD(Optimizer):
    """Stochastic gradient descent with gradient clipping and optional momentum."""

    def __init__(
        self, lr: float, momentum: float = 0.0, clip_value: float = 1.0
    ) -> None:
        if lr <= 0:
            raise ValueError("Learning rate must be positive.")
        if momentum < 0 or momentum > 1:
            raise ValueError("Momentum must be in the range [0, 1].")
        if clip_value <= 0:
            raise ValueError("Gradient clip value must be positive.")
        self.lr = lr
        self.momentum = momentum
        self.clip_value = clip_value
        self._parameters: list[Tensor] = []
        self._velocities: list[list[float]] = []

    def add_parameters(self, params: Iterable[Tensor]) -> None:
        params = list(params)
        if any(param is None for param in params):
            raise ValueError("Parameter tensor cannot be null.")
        self._parameters.extend(params)
        if self.momentum > 0:
            self._velocities.extend([0.0] * len(p.data) for p in params)

    def _clipped(self, grad: Iterable[float]) -> list[float]:
        c = self.clip_value
        return [max(-c, min(g, c)) for g in grad]

    def step(self) -> None:
        if self.momentum > 0:
            for param, velocity in zip(self._parameters, self._velocities):
                clipped = self._clipped(param.grad)
                data = param.data
                for j, g in enumerate(clipped[: len(data)]):
                    velocity[j] = self.momentum * velocity[j] + self.lr * g
                    data[j] -= velocity[j]
        else:
            for param in self._parameters:
                clipped = self._clipped(param.grad)
                data = param.data
                for j, g in enumerate(clipped[: len(data)]):
                    data[j] -= self.lr * g

    def zero_grad(self) -> None:
        for param in self._parameters:
            param.zero_grad()