"""Loss functions returning a scalar loss and the gradient of their input."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from gradlite.tensor import Tensor, tensor


class LossFunction(ABC):
    """A loss computed by ``forward`` whose input gradient ``backward`` returns."""

    @abstractmethod
    def forward(self, input: Tensor, target: Tensor) -> Tensor:
        """Compute the loss for ``input`` against ``target``."""

    @abstractmethod
    def backward(self) -> list[Tensor]:
        """Return the gradient of the last loss with respect to its input."""


class CrossEntropyLoss(LossFunction):
    """Softmax cross-entropy over (batch, classes) logits and target distributions."""

    def __init__(self) -> None:
        self._input: Tensor | None = None
        self._target: Tensor | None = None
        self._softmax: list[float] = []

    def forward(self, input: Tensor, target: Tensor) -> Tensor:
        if input.dim != 2 or target.dim != 2:
            raise ValueError("Both input and target must be 2D tensors")
        batch_size, num_classes = input.shape
        self._input = input
        self._target = target

        total_loss = 0.0
        softmax: list[float] = []
        for i in range(batch_size):
            start = i * num_classes
            row = input.data[start : start + num_classes]
            targets = target.data[start : start + num_classes]
            max_val = max(row)
            exps = [math.exp(v - max_val) for v in row]
            exp_sum = sum(exps)
            probs = [e / exp_sum for e in exps]
            softmax.extend(probs)
            total_loss -= sum(
                t * math.log(p + 1e-7) for t, p in zip(targets, probs) if t > 0
            )
        self._softmax = softmax
        return tensor([total_loss / batch_size], [1])

    def backward(self) -> list[Tensor]:
        if self._input is None or self._target is None:
            raise RuntimeError("Must call forward() before backward()")
        batch_size = self._input.shape[0]
        grad = [
            (p - t) / batch_size
            for p, t in zip(self._softmax, self._target.data)
        ]
        return [tensor(grad, self._input.shape)]