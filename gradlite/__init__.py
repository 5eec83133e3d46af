"""Tensors with gradient accumulation, optimizers, a cross-entropy loss and layers."""

__version__ = "0.1.0"
__all__ = ["tensor", "optim", "losses", "nn"]