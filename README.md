# gradlite

A small tensor library in plain Python with no third-party dependencies.

## Modules

- `gradlite.tensor`
  - `Tensor` stores flat row-major `float` data together with a shape (`data`, `shape`, `size`, `dim`). It also holds a gradient buffer of the same size (`grad`).
  - `Tensor.backward(grad_output=None)` adds `grad_output` into `grad`. If the tensor has a `grad_fn`, it hands the gradient to that function and then recurses into every child that has `requires_grad` set. Without an argument, the tensor must hold exactly one element, and a gradient of one is used.
  - `zero_grad()` resets the gradient.
  - `add_child()` records an input tensor.
  - Indexing, `len()` and `str()` work on the flat data.
  - `Function` is the abstract base class for differentiable operations. Subclasses implement `apply(inputs)` and `backward(grad_output)`. `name()` returns the class name.
  - `tensor(data, shape, requires_grad=False)`, `zeros`, `ones` and `randn` (standard normal samples) create tensors.
- `gradlite.optim`
  - `Optimizer` is the abstract base class.
  - `Adam(lr=0.001, beta1=0.9, beta2=0.999, eps=1e-10)` uses bias-corrected moment estimates. `parameters()` returns the registered tensors.
  - `SGD(lr, momentum=0.0, clip_value=1.0)` clips each gradient element to `[-clip_value, clip_value]` and can apply momentum.
  - Both optimizers provide `add_parameters`, `step` and `zero_grad`.
- `gradlite.losses`
  - `LossFunction` is the abstract base class.
  - `CrossEntropyLoss` takes logits of shape `(batch, classes)` and target distributions of the same shape, such as one-hot rows. `forward` applies softmax and returns the mean loss as a one-element tensor. `backward` returns `[ (softmax - target) / batch ]`.
- `gradlite.nn`
  - `Module` is the abstract base class for layers. It provides `forward`, `parameters`, `name`, `train`, `eval` and the `is_training` flag. Calling a module runs `forward`.
  - `ConvTranspose2d(in_channels, out_channels, kernel_size, stride, padding, use_bias)` performs a transposed 2D convolution on `(batch, channels, height, width)` input.
  - `dropout2d(input, p=0.5, training=True)` zeroes whole channels with probability `p` and scales the kept channels by `1 / (1 - p)`.
  - `Dropout2d(p=0.5)` applies `dropout2d` only in training mode.

## Installation

```
pip install .
```

To install the test tools as well:

```
pip install ".[test]"
```

## Example

```python
from gradlite.tensor import tensor
from gradlite.losses import CrossEntropyLoss
from gradlite.optim import SGD

logits = tensor([2.0, 1.0, 0.1, 0.1, 2.0, 1.0], [2, 3], True)
target = tensor([1.0, 0.0, 0.0, 0.0, 1.0, 0.0], [2, 3], False)

criterion = CrossEntropyLoss()
loss = criterion.forward(logits, target)
print(loss[0])

(grad,) = criterion.backward()
logits.backward(grad)        # accumulates into logits.grad

optimizer = SGD(0.1, 0.9, 1.0)
optimizer.add_parameters([logits])
optimizer.step()
optimizer.zero_grad()
```

### Layers

```python
from gradlite.nn import ConvTranspose2d, Dropout2d
from gradlite.tensor import randn

x = randn([1, 2, 4, 4], False)
up = ConvTranspose2d(2, 3, 2, 2, 0, True)
y = up.forward(x)          # shape (1, 3, 8, 8)

drop = Dropout2d(0.5)
drop.eval()
assert drop.forward(y) is y
```

## What it does not do

- The package has no built-in differentiable operations such as addition, matrix multiplication or activations. `Function` is only a base class. To build a computation graph that `backward` can traverse, you write your own subclasses and set `grad_fn` and the children on their outputs.
- `ConvTranspose2d`, `dropout2d` and `CrossEntropyLoss.forward` do not record a computation graph. No gradients flow back to a layer's weights or bias by themselves.
- The package has no dataset loading, no model saving and no command-line tool.

## Errors

Invalid arguments raise `ValueError`. Examples include:

- non-positive dimensions
- data whose length does not match the shape
- a learning rate, momentum or clip value out of range
- input of the wrong rank or channel count

Calling `CrossEntropyLoss.backward` before `forward` raises `RuntimeError`.

## Running the tests

```
pytest
```