import random

import pytest

from gradlite.nn import ConvTranspose2d, Dropout2d, Module, dropout2d
from gradlite.tensor import tensor, ones


def _set_ones(layer):
    layer.weight.data[:] = [1.0] * len(layer.weight.data)


def test_conv_transpose_weight_and_parameters():
    layer = ConvTranspose2d(2, 3, 4, 1, 0, True)
    assert layer.weight.shape == (2, 3, 4, 4)
    assert layer.weight.requires_grad
    params = layer.parameters()
    assert len(params) == 2
    assert params[0] is layer.weight
    assert params[1].data == [0.0, 0.0, 0.0]

    no_bias = ConvTranspose2d(2, 3, 4, 1, 0, False)
    assert no_bias.parameters() == [no_bias.weight]
    assert no_bias.name() == "ConvTranspose2d"


@pytest.mark.parametrize(
    "args",
    [
        (0, 1, 1, 1, 0),
        (1, 0, 1, 1, 0),
        (1, 1, 0, 1, 0),
        (1, 1, 1, 0, 0),
        (1, 1, 1, 1, -1),
    ],
)
def test_conv_transpose_invalid_constructor(args):
    with pytest.raises(ValueError):
        ConvTranspose2d(*args, True)


def test_conv_transpose_non_overlapping_blocks_copy_input():
    layer = ConvTranspose2d(1, 1, 2, 2, 0, False)
    _set_ones(layer)
    x = tensor([1.0, 2.0, 3.0, 4.0], [1, 1, 2, 2])
    out = layer.forward(x)
    assert out.shape == (1, 1, 4, 4)
    for i in range(2):
        for j in range(2):
            for a in range(2):
                for b in range(2):
                    assert out[(2 * i + a) * 4 + 2 * j + b] == x[i * 2 + j]


def test_conv_transpose_single_pixel_reproduces_kernel():
    layer = ConvTranspose2d(1, 2, 3, 1, 0, False)
    x = tensor([1.0], [1, 1, 1, 1])
    out = layer.forward(x)
    assert out.shape == (1, 2, 3, 3)
    assert out.data == pytest.approx(layer.weight.data)


def test_conv_transpose_is_linear_in_input():
    random.seed(1)
    layer = ConvTranspose2d(2, 2, 3, 2, 1, False)
    x = tensor([random.uniform(-1, 1) for _ in range(2 * 9)], [1, 2, 3, 3])
    doubled = tensor([2 * v for v in x.data], [1, 2, 3, 3])
    out = layer.forward(x)
    out2 = layer.forward(doubled)
    assert out2.data == pytest.approx([2 * v for v in out.data])


def test_conv_transpose_bias_added_per_channel():
    random.seed(2)
    with_bias = ConvTranspose2d(1, 2, 2, 1, 0, True)
    without = ConvTranspose2d(1, 2, 2, 1, 0, False)
    without.weight.data[:] = list(with_bias.weight.data)
    with_bias.bias.data[:] = [0.5, -1.5]
    x = tensor([1.0, -2.0, 0.5, 3.0], [1, 1, 2, 2])
    a = with_bias.forward(x)
    b = without.forward(x)
    plane = 9
    for c, bias_val in enumerate(with_bias.bias.data):
        for i in range(plane):
            idx = c * plane + i
            assert a[idx] == pytest.approx(b[idx] + bias_val)


def test_conv_transpose_requires_grad_follows_input():
    layer = ConvTranspose2d(1, 1, 1, 1, 0, False)
    assert layer.forward(ones([1, 1, 2, 2], True)).requires_grad
    assert not layer.forward(ones([1, 1, 2, 2])).requires_grad


def test_conv_transpose_input_errors():
    layer = ConvTranspose2d(2, 1, 1, 1, 0, False)
    with pytest.raises(ValueError):
        layer.forward(ones([2, 2, 2]))
    with pytest.raises(ValueError):
        layer.forward(ones([1, 3, 2, 2]))
    padded = ConvTranspose2d(1, 1, 1, 1, 1, False)
    with pytest.raises(ValueError):
        padded.forward(ones([1, 1, 1, 1]))


def test_dropout2d_passthrough_cases():
    x = ones([1, 2, 2, 2])
    assert dropout2d(x, 0.5, False) is x
    assert dropout2d(x, 0.0, True) is x


@pytest.mark.parametrize("p", [1.0, -0.1, 1.5])
def test_dropout2d_invalid_probability(p):
    with pytest.raises(ValueError):
        dropout2d(ones([1, 1, 2, 2]), p, True)


def test_dropout2d_requires_4d():
    with pytest.raises(ValueError):
        dropout2d(ones([2, 2]), 0.5, True)


def test_dropout2d_drops_whole_channels_and_rescales():
    random.seed(3)
    p = 0.5
    x = tensor([float(i + 1) for i in range(4 * 5 * 3 * 3)], [4, 5, 3, 3], True)
    out = dropout2d(x, p, True)
    assert out.shape == x.shape
    assert out.requires_grad
    kept = dropped = 0
    for ch in range(4 * 5):
        seg_in = x.data[ch * 9:(ch + 1) * 9]
        seg_out = out.data[ch * 9:(ch + 1) * 9]
        if all(v == 0.0 for v in seg_out):
            dropped += 1
        else:
            assert seg_out == pytest.approx([v / (1 - p) for v in seg_in])
            kept += 1
    assert kept + dropped == 20
    assert kept > 0 and dropped > 0


def test_dropout2d_module_modes():
    random.seed(4)
    layer = Dropout2d(0.5)
    assert isinstance(layer, Module)
    assert layer.name() == "Dropout2d"
    assert layer.parameters() == []
    x = ones([2, 3, 2, 2])
    layer.eval()
    assert layer.forward(x) is x
    layer.train()
    out = layer.forward(x)
    assert out is not x
    assert set(out.data) <= {0.0, 2.0}


def test_dropout2d_module_default_probability():
    layer = Dropout2d()
    assert layer.p == 0.5
    assert layer.is_training