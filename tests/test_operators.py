# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest
import torch

import rawtorch as rt

EYE2 = np.eye(2, dtype=np.float32)


def test_iadd_scalar_visible_through_aliases():
    a = rt.eye(2)
    same = a
    other_handle = rt.Tensor.from_native(a.native())
    view = a.index(slice(None))
    a += 1.0
    assert same is a
    for alias in (same, other_handle, view):
        np.testing.assert_array_equal(alias.native().numpy(), EYE2 + 1.0)


def test_iadd_mutates_storage_in_place():
    a = rt.eye(2)
    native = a.native()
    ptr = native.data_ptr()
    a += 2
    assert a.native() is native
    assert native.data_ptr() == ptr


@pytest.mark.parametrize(
    "apply, expected",
    [
        (lambda a, b: a.__iadd__(b), EYE2 + EYE2),
        (lambda a, b: a.__isub__(b), EYE2 - EYE2),
        (lambda a, b: a.__imul__(b), EYE2 * EYE2),
    ],
)
def test_tensor_operand(apply, expected):
    a = rt.eye(2)
    assert apply(a, rt.eye(2)) is a
    np.testing.assert_array_equal(a.native().numpy(), expected)


def test_scalar_operands():
    a = rt.eye(2)
    a *= 4
    a -= 1.0
    a /= 2
    np.testing.assert_array_equal(a.native().numpy(), (EYE2 * 4 - 1.0) / 2)


def test_itruediv_tensor_operand(wrap):
    a = wrap(torch.full((2,), 6.0))
    a /= wrap(torch.tensor([2.0, 3.0]))
    assert a.native().tolist() == [3.0, 2.0]


def test_bool_scalar_operand(wrap):
    a = wrap(torch.zeros(2, dtype=torch.int64))
    a += True
    assert a.native().tolist() == [1, 1]


def test_inplace_shape_mismatch_raises_native_error():
    a = rt.eye(2)
    with pytest.raises(RuntimeError):
        a += rt.eye(3)


def test_inplace_on_undefined_tensor():
    a = rt.Tensor.init()
    with pytest.raises(RuntimeError, match="undefined Tensor"):
        a += 1
    b = rt.eye(2)
    with pytest.raises(RuntimeError, match="undefined Tensor"):
        b += rt.Tensor.init()


def test_negation_returns_new_tensor():
    a = rt.eye(2)
    n = -a
    assert n != a
    np.testing.assert_array_equal(n.native().numpy(), -EYE2)
    np.testing.assert_array_equal(a.native().numpy(), EYE2)


def test_bitwise_not(wrap):
    a = wrap(torch.tensor([True, False]))
    assert (~a).native().tolist() == [False, True]
    assert a.native().tolist() == [True, False]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("bitand", [0b1000, 0b1010]),
        ("bitor", [0b1110, 0b1010]),
        ("bitxor", [0b0110, 0b0000]),
    ],
)
def test_bitwise_inplace_renamings(wrap, name, expected):
    a = wrap(torch.tensor([0b1100, 0b1010]))
    view = a.index(slice(None))
    assert getattr(a, name)(wrap(torch.tensor([0b1010, 0b1010]))) is None
    assert a.native().tolist() == expected
    assert view.native().tolist() == expected


def test_bitwise_function_forms(wrap):
    a = wrap(torch.tensor([0b1100]))
    rt.bitor(a, wrap(torch.tensor([0b0011])))
    assert a.native().tolist() == [0b1111]


def test_bitwise_compound_operators_keep_handle(wrap):
    a = wrap(torch.tensor([0b1100]))
    handle = a
    a &= wrap(torch.tensor([0b0100]))
    a |= wrap(torch.tensor([0b0001]))
    a ^= wrap(torch.tensor([0b0100]))
    assert a is handle
    assert a.native().tolist() == [0b0001]
