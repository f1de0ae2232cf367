# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest
import torch

import rawtorch as rt

_FLOAT32_BYTES = np.dtype(np.float32).itemsize

# Accessor values of a 4x4 float32 identity on CPU, as libtorch reports them.
EYE4_GOLDEN = {
    "dim": 2,
    "ndimension": 2,
    "numel": 16,
    "nbytes": 16 * _FLOAT32_BYTES,
    "itemsize": _FLOAT32_BYTES,
    "element_size": _FLOAT32_BYTES,
    "has_storage": True,
    "get_device": -1,
    "is_cuda": False,
    "is_hip": False,
    "is_sparse": False,
    "is_mkldnn": False,
    "is_vulkan": False,
    "is_quantized": False,
    "is_meta": False,
}


@pytest.mark.parametrize("accessor, expected", sorted(EYE4_GOLDEN.items()))
def test_eye4_golden_values(eye4, accessor, expected):
    assert torch.get_default_dtype() == torch.float32
    value = getattr(eye4, accessor)()
    assert type(value) is type(expected)
    assert value == expected


@pytest.mark.parametrize("accessor", sorted(EYE4_GOLDEN))
def test_function_forms_match_methods(eye4, accessor):
    assert getattr(rt, accessor)(eye4) == getattr(eye4, accessor)()


def test_counts_are_not_narrowed(wrap):
    # Larger than any 32-bit count, without allocating storage.
    big = wrap(torch.empty(2**20, 2**12, device="meta"))
    assert big.numel() == 2**32
    assert big.nbytes() == 2**32 * _FLOAT32_BYTES
    assert big.is_meta()


def test_sparse_tensor_has_no_storage(wrap):
    sparse = wrap(torch.eye(3).to_sparse())
    assert sparse.is_sparse()
    assert not sparse.has_storage()


def test_quantized_tensor(wrap):
    q = wrap(torch.quantize_per_tensor(torch.eye(2), 0.1, 0, torch.quint8))
    assert q.is_quantized()
    assert q.element_size() == 1


def test_element_size_follows_dtype(wrap):
    assert wrap(torch.zeros(2, dtype=torch.float64)).element_size() == 8
    assert wrap(torch.zeros(2, dtype=torch.int16)).itemsize() == 2
    assert wrap(torch.zeros(2, dtype=torch.bool)).nbytes() == 2


def test_item_on_single_element(eye4):
    assert eye4.index(0, 0).item() == 1.0
    assert eye4.index(0, 1).item() == 0.0


def test_item_on_many_elements_raises_native_error(eye4):
    with pytest.raises(RuntimeError):
        eye4.item()


def test_reset_makes_handle_undefined():
    t = rt.eye(3)
    alias = t
    row = t.index(0)
    t.reset()
    assert not alias.defined()
    assert not alias.has_storage()
    with pytest.raises(RuntimeError, match="undefined Tensor"):
        alias.dim()
    # Other handles keep their own reference to the storage
    assert row.defined()
    assert row.numel() == 3


def test_reset_through_function_form():
    t = rt.eye(2)
    rt.reset(t)
    assert not rt.defined(t)


def test_reset_undefined_is_noop():
    t = rt.Tensor.init()
    t.reset()
    assert not t.defined()


def test_has_storage_forwards_to_native(wrap):
    for native in (
        torch.eye(2),
        torch.eye(3).to_sparse(),
        torch.empty(2, device="meta"),
        torch.zeros(0),
    ):
        assert wrap(native).has_storage() is torch._C._has_storage(native)


def test_has_storage_on_nested_tensor(wrap):
    nested = torch.nested.nested_tensor([torch.zeros(2), torch.zeros(3)])
    assert wrap(nested).has_storage() is torch._C._has_storage(nested)
