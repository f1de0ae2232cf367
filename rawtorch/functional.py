# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Free functions of libtorch (``Functions.h``) and function-call forms of the
``Tensor`` methods, so ``dim(t)`` reads like ``t.dim()``."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from ._backend import core as _torch
from .options import TensorOptions
from .tensor import Tensor


def eye(n: int, options: Optional[TensorOptions] = None) -> Tensor:
    """n x n identity matrix. ``n`` is handed to the native library as is."""
    kwargs = {} if options is None else options._factory_kwargs()
    return Tensor._wrap_core_tensor(_torch.eye(n, **kwargs))


def print(t: Tensor) -> None:  # noqa: A001 - mirrors torch::print
    t.print()


def index(t: Tensor, *indexers: Any) -> Tensor:
    return t.index(*indexers)


def index_put(t: Tensor, *args: Any) -> None:
    t.index_put(*args)


_TENSOR_FORWARDERS: Iterable[str] = (
    "defined",
    "dim",
    "ndimension",
    "nbytes",
    "numel",
    "itemsize",
    "element_size",
    "item",
    "reset",
    "has_storage",
    "get_device",
    "is_cuda",
    "is_hip",
    "is_sparse",
    "is_mkldnn",
    "is_vulkan",
    "is_quantized",
    "is_meta",
    "bitand",
    "bitor",
    "bitxor",
)


def _forwarder(name: str) -> Callable[..., Any]:
    method = getattr(Tensor, name)

    def forward(t: Tensor, *args: Any) -> Any:
        return method(t, *args)

    forward.__name__ = forward.__qualname__ = name
    forward.__doc__ = f"Function form of ``Tensor.{name}``."
    return forward


for _name in _TENSOR_FORWARDERS:
    globals()[_name] = _forwarder(_name)

__all__ = ["eye", "print", "index", "index_put", *_TENSOR_FORWARDERS]
