# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
(Almost) raw bindings to libtorch tensors.

Differences with the native API:
- ``&=``, ``|=`` and ``^=`` are also available as ``bitand``, ``bitor`` and
  ``bitxor``.
- ``index`` and ``index_put`` share the ``[]`` / ``[]=`` interface.

Names follow libtorch rather than Python conventions so that the libtorch
documentation applies as is.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Union

from ._backend import core as _torch, ensure_tensor_entry_points

ensure_tensor_entry_points()

# Native scalars are tagged unions of double, int64 and complex, and every
# Python number converts implicitly, so no wrapper type is needed.
Scalar = Union[bool, int, float, complex]

# A batch of 3D videos (batch, time, channel, height, width, depth).
# Beyond that you are likely not indexing individual values.
MAX_INDEX_PUT_INDICES = 6


def _undefined_error(op: str) -> RuntimeError:
    return RuntimeError(f"{op}() called on an undefined Tensor")


def _unwrap(value: Any, op: str) -> Any:
    """Native value for ``value``; scalars and indexers pass through untouched."""
    if isinstance(value, Tensor):
        return value._defined(op)
    return value


def _index_put_1(t, i0, val) -> None:
    t[i0,] = val


def _index_put_2(t, i0, i1, val) -> None:
    t[i0, i1] = val


def _index_put_3(t, i0, i1, i2, val) -> None:
    t[i0, i1, i2] = val


def _index_put_4(t, i0, i1, i2, i3, val) -> None:
    t[i0, i1, i2, i3] = val


def _index_put_5(t, i0, i1, i2, i3, i4, val) -> None:
    t[i0, i1, i2, i3, i4] = val


def _index_put_6(t, i0, i1, i2, i3, i4, i5, val) -> None:
    t[i0, i1, i2, i3, i4, i5] = val


_INDEX_PUT_BY_ARITY: Dict[int, Callable[..., None]] = {
    1: _index_put_1,
    2: _index_put_2,
    3: _index_put_3,
    4: _index_put_4,
    5: _index_put_5,
    6: _index_put_6,
}


class Tensor:
    """
    Reference handle to a tensor owned by libtorch.

    Copying the handle never copies data: every call observes and may mutate
    the storage shared with the caller. ``==`` is identity of the native
    tensor, not value equality. A default-constructed handle is *undefined*
    and fails every query the native library rejects.
    """

    __slots__ = ("_tensor", "__weakref__")

    def __init__(self) -> None:
        self._tensor: Optional[_torch.Tensor] = None

    @classmethod
    def init(cls) -> "Tensor":
        """Undefined tensor, like ``torch::Tensor()``."""
        return cls()

    @classmethod
    def _wrap_core_tensor(cls, core_tensor: _torch.Tensor) -> "Tensor":
        instance = cls.__new__(cls)
        instance._tensor = core_tensor
        return instance

    @classmethod
    def from_native(cls, native: _torch.Tensor) -> "Tensor":
        """Wrap a ``torch.Tensor`` without copying it."""
        if not isinstance(native, _torch.Tensor):
            raise TypeError(
                f"from_native() expects a torch.Tensor, got {type(native).__name__}"
            )
        return cls._wrap_core_tensor(native)

    def native(self) -> Optional[_torch.Tensor]:
        """The wrapped ``torch.Tensor``, or ``None`` when undefined."""
        return self._tensor

    def _defined(self, op: str) -> _torch.Tensor:
        if self._tensor is None:
            raise _undefined_error(op)
        return self._tensor

    # Identity
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return self._tensor is other._tensor

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return self._tensor is not other._tensor

    # reset() rebinds the native tensor, so handles have no stable hash
    __hash__ = None  # type: ignore[assignment]

    # Strings & debugging
    def __repr__(self) -> str:
        if self._tensor is None:
            return "[ Tensor (undefined) ]"
        return repr(self._tensor)

    def __str__(self) -> str:
        if self._tensor is None:
            return "[ Tensor (undefined) ]"
        return str(self._tensor)

    def print(self) -> None:
        """Write the tensor to stdout, like ``torch::print``."""
        print(str(self))

    # Metadata
    def defined(self) -> bool:
        return self._tensor is not None

    def dim(self) -> int:
        return self._defined("dim").dim()

    def ndimension(self) -> int:
        return self._defined("ndimension").ndimension()

    def nbytes(self) -> int:
        return self._defined("nbytes").nbytes

    def numel(self) -> int:
        return self._defined("numel").numel()

    def itemsize(self) -> int:
        return self._defined("itemsize").itemsize

    def element_size(self) -> int:
        return self._defined("element_size").element_size()

    def item(self) -> Scalar:
        return self._defined("item").item()

    def reset(self) -> None:
        """Drop the native tensor; this handle becomes undefined."""
        self._tensor = None

    # Backend
    def has_storage(self) -> bool:
        return self._tensor is not None and _torch._C._has_storage(self._tensor)

    def get_device(self) -> int:
        """Device index, ``-1`` for CPU tensors."""
        return self._defined("get_device").get_device()

    # An undefined tensor has no device, so none of the device checks match.
    def is_cuda(self) -> bool:
        return self._tensor is not None and self._tensor.is_cuda

    def is_hip(self) -> bool:
        return self._tensor is not None and self._tensor.device.type == "hip"

    def is_sparse(self) -> bool:
        return self._tensor is not None and self._tensor.is_sparse

    def is_mkldnn(self) -> bool:
        return self._tensor is not None and self._tensor.is_mkldnn

    def is_vulkan(self) -> bool:
        return self._tensor is not None and self._tensor.is_vulkan

    def is_quantized(self) -> bool:
        return self._tensor is not None and self._tensor.is_quantized

    def is_meta(self) -> bool:
        return self._tensor is not None and self._tensor.is_meta

    # Indexing
    # See https://pytorch.org/cppdocs/notes/tensor_indexing.html
    def index(self, *indexers: Any) -> "Tensor":
        """
        Advanced indexing. Accepts ints, slices, ``None``, ``Ellipsis``, bools
        and tensors; the result aliases this tensor's storage whenever the
        native library returns a view.
        """
        native = self._defined("index")
        if not indexers:
            raise RuntimeError(
                "Passing an empty index list to Tensor::index() is not valid syntax"
            )
        key = tuple(_unwrap(i, "index") for i in indexers)
        return self._wrap_core_tensor(native[key])

    def index_put(self, *args: Any) -> None:
        """
        ``index_put(i0[, i1, ..., i5], value)``: write ``value`` (a Scalar or
        a Tensor) at the given indices, in place.

        At most ``MAX_INDEX_PUT_INDICES`` indices are accepted.
        """
        if len(args) < 2:
            raise TypeError(
                f"index_put() takes 1 to {MAX_INDEX_PUT_INDICES} indices and a value "
                f"({len(args)} arguments given)"
            )
        *indices, value = args
        entry = _INDEX_PUT_BY_ARITY.get(len(indices))
        if entry is None:
            raise TypeError(
                f"index_put() takes at most {MAX_INDEX_PUT_INDICES} indices "
                f"({len(indices)} given)"
            )
        native = self._defined("index_put")
        entry(
            native,
            *(_unwrap(i, "index_put") for i in indices),
            _unwrap(value, "index_put"),
        )

    def __getitem__(self, key: Any) -> "Tensor":
        # t[()] is an empty index list and fails like index()
        if isinstance(key, tuple):
            return self.index(*key)
        return self.index(key)

    def __setitem__(self, key: Any, value: Union["Tensor", Scalar]) -> None:
        if isinstance(key, tuple):
            self.index_put(*key, value)
        else:
            self.index_put(key, value)

    # Operators
    def __neg__(self) -> "Tensor":
        return self._wrap_core_tensor(-self._defined("neg"))

    def __invert__(self) -> "Tensor":
        return self._wrap_core_tensor(~self._defined("bitwise_not"))

    # In-place operators mutate the native tensor and hand back this same
    # handle, so the name stays bound to the mutated storage.
    def __iadd__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        native = self._defined("add_")
        native += _unwrap(other, "add_")
        return self

    def __isub__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        native = self._defined("sub_")
        native -= _unwrap(other, "sub_")
        return self

    def __imul__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        native = self._defined("mul_")
        native *= _unwrap(other, "mul_")
        return self

    def __itruediv__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        native = self._defined("div_")
        native /= _unwrap(other, "div_")
        return self

    def bitand(self, other: "Tensor") -> None:
        """In-place bitwise ``and``."""
        native = self._defined("bitwise_and_")
        native &= _unwrap(other, "bitwise_and_")

    def bitor(self, other: "Tensor") -> None:
        """In-place bitwise ``or``."""
        native = self._defined("bitwise_or_")
        native |= _unwrap(other, "bitwise_or_")

    def bitxor(self, other: "Tensor") -> None:
        """In-place bitwise ``xor``."""
        native = self._defined("bitwise_xor_")
        native ^= _unwrap(other, "bitwise_xor_")

    def __iand__(self, other: "Tensor") -> "Tensor":
        self.bitand(other)
        return self

    def __ior__(self, other: "Tensor") -> "Tensor":
        self.bitor(other)
        return self

    def __ixor__(self, other: "Tensor") -> "Tensor":
        self.bitxor(other)
        return self


__all__ = [
    "Tensor",
    "Scalar",
    "MAX_INDEX_PUT_INDICES",
]
