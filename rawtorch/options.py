# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
``TensorOptions``: the value-type descriptor of tensor construction parameters.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from ._backend import core as _torch

_UNSET: Any = object()

_FIELDS = ("_dtype", "_device", "_layout", "_requires_grad", "_pinned_memory")


class TensorOptions:
    """
    Construction parameters (dtype, device, layout, requires_grad,
    pinned_memory) passed to tensor factories.

    Mirrors ``torch::TensorOptions``: a plain value. Instances are never
    mutated; every setter returns a new ``TensorOptions``, so handing one to a
    callee behaves exactly like passing a copy. Getters report the native
    default for fields that were never set.

    Examples:
        >>> opts = TensorOptions.init().dtype(torch.float64)
        >>> opts.has_dtype(), opts.has_device()
        (True, False)
    """

    __slots__ = _FIELDS

    def __init__(self) -> None:
        self._dtype: Optional[_torch.dtype] = None
        self._device: Optional[_torch.device] = None
        self._layout: Optional[_torch.layout] = None
        self._requires_grad: Optional[bool] = None
        self._pinned_memory: Optional[bool] = None

    @classmethod
    def init(cls) -> "TensorOptions":
        """Default options, nothing explicitly set."""
        return cls()

    def _with(self, **changes: Any) -> "TensorOptions":
        clone = TensorOptions.__new__(TensorOptions)
        for field in _FIELDS:
            setattr(clone, field, changes.get(field, getattr(self, field)))
        return clone

    # Value semantics: nothing to copy in an immutable value
    def __copy__(self) -> "TensorOptions":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "TensorOptions":
        return self

    def dtype(self, dtype: Any = _UNSET):
        if dtype is _UNSET:
            return self._dtype if self._dtype is not None else _torch.get_default_dtype()
        return self._with(_dtype=dtype)

    def device(self, device: Any = _UNSET):
        if device is _UNSET:
            return self._device if self._device is not None else _torch.device("cpu")
        # Strings and indices convert implicitly, as they do natively
        return self._with(_device=_torch.device(device))

    def layout(self, layout: Any = _UNSET):
        if layout is _UNSET:
            return self._layout if self._layout is not None else _torch.strided
        return self._with(_layout=layout)

    def requires_grad(self, requires_grad: Any = _UNSET):
        if requires_grad is _UNSET:
            return bool(self._requires_grad)
        return self._with(_requires_grad=bool(requires_grad))

    def pinned_memory(self, pinned_memory: Any = _UNSET):
        if pinned_memory is _UNSET:
            return bool(self._pinned_memory)
        return self._with(_pinned_memory=bool(pinned_memory))

    def has_dtype(self) -> bool:
        return self._dtype is not None

    def has_device(self) -> bool:
        return self._device is not None

    def has_layout(self) -> bool:
        return self._layout is not None

    def has_requires_grad(self) -> bool:
        return self._requires_grad is not None

    def has_pinned_memory(self) -> bool:
        return self._pinned_memory is not None

    def _factory_kwargs(self) -> Dict[str, Union[_torch.dtype, _torch.device, _torch.layout, bool]]:
        """Keyword arguments for a native factory; unset fields are left out."""
        kwargs: Dict[str, Any] = {}
        if self._dtype is not None:
            kwargs["dtype"] = self._dtype
        if self._device is not None:
            kwargs["device"] = self._device
        if self._layout is not None:
            kwargs["layout"] = self._layout
        if self._requires_grad is not None:
            kwargs["requires_grad"] = self._requires_grad
        if self._pinned_memory is not None:
            kwargs["pin_memory"] = self._pinned_memory
        return kwargs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TensorOptions):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in _FIELDS)

    def __hash__(self) -> int:
        return hash(tuple(getattr(self, f) for f in _FIELDS))

    def __repr__(self) -> str:
        return (
            f"TensorOptions(dtype={self.dtype()}, device={self.device()}, "
            f"layout={self.layout()}, requires_grad={self.requires_grad()}, "
            f"pinned_memory={self.pinned_memory()})"
        )


__all__ = ["TensorOptions"]
