# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""(Almost) raw bindings to libtorch tensors.

Importing the package resolves the libtorch libraries; a missing artifact
raises ``ImportError`` here rather than on the first call.
"""

from __future__ import annotations

# Resolve and validate the native libraries before anything forwards to them
from . import _backend
from . import functional
from ._backend import include_paths, library_paths, libtorch_root
from .options import TensorOptions
from .tensor import MAX_INDEX_PUT_INDICES, Scalar, Tensor

try:
    from ._version import __version__, __version_tuple__
except ImportError:  # pragma: no cover - fallback for editable installs
    __version__ = "0.1.0"
    __version_tuple__ = (0, 1, 0)

functional = functional

# Free functions map directly to the functional forwarders.
for _name in functional.__all__:
    globals()[_name] = getattr(functional, _name)


__all__ = [
    "Tensor",
    "TensorOptions",
    "Scalar",
    "MAX_INDEX_PUT_INDICES",
    "functional",
    "include_paths",
    "library_paths",
    "libtorch_root",
    "__version__",
    *functional.__all__,
]
