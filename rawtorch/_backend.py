# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Locate and validate the libtorch artifacts the bindings forward to.

Python has no link step, so importing this module plays that role: the two
native libraries are resolved once, at import, and a missing artifact fails
the import instead of the first call. Nothing is ``dlopen``-ed here; the
libraries are already loaded by the compiled ``torch`` extension.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from threading import RLock
from typing import Iterable, List, Optional, Tuple

try:
    import torch as core
except ImportError as exc:  # pragma: no cover - surfaced during import
    raise ImportError(
        "rawtorch forwards every call to libtorch through the `torch` package, "
        "which could not be imported. Install it with `pip install torch`."
    ) from exc

logger = logging.getLogger(__name__)

LIBTORCH_DIR_ENV = "RAWTORCH_LIBTORCH_DIR"

# Core ABI first, then the CPU tensor operations built on top of it.
REQUIRED_LIBRARIES: Tuple[str, ...] = ("c10", "torch_cpu")

API_INCLUDE_SUBPATH = Path("torch") / "csrc" / "api" / "include"
TORCH_HEADER = Path("torch") / "torch.h"

# Native ``Tensor`` entry points the bindings forward to.
_REQUIRED_TENSOR_METHODS: Iterable[str] = (
    "dim",
    "ndimension",
    "nbytes",
    "numel",
    "itemsize",
    "element_size",
    "get_device",
    "is_cuda",
    "is_sparse",
    "is_mkldnn",
    "is_vulkan",
    "is_quantized",
    "is_meta",
    "item",
    "index_put_",
    "__iadd__",
    "__isub__",
    "__imul__",
    "__itruediv__",
    "__iand__",
    "__ior__",
    "__ixor__",
    "__neg__",
    "__invert__",
)

# Native free functions, looked up on the compiled `torch._C` extension.
_REQUIRED_NATIVE_FUNCTIONS: Iterable[str] = ("_has_storage",)

_RESOLVE_LOCK = RLock()
_LINKED: Optional[Tuple[Path, ...]] = None
_MISSING_REQUIRED: Optional[Tuple[str, ...]] = None


def library_suffix(platform: Optional[str] = None) -> str:
    """Shared library suffix for ``platform`` (defaults to ``sys.platform``)."""

    platform = sys.platform if platform is None else platform
    if platform.startswith("win"):
        return ".dll"
    elif platform == "darwin":
        return ".dylib"
    else:  # BSD / Linux
        return ".so"


def library_filename(name: str, platform: Optional[str] = None) -> str:
    """File name of the native library ``name`` on ``platform``.

    libtorch drops the ``lib`` prefix on Windows (``c10.dll``).
    """

    platform = sys.platform if platform is None else platform
    prefix = "" if platform.startswith("win") else "lib"
    return f"{prefix}{name}{library_suffix(platform)}"


def libtorch_root() -> Path:
    """Directory holding the libtorch ``lib/`` and ``include/`` trees.

    Resolution order: the ``RAWTORCH_LIBTORCH_DIR`` environment variable,
    a ``libtorch`` directory next to this package, then the installed
    ``torch`` distribution.
    """

    override = os.environ.get(LIBTORCH_DIR_ENV)
    if override:
        logger.debug("Using libtorch from %s=%s", LIBTORCH_DIR_ENV, override)
        return Path(override).expanduser()

    vendored = Path(__file__).resolve().parent.parent / "libtorch"
    if vendored.is_dir():
        logger.debug("Using vendored libtorch at %s", vendored)
        return vendored

    installed = Path(core.__file__).resolve().parent
    logger.debug("Using libtorch bundled with torch %s at %s", core.__version__, installed)
    return installed


def library_dir(root: Optional[Path] = None) -> Path:
    return (libtorch_root() if root is None else Path(root)) / "lib"


def library_paths(
    root: Optional[Path] = None, platform: Optional[str] = None
) -> List[Path]:
    """Paths of the required native libraries, in link order.

    Raises ``ImportError`` naming every missing artifact.
    """

    directory = library_dir(root)
    paths = [directory / library_filename(name, platform) for name in REQUIRED_LIBRARIES]
    missing = [str(path) for path in paths if not path.is_file()]
    if missing:
        raise ImportError(
            "Could not find the libtorch libraries: "
            f"{', '.join(missing)}. Install `torch` or set {LIBTORCH_DIR_ENV} "
            "to a libtorch distribution."
        )
    return paths


def include_paths(root: Optional[Path] = None) -> List[Path]:
    """Header search paths for C++ code built against the same libtorch.

    Returns the header root and the public API subpath, in that order.
    """

    headers = (libtorch_root() if root is None else Path(root)) / "include"
    api_headers = headers / API_INCLUDE_SUBPATH
    if not (api_headers / TORCH_HEADER).is_file():
        raise FileNotFoundError(
            f"libtorch public header {TORCH_HEADER} not found under {api_headers}"
        )
    return [headers, api_headers]


def linked_libraries() -> Tuple[Path, ...]:
    """Resolve the native libraries once and cache the result."""

    global _LINKED

    with _RESOLVE_LOCK:
        if _LINKED is None:
            _LINKED = tuple(library_paths())
            for path in _LINKED:
                logger.debug("Linked %s", path)
        return _LINKED


def ensure_tensor_entry_points() -> None:
    """Validate that the native ``Tensor`` exposes every forwarded entry point."""

    global _MISSING_REQUIRED

    with _RESOLVE_LOCK:
        if _MISSING_REQUIRED == ():
            return

        missing = [
            name for name in _REQUIRED_TENSOR_METHODS if not hasattr(core.Tensor, name)
        ]
        missing += [
            f"torch._C.{name}"
            for name in _REQUIRED_NATIVE_FUNCTIONS
            if not hasattr(core._C, name)
        ]
        if missing:
            _MISSING_REQUIRED = tuple(missing)
            raise RuntimeError(
                f"The installed torch {core.__version__} is missing Tensor entry points: "
                f"{', '.join(missing)}. Upgrade it (for example with "
                "`pip install -U torch`)."
            )

        _MISSING_REQUIRED = ()


linked_libraries()


__all__ = [
    "core",
    "logger",
    "LIBTORCH_DIR_ENV",
    "REQUIRED_LIBRARIES",
    "library_suffix",
    "library_filename",
    "libtorch_root",
    "library_dir",
    "library_paths",
    "include_paths",
    "linked_libraries",
    "ensure_tensor_entry_points",
]
