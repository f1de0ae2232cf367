# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import torch  # noqa: E402

import rawtorch as rt  # noqa: E402


@pytest.fixture
def eye4():
    return rt.eye(4)


@pytest.fixture
def wrap():
    """Wrap a freshly built ``torch.Tensor`` in a handle."""

    def _wrap(native: torch.Tensor) -> rt.Tensor:
        return rt.Tensor.from_native(native)

    return _wrap
