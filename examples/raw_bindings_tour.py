# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Walk through the raw libtorch bindings.

Builds an identity matrix, writes through ``index_put``, and shows that an
in-place operator is visible through every handle aliasing the storage.
All computation happens in libtorch; this script only forwards calls.
"""

from __future__ import annotations

import torch

import rawtorch as rt


def run(verbose: bool = True):
    """Return ``(before, after)`` values of a diagonal element seen through a view.

    Parameters
    ----------
    verbose:
        If ``True``, prints the tensor metadata and the final tensor.
    """
    options = rt.TensorOptions.init().dtype(torch.float64)
    t = rt.eye(3, options)
    if verbose:
        print(f"dim={t.dim()} numel={t.numel()} element_size={t.element_size()}")

    row = t.index(1)
    before = row.index(1).item()

    t.index_put(0, 2, 5.0)
    t += 1.0

    if verbose:
        rt.print(t)
    return before, row.index(1).item()


if __name__ == "__main__":
    run()
