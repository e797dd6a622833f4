# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Version and build information.

Use the values in `mpcdfill.version` to query properties of the package.

Attributes:
    version (str): mpcdfill package version, in the format
        ``major.minor.patch``.

    gpu_enabled (bool): ``True`` when a CUDA device can be used through
        ``numba.cuda``.

    floating_point_precision (tuple[str, str]): Precision of the particle
        arrays and of the kernel arithmetic.
"""

from numba import cuda

version = "1.0.0"

gpu_enabled = cuda.is_available()

floating_point_precision = ("double", "double")

__all__ = [
    "floating_point_precision",
    "gpu_enabled",
    "version",
]
