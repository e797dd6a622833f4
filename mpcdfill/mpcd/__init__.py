# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Multiparticle collision dynamics.

`mpcdfill.mpcd` describes the solid boundaries of an MPCD fluid and fills
virtual particles around them.

* `mpcdfill.mpcd.geometry` defines the shape and motion of the boundaries.
* `mpcdfill.mpcd.fill` adds the virtual particles each time step.
"""

from mpcdfill.mpcd import geometry
from mpcdfill.mpcd import fill

__all__ = [
    "fill",
    "geometry",
]
