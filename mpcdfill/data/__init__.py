# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Access MPCD particle data and validate operation parameters.

`MPCDParticleData` stores the MPCD particle arrays of a `mpcdfill.State`.
Use `mpcdfill.State.cpu_local_snapshot` to access them through
`MPCDParticleLocalAccess`.
"""

from .local_access import MPCDParticleLocalAccess
from .parameterdicts import ParameterDict
from .particle_data import MPCDParticleData, NO_CELL

__all__ = [
    "NO_CELL",
    "MPCDParticleData",
    "MPCDParticleLocalAccess",
    "ParameterDict",
]
