# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""mpcdfill: virtual particle filling for MPCD simulations in curved channels.

Multiparticle collision dynamics (MPCD) collision cells that are cut by a solid
wall hold fewer particles than cells in the bulk fluid. `mpcdfill` adds
*virtual* particles just outside the walls every time step, with the bulk
density, a Maxwell-Boltzmann velocity distribution at the target temperature,
and the mean velocity of the wall, so that the boundary conditions are
enforced without biasing the bulk statistics.

.. rubric:: Example:

.. code-block:: python

    state = mpcdfill.State(box=mpcdfill.Box(20, 20, 20), seed=5)
    channel = mpcdfill.mpcd.geometry.SineChannel(
        amplitude=1.0, separation=4.0, repetitions=2, speed=0.5)
    filler = mpcdfill.mpcd.fill.GeometryFiller(
        type="A", density=5.0, kT=1.0, geometry=channel)
    filler.attach(state)

    for timestep in range(10):
        state.remove_virtual_particles()
        filler.fill(timestep)

See Also:
    `mpcdfill.mpcd.fill.GeometryFiller`
"""

from mpcdfill import version
from mpcdfill import error
from mpcdfill import variant
from mpcdfill import device
from mpcdfill import data
from mpcdfill import random
from mpcdfill.box import Box
from mpcdfill.state import State
from mpcdfill import mpcd

__version__ = version.version

__all__ = [
    "Box",
    "State",
    "data",
    "device",
    "error",
    "mpcd",
    "random",
    "variant",
    "version",
]
