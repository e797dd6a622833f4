# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Hold the simulation state used by virtual particle fillers."""

from mpcdfill.box import Box
from mpcdfill.data.local_access import _LocalSnapshot
from mpcdfill.data.particle_data import MPCDParticleData
import mpcdfill.device


class State:
    """The state of an MPCD simulation.

    Args:
        box (mpcdfill.Box): Simulation box, or ``[Lx, Ly, Lz]``.
        N (int): Number of real MPCD particles.
        types (list[str]): MPCD particle type names.
        mass (float): MPCD particle mass :math:`[\\mathrm{mass}]`.
        seed (int): Random number seed.
        device (mpcdfill.device.Device): Device executing the kernels. When
            `None`, use `mpcdfill.device.auto_select`.
        position ((*N*, 3) `numpy.ndarray` of ``float``): Initial positions.
        velocity ((*N*, 3) `numpy.ndarray` of ``float``): Initial velocities.

    .. rubric:: Example:

    .. code-block:: python

        state = mpcdfill.State(box=mpcdfill.Box(20, 20, 10), seed=1)

    .. rubric:: Seed

    Only the lowest 16 bits of `seed` are used, matching the size of the seed
    field in the random number key. Operations that draw random numbers derive
    independent streams from `seed`, their own identifier, the particle tag and
    the time step.
    """

    def __init__(
        self,
        box,
        N=0,
        types=("A",),
        mass=1.0,
        seed=0,
        device=None,
        position=None,
        velocity=None,
    ):
        self._box = Box.from_box(box)
        self.seed = seed
        if device is None:
            device = mpcdfill.device.auto_select()
        self._device = device
        self._mpcd_data = MPCDParticleData(
            N=N, types=types, mass=mass, position=position, velocity=velocity
        )
        self._in_context_manager = False

    @property
    def box(self):
        """mpcdfill.Box: A copy of the simulation box."""
        return Box.from_box(self._box)

    @property
    def device(self):
        """mpcdfill.device.Device: Device executing the kernels."""
        return self._device

    @property
    def seed(self):
        """int: Random number seed.

        Seeds are in the range [0, 65535]. When set, `seed` will take only the
        lowest 16 bits of the given value.
        """
        return self._seed

    @seed.setter
    def seed(self, value):
        self._seed = int(value) & 0xFFFF

    @property
    def mpcd_types(self):
        """list[str]: MPCD particle type names."""
        return self._mpcd_data.types

    @property
    def N_mpcd_particles(self):
        """int: Number of real MPCD particles."""
        return self._mpcd_data.N

    @property
    def N_virtual_particles(self):
        """int: Number of virtual MPCD particles currently stored."""
        return self._mpcd_data.N_virtual

    @property
    def cpu_local_snapshot(self):
        """mpcdfill.data.local_access._LocalSnapshot: Expose the particle \
        arrays on the CPU.

        Use the returned object as a context manager. The arrays are only
        valid inside the ``with`` block.

        .. rubric:: Example:

        .. code-block:: python

            with state.cpu_local_snapshot as snap:
                print(snap.mpcd.virtual_position)
        """
        if self._in_context_manager:
            raise RuntimeError("Cannot enter cpu_local_snapshot context manager inside "
                               "another local_snapshot context manager.")
        return _LocalSnapshot(self)

    def remove_virtual_particles(self):
        """Remove all virtual particles from the state.

        Call this at the start of each time step before filling new virtual
        particles.
        """
        self._mpcd_data.remove_virtual_particles()
