# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Storage of MPCD particle data.

`MPCDParticleData` owns the position, velocity and tag arrays of the MPCD
particles. Real particles occupy indices ``[0, N)``. Virtual particles are
appended after them and occupy ``[N, N + N_virtual)``. The arrays are
allocated with spare capacity so that virtual particles can be added every
time step without reallocating.

Each position is stored as ``(x, y, z, typeid)`` and each velocity as
``(vx, vy, vz, cell)``, both in double precision. ``cell`` holds the index of
the collision cell the particle was last binned into, or `NO_CELL` when the
particle has not been binned yet.
"""

import numpy as np

NO_CELL = 0xFFFFFFFF
"""int: Cell index of particles that have not been assigned a cell."""

_GROWTH_FACTOR = 1.5


class MPCDParticleData:
    """MPCD particle arrays.

    Args:
        N (int): Number of real particles.
        types (list[str]): Names of the particle types.
        mass (float): Mass of every MPCD particle :math:`[\\mathrm{mass}]`.
        position ((*N*, 3) `numpy.ndarray` of ``float``): Initial positions.
        velocity ((*N*, 3) `numpy.ndarray` of ``float``): Initial velocities.
        typeid ((*N*,) `numpy.ndarray` of ``int``): Initial type ids.

    Tags of the real particles are ``0`` to ``N-1``.
    """

    def __init__(
        self, N=0, types=("A",), mass=1.0, position=None, velocity=None, typeid=None
    ):
        self._types = list(types)
        if len(self._types) == 0:
            raise ValueError("At least one MPCD particle type is required.")
        self._mass = float(mass)
        self._N = int(N)
        self._N_virtual = 0

        capacity = max(self._N, 1)
        self._pos = np.zeros((capacity, 4), dtype=np.float64)
        self._vel = np.zeros((capacity, 4), dtype=np.float64)
        self._tag = np.zeros(capacity, dtype=np.uint32)

        if position is not None:
            self._pos[: self._N, :3] = position
        if velocity is not None:
            self._vel[: self._N, :3] = velocity
        if typeid is not None:
            self._pos[: self._N, 3] = typeid
        self._vel[: self._N, 3] = NO_CELL
        self._tag[: self._N] = np.arange(self._N, dtype=np.uint32)

    @property
    def N(self):
        """int: Number of real particles."""
        return self._N

    @property
    def N_virtual(self):
        """int: Number of virtual particles."""
        return self._N_virtual

    @property
    def N_global(self):
        """int: Number of real particles in the whole simulation."""
        return self._N

    @property
    def N_virtual_global(self):
        """int: Number of virtual particles in the whole simulation."""
        return self._N_virtual

    @property
    def capacity(self):
        """int: Number of particles the arrays can hold without growing."""
        return self._pos.shape[0]

    @property
    def types(self):
        """list[str]: Names of the particle types."""
        return list(self._types)

    @property
    def mass(self):
        """float: Mass of every MPCD particle :math:`[\\mathrm{mass}]`."""
        return self._mass

    def type_index(self, name):
        """Get the type id of a named type.

        Args:
            name (str): Type name.

        Returns:
            int: The type id.
        """
        try:
            return self._types.index(name)
        except ValueError as err:
            raise ValueError(
                "Type {} is not one of the MPCD types {}".format(name, self._types)
            ) from err

    @property
    def positions(self):
        """(*capacity*, 4) `numpy.ndarray`: Raw position buffer."""
        return self._pos

    @property
    def velocities(self):
        """(*capacity*, 4) `numpy.ndarray`: Raw velocity buffer."""
        return self._vel

    @property
    def tags(self):
        """(*capacity*,) `numpy.ndarray`: Raw tag buffer."""
        return self._tag

    def _reserve(self, N_total):
        if N_total <= self.capacity:
            return
        capacity = max(N_total, int(_GROWTH_FACTOR * self.capacity) + 1)
        for name in ("_pos", "_vel", "_tag"):
            old = getattr(self, name)
            new = np.zeros((capacity,) + old.shape[1:], dtype=old.dtype)
            new[: old.shape[0]] = old
            setattr(self, name, new)

    def add_virtual_particles(self, N_virtual):
        """Append space for virtual particles.

        Args:
            N_virtual (int): Number of virtual particles to add.

        Returns:
            int: Index of the first added particle. The caller owns the slots
            ``[first_idx, first_idx + N_virtual)`` and must fill them.
        """
        N_virtual = int(N_virtual)
        if N_virtual < 0:
            raise ValueError("Cannot add a negative number of virtual particles")
        first_idx = self._N + self._N_virtual
        self._reserve(first_idx + N_virtual)
        self._N_virtual += N_virtual
        return first_idx

    def remove_virtual_particles(self, N_virtual=None):
        """Remove virtual particles.

        Args:
            N_virtual (int): Number of virtual particles to remove from the end
                of the arrays. When `None`, remove all of them.
        """
        if N_virtual is None:
            self._N_virtual = 0
            return
        N_virtual = int(N_virtual)
        if not 0 <= N_virtual <= self._N_virtual:
            raise ValueError(
                "Cannot remove {} of {} virtual particles".format(
                    N_virtual, self._N_virtual
                )
            )
        self._N_virtual -= N_virtual

    def _slice(self, flag):
        if flag == "standard":
            return slice(0, self._N)
        elif flag == "virtual":
            return slice(self._N, self._N + self._N_virtual)
        elif flag == "both":
            return slice(0, self._N + self._N_virtual)
        raise ValueError("Unknown particle flag {}".format(flag))

    def get_position(self, flag="standard"):
        """Positions of the selected particles (view)."""
        return self._pos[self._slice(flag), :3]

    def get_typeid(self, flag="standard"):
        """Type ids of the selected particles (view, stored as ``float``)."""
        return self._pos[self._slice(flag), 3]

    def get_velocity(self, flag="standard"):
        """Velocities of the selected particles (view)."""
        return self._vel[self._slice(flag), :3]

    def get_cell(self, flag="standard"):
        """Cell indices of the selected particles (view, stored as ``float``)."""
        return self._vel[self._slice(flag), 3]

    def get_tag(self, flag="standard"):
        """Tags of the selected particles (view)."""
        return self._tag[self._slice(flag)]
