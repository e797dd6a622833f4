# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Backend objects of the MPCD package.

The user facing classes in `mpcdfill.mpcd.geometry` and `mpcdfill.mpcd.fill`
hold parameters and build the objects in this module when they are attached.
The objects here carry the resolved values and call the kernels.
"""

import enum
import math
import typing

import numba
from numba import cuda

from mpcdfill.mpcd import kernels


class BoundaryCondition(enum.Enum):
    """Boundary condition on a solid surface.

    The fill kernels do not read the boundary condition. Virtual particles
    always carry the wall velocity. The value is kept on the geometry for the
    bounce-back step of an MPCD streaming method that uses the same geometry.
    """

    no_slip = 0
    slip = 1


class SineGeometry(typing.NamedTuple):
    """Sinusoidal channel walls.

    The walls are the surfaces

    .. math::

        z = \\pm \\left[A \\cos(k x) + A + H\\right]

    with :math:`k = \\pi p / L`. :math:`H` is the half width of the channel at
    its narrowest point and :math:`2A + H` the half width at its widest point.

    `SineGeometry` is an immutable value. Kernels receive its fields as scalar
    arguments.
    """

    L: float
    """Length of the channel in *x*."""

    amplitude: float
    """Amplitude :math:`A` of the cosine."""

    H: float
    """Half width of the channel at its narrowest point."""

    repetitions: int
    """Number :math:`p` of repetitions of the wall pattern."""

    velocity: float
    """Wall speed :math:`V`. The upper wall moves with :math:`+V` in *x*, the
    lower wall with :math:`-V`."""

    boundary_condition: BoundaryCondition
    """Boundary condition on the walls, for bounce-back streaming only."""

    @property
    def wavenumber(self):
        """float: Period factor :math:`k = \\pi p / L`."""
        return math.pi * self.repetitions / self.L

    @property
    def wide_half_width(self):
        """float: Half width of the channel at its widest point."""
        return 2.0 * self.amplitude + self.H

    def wall_offset(self, x, sign):
        """Position of a wall in *z*.

        Args:
            x (float): Lateral position.
            sign (float): -1 for the lower wall, +1 for the upper wall.

        Returns:
            float: :math:`\\mathrm{sign} (A \\cos(k x) + A + H)`.
        """
        return kernels.wall_offset(
            x, sign, self.amplitude, self.wavenumber, self.H
        )

    def wall_velocity(self, sign):
        """Velocity of a wall in *x*.

        Args:
            sign (float): -1 for the lower wall, +1 for the upper wall.

        Returns:
            float: :math:`\\mathrm{sign} V`.
        """
        return sign * self.velocity

    def is_outside(self, x, z):
        """Test whether a point lies outside the fluid region.

        Args:
            x (float): Lateral position.
            z (float): Position normal to the walls.

        Returns:
            bool: True if the point is beyond either wall.
        """
        return abs(z) > self.wall_offset(x, 1.0)

    def validate_box(self, box, thickness):
        """Test whether the box holds the channel and its fill shells.

        Args:
            box (mpcdfill.Box): Simulation box.
            thickness (float): Depth of the fill shell outside each wall.

        Returns:
            bool: True if the box is large enough in *z*.
        """
        return 0.5 * box.Lz >= self.wide_half_width + thickness


class SineGeometryFiller:
    """Fill virtual particles outside a `SineGeometry` on the CPU.

    Args:
        state (mpcdfill.State): State holding the particles.
        type (str): Type of the virtual particles.
        density (float): Number density of the virtual particles.
        kT (mpcdfill.variant.Variant): Temperature.
        geometry (SineGeometry): Channel geometry.
        thickness (float): Depth of the fill shell outside each wall.
        block_size (int): Number of particles drawn by one parallel task.

    Each call to `fill` appends ``N_fill`` virtual particles to the particle
    arrays, half of them in the shell below the lower wall and half in the
    shell above the upper wall.
    """

    __slots__ = (
        "_state",
        "_mpcd_data",
        "_device",
        "_geom",
        "_type",
        "_type_id",
        "_density",
        "_kT",
        "_thickness",
        "_block_size",
        "_N_fill",
        "_first_tag",
    )

    def __init__(self, state, type, density, kT, geometry, thickness, block_size):
        self._state = state
        self._mpcd_data = state._mpcd_data
        self._device = state.device
        self._geom = geometry
        self._type = type
        self._type_id = self._mpcd_data.type_index(type)
        self._density = density
        self._kT = kT
        self._block_size = block_size
        self._N_fill = 0
        self._first_tag = 0
        self.thickness = thickness

    @property
    def type(self):
        """str: Type of the virtual particles."""
        return self._type

    @type.setter
    def type(self, type):
        self._type_id = self._mpcd_data.type_index(type)
        self._type = type

    @property
    def density(self):
        """float: Number density of the virtual particles."""
        return self._density

    @density.setter
    def density(self, density):
        self._density = density

    @property
    def kT(self):
        """mpcdfill.variant.Variant: Temperature."""
        return self._kT

    @kT.setter
    def kT(self, kT):
        self._kT = kT

    @property
    def thickness(self):
        """float: Depth of the fill shell outside each wall."""
        return self._thickness

    @thickness.setter
    def thickness(self, thickness):
        if not self._geom.validate_box(self._state.box, thickness):
            raise ValueError(
                "Simulation box is too small in z for the channel and a fill "
                "shell of thickness {}: need Lz >= {}".format(
                    thickness, 2.0 * (self._geom.wide_half_width + thickness)
                )
            )
        self._thickness = thickness

    @property
    def block_size(self):
        """int: Number of particles drawn by one parallel task."""
        return self._block_size

    @block_size.setter
    def block_size(self, block_size):
        self._block_size = block_size

    @property
    def N_fill(self):
        """int: Number of particles added by the last call to `fill`."""
        return self._N_fill

    @property
    def first_tag(self):
        """int: Tag of the first particle added by the last call to `fill`."""
        return self._first_tag

    def compute_num_fill(self):
        """Compute the number of particles to fill.

        The shell between a wall and the surface shifted by ``thickness`` in
        *z* has volume :math:`L_x L_y \\delta` regardless of the wall shape.
        The same number of particles is placed outside each wall.

        Returns:
            int: Total number of particles for both shells.
        """
        box = self._state.box
        N_shell = int(round(self._density * box.Lx * box.Ly * self._thickness))
        return 2 * N_shell

    def fill(self, timestep):
        """Add virtual particles for a time step.

        Args:
            timestep (int): Current time step.
        """
        self._N_fill = self.compute_num_fill()
        self._first_tag = (
            self._mpcd_data.N_global + self._mpcd_data.N_virtual_global
        )
        first_idx = self._mpcd_data.add_virtual_particles(self._N_fill)
        try:
            self._draw_particles(timestep, first_idx)
        except Exception:
            self._mpcd_data.remove_virtual_particles(self._N_fill)
            self._N_fill = 0
            raise
        self._device._msg.notice(
            5,
            "Filled {} virtual particles at step {} (tags {} to {})\n".format(
                self._N_fill,
                timestep,
                self._first_tag,
                self._first_tag + self._N_fill - 1,
            ),
        )

    def _draw_particles(self, timestep, first_idx):
        num_cpu_threads = getattr(self._device, "num_cpu_threads", None)
        # the thread count is process wide, restore it for other devices
        previous_threads = numba.get_num_threads()
        if num_cpu_threads is not None:
            numba.set_num_threads(num_cpu_threads)
        try:
            kernels.draw_particles_cpu(
                self._mpcd_data.positions,
                self._mpcd_data.velocities,
                self._mpcd_data.tags,
                self._geom,
                self._state.box,
                self._thickness,
                self._mpcd_data.mass,
                self._type_id,
                self._N_fill,
                self._first_tag,
                first_idx,
                self._kT(timestep),
                timestep,
                self._state.seed,
                self._block_size,
            )
        finally:
            numba.set_num_threads(previous_threads)


class SineGeometryFillerGPU(SineGeometryFiller):
    """Fill virtual particles outside a `SineGeometry` on the GPU.

    Takes the same arguments as `SineGeometryFiller`. The state's device must
    be a `mpcdfill.device.GPU`. Constructing the filler compiles the kernel and
    stores its block size limit in the device's kernel limits.
    """

    __slots__ = ("_max_block_size",)
    _kernel_name = "sine_geometry_fill"

    def __init__(self, state, type, density, kT, geometry, thickness, block_size):
        super().__init__(state, type, density, kT, geometry, thickness, block_size)
        self._max_block_size = self._device._cache_kernel_limit(
            self._kernel_name, kernels.gpu_max_block_size
        )

    @property
    def max_block_size(self):
        """int: Largest block size the fill kernel supports on the device."""
        return self._max_block_size

    def _draw_particles(self, timestep, first_idx):
        pos = self._mpcd_data.positions
        vel = self._mpcd_data.velocities
        tag = self._mpcd_data.tags

        d_pos = cuda.to_device(pos)
        d_vel = cuda.to_device(vel)
        d_tag = cuda.to_device(tag)
        kernels.draw_particles_gpu(
            d_pos,
            d_vel,
            d_tag,
            self._geom,
            self._state.box,
            self._thickness,
            self._mpcd_data.mass,
            self._type_id,
            self._N_fill,
            self._first_tag,
            first_idx,
            self._kT(timestep),
            timestep,
            self._state.seed,
            self._block_size,
            self._max_block_size,
        )
        d_pos.copy_to_host(pos)
        d_vel.copy_to_host(vel)
        d_tag.copy_to_host(tag)
