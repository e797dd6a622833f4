# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

r"""Virtual particles are MPCD particles that are added to ensure MPCD
collision cells that are sliced by solid boundaries do not become "underfilled".
From the perspective of the MPCD algorithm, the number density of particles in
these sliced cells is lower than the average density, and so the transport
properties may differ. In practice, this usually means that the boundary
conditions do not appear to be properly enforced.

Virtual particles only live for one time step. At the start of each step,
remove the virtual particles of the previous step with
`mpcdfill.State.remove_virtual_particles` and then call `fill` on every
filler.

.. invisible-code-block: python

    state = mpcdfill.State(box=mpcdfill.Box(20, 20, 20), seed=1)
    channel = mpcdfill.mpcd.geometry.SineChannel(amplitude=1.0, separation=4.0)

"""

import mpcdfill
from mpcdfill.data.parameterdicts import ParameterDict
from mpcdfill.data.typeconverter import OnlyTypes, nonnegative_real, positive_real
from mpcdfill.error import DataAccessError, TypeConversionError
from mpcdfill.mpcd import _mpcd
from mpcdfill.mpcd.geometry import Geometry, SineChannel
from mpcdfill.operation import Operation


class VirtualParticleFiller(Operation):
    """Base virtual-particle filler.

    Args:
        type (str): Type of particles to fill.
        density (float): Particle number density.
        kT (mpcdfill.variant.variant_like): Temperature of particles.

    Virtual particles will be added with the specified `type` and `density`.
    Their velocities will be drawn from a Maxwell--Boltzmann distribution
    consistent with `kT`.

    {inherited}

    ----------

    **Members defined in** `VirtualParticleFiller`:

    Attributes:
        density (float): Particle number density.

            .. rubric:: Example:

            .. code-block:: python

                filler.density = 5.0

        kT (mpcdfill.variant.variant_like): Temperature of particles.

            .. rubric:: Examples:

            Constant temperature.

            .. code-block:: python

                filler.kT = 1.0

            Variable temperature.

            .. code-block:: python

                filler.kT = mpcdfill.variant.Ramp(1.0, 2.0, 0, 100)

        type (str): Type of particles to fill.

            .. rubric:: Example:

            .. code-block:: python

                filler.type = "A"

    """

    __doc__ = __doc__.replace("{inherited}", Operation._doc_inherited)
    _doc_inherited = (
        Operation._doc_inherited
        + """
    ----------

    **Members inherited from**
    `VirtualParticleFiller <mpcdfill.mpcd.fill.VirtualParticleFiller>`:

    .. py:attribute:: density

        Particle number density.
        `Read more... <mpcdfill.mpcd.fill.VirtualParticleFiller.density>`

    .. py:attribute:: kT

        Temperature of particles.
        `Read more... <mpcdfill.mpcd.fill.VirtualParticleFiller.kT>`

    .. py:attribute:: type

        Type of particles to fill.
        `Read more... <mpcdfill.mpcd.fill.VirtualParticleFiller.type>`

    .. py:method:: fill

        Add virtual particles for a time step.
        `Read more... <mpcdfill.mpcd.fill.VirtualParticleFiller.fill>`
    """
    )

    def __init__(self, type, density, kT):
        super().__init__()

        param_dict = ParameterDict(
            type=str(type),
            density=OnlyTypes(float, preprocess=nonnegative_real),
            kT=mpcdfill.variant.Variant,
        )
        param_dict["density"] = density
        param_dict["kT"] = kT
        self._param_dict.update(param_dict)

    def attach(self, state):
        """Attach the filler to a state.

        Args:
            state (mpcdfill.State): State to fill virtual particles into.

        .. rubric:: Example:

        .. code-block:: python

            filler.attach(state)
        """
        if self._attached:
            raise RuntimeError("The filler is already attached to a state.")
        self._attach(state)

    def detach(self):
        """Detach the filler from its state.

        Parameter values are kept and the filler may be attached again.
        """
        self._detach()

    def fill(self, timestep):
        """Add virtual particles for a time step.

        Args:
            timestep (int): Current time step.

        Raises:
            mpcdfill.error.DataAccessError: When the filler is not attached.
            RuntimeError: When called inside a local snapshot context manager.

        Filling may reallocate the particle arrays, which would invalidate the
        arrays of an open `mpcdfill.State.cpu_local_snapshot`.

        .. rubric:: Example:

        .. code-block:: python

            state.remove_virtual_particles()
            filler.fill(timestep=0)
        """
        if not self._attached:
            raise DataAccessError("fill")
        if self._state._in_context_manager:
            raise RuntimeError(
                "Cannot fill virtual particles inside a local snapshot context "
                "manager."
            )
        self._cpp_obj.fill(int(timestep))

    @property
    def N_fill(self):
        """int: Number of particles added by the most recent `fill`.

        Raises:
            mpcdfill.error.DataAccessError: When the filler is not attached.
        """
        if not self._attached:
            raise DataAccessError("N_fill")
        return self._cpp_obj.N_fill


class GeometryFiller(VirtualParticleFiller):
    """Virtual-particle filler for a bounce-back geometry.

    Args:
        type (str): Type of particles to fill.
        density (float): Particle number density.
        kT (mpcdfill.variant.variant_like): Temperature of particles.
        geometry (mpcdfill.mpcd.geometry.Geometry): Surface to fill around.
        thickness (float): Depth of the fill shell outside each surface.
        block_size (int): Number of particles drawn by one parallel task.

    Virtual particles are inserted in a shell of depth `thickness` just
    outside the surfaces of the specified `geometry`. Choose `thickness` at
    least as large as the collision cell size plus the largest grid shift so
    that every cell sliced by a surface is filled. The algorithm for doing the
    filling depends on the specific `geometry`.

    The particles are drawn in parallel. Each particle draws its random numbers
    from its own stream, identified by the state seed, its tag and the time
    step, so the result does not depend on the device or on `block_size`.

    .. rubric:: Limitations:

    This filler **does not** support triclinic boxes.

    .. rubric:: Example:

    Filler for a sinusoidal channel.

    .. code-block:: python

        filler = mpcdfill.mpcd.fill.GeometryFiller(
            type="A", density=5.0, kT=1.0, geometry=channel
        )
        filler.attach(state)

    {inherited}

    ----------

    **Members defined in** `GeometryFiller`:

    Attributes:
        geometry (mpcdfill.mpcd.geometry.Geometry): Surface to fill around
            (*read only*).

        thickness (float): Depth of the fill shell outside each surface.

        block_size (int): Number of particles drawn by one parallel task. On
            the GPU, this is the CUDA block size. It is clamped to the largest
            block size the kernel supports.
    """

    __doc__ = __doc__.replace("{inherited}", VirtualParticleFiller._doc_inherited)
    _cpp_class_map = {}

    def __init__(self, type, density, kT, geometry, thickness=1.0, block_size=256):
        super().__init__(type, density, kT)

        param_dict = ParameterDict(
            geometry=Geometry,
            thickness=OnlyTypes(float, preprocess=positive_real),
            block_size=OnlyTypes(int, preprocess=_positive_int),
        )
        param_dict["geometry"] = geometry
        param_dict["thickness"] = thickness
        param_dict["block_size"] = block_size
        self._param_dict.update(param_dict)

    def _attach_hook(self):
        state = self._state

        self.geometry._attach(state)

        # try to find class in map, otherwise default to internal MPCD module
        geom_type = type(self.geometry)
        try:
            class_info = self._cpp_class_map[geom_type]
        except KeyError:
            class_info = (_mpcd, geom_type.__name__ + "GeometryFiller")
        class_info = list(class_info)
        if isinstance(state.device, mpcdfill.device.GPU):
            class_info[1] += "GPU"
        class_ = getattr(*class_info, None)
        if class_ is None:
            self.geometry._detach()
            raise NotImplementedError(
                "Virtual particle filler for geometry {} not found".format(
                    geom_type.__name__
                )
            )

        try:
            self._cpp_obj = class_(
                state,
                self.type,
                self.density,
                self.kT,
                self.geometry._cpp_obj,
                self.thickness,
                self.block_size,
            )
        except Exception:
            self.geometry._detach()
            raise

        state.device.notice(
            "Attached {} with {} virtual particles per fill".format(
                type(self._cpp_obj).__name__, self._cpp_obj.compute_num_fill()
            ),
            level=2,
        )
        super()._attach_hook()

    def _detach_hook(self):
        self.geometry._detach()
        super()._detach_hook()

    @classmethod
    def _register_cpp_class(cls, geometry, module, cpp_class_name):
        cls._cpp_class_map[geometry] = (module, cpp_class_name)


def _positive_int(value):
    value = int(value)
    if value <= 0:
        raise TypeConversionError(
            "Expected a positive integer, got {}".format(value)
        )
    return value


GeometryFiller._register_cpp_class(SineChannel, _mpcd, "SineGeometryFiller")

__all__ = [
    "GeometryFiller",
    "VirtualParticleFiller",
]
