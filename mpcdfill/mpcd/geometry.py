# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

r"""MPCD geometries.

A geometry defines solid boundaries that cannot be penetrated. Virtual
particle fillers (:class:`mpcdfill.mpcd.fill.GeometryFiller`) add particles
in the region just outside these boundaries.

Each geometry may put constraints on the size of the simulation box. These
constraints will be documented by each object.
"""

from mpcdfill.data.parameterdicts import ParameterDict
from mpcdfill.data.typeconverter import OnlyTypes, nonnegative_real, positive_real
from mpcdfill.mpcd import _mpcd
from mpcdfill.operation import _BaseObject


class Geometry(_BaseObject):
    r"""Geometry.

    Args:
        no_slip (bool): If True, surfaces have a no-slip boundary condition.
            Otherwise, they have a slip boundary condition.

    Attributes:
        no_slip (bool): If True, surfaces have a no-slip boundary condition.
            Otherwise, they have a slip boundary condition (*read only*).

            A no-slip boundary condition means that the average velocity is
            zero at the surface. A slip boundary condition means that the
            average *normal* velocity is zero at the surface, but there
            is no friction against the *tangential* velocity.

    """

    def __init__(self, no_slip):
        super().__init__()

        param_dict = ParameterDict(no_slip=bool(no_slip))
        self._param_dict.update(param_dict)

    @property
    def _boundary_condition(self):
        if self.no_slip:
            return _mpcd.BoundaryCondition.no_slip
        return _mpcd.BoundaryCondition.slip


class SineChannel(Geometry):
    r"""Channel with sinusoidal walls that may move.

    Args:
        amplitude (float): Amplitude of cosine.
        separation (float): Distance between the walls at the narrowest point
            of the channel.
        repetitions (int): Number of repetitions of the wall pattern.
        speed (float): Wall speed.
        no_slip (bool): If True, surfaces have no-slip boundary condition.
            Otherwise, they have the slip boundary condition.

    `SineChannel` confines a fluid in :math:`z` between two walls described
    by the equations

    .. math::

        z(x) = \pm \left[ A \cos(k x) + A + H \right]

    where :math:`A` is the `amplitude`, :math:`2H` is the `separation`, and
    :math:`k = \pi p / L_x` with :math:`p` the number of `repetitions` and
    :math:`L_x` the box length in :math:`x`. The channel is :math:`2H` wide at
    its narrowest point and :math:`2(2A + H)` wide at its widest point.

    The walls may be put into motion with `speed` *V*. The lower wall moves
    with velocity :math:`-V` and the upper wall with :math:`+V` in the *x*
    direction. Combined with a no-slip boundary condition, this motion drives
    a shear flow through the channel.

    The box must be larger than the channel plus the fill shell in :math:`z`.

    .. rubric:: Example:

    .. code-block:: python

        channel = mpcdfill.mpcd.geometry.SineChannel(
            amplitude=1.0, separation=4.0, repetitions=2, speed=0.5)

    Attributes:
        amplitude (float): Amplitude of cosine (*read only*).

        separation (float): Distance between walls at the narrowest point
            (*read only*).

        repetitions (int): Number of repetitions of the wall pattern
            (*read only*).

        speed (float): Wall speed (*read only*).

    """

    def __init__(self, amplitude, separation, repetitions=1, speed=0.0, no_slip=True):
        super().__init__(no_slip)

        param_dict = ParameterDict(
            amplitude=OnlyTypes(float, preprocess=nonnegative_real),
            separation=OnlyTypes(float, preprocess=positive_real),
            repetitions=int(repetitions),
            speed=float(speed),
        )
        param_dict["amplitude"] = amplitude
        param_dict["separation"] = separation
        self._param_dict.update(param_dict)

    def _attach_hook(self):
        self._cpp_obj = _mpcd.SineGeometry(
            L=self._state.box.Lx,
            amplitude=self.amplitude,
            H=0.5 * self.separation,
            repetitions=self.repetitions,
            velocity=self.speed,
            boundary_condition=self._boundary_condition,
        )
        super()._attach_hook()

    @property
    def H(self):
        """float: Half width of the channel at its narrowest point."""
        return 0.5 * self.separation

    @property
    def velocity(self):
        """float: Velocity of the upper wall in *x*."""
        return self.speed

    @property
    def boundary_condition(self):
        """mpcdfill.mpcd._mpcd.BoundaryCondition: Boundary condition on the \
        walls."""
        return self._boundary_condition


__all__ = [
    "Geometry",
    "SineChannel",
]
