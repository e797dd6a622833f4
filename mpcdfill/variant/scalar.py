# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Define Variant classes that depend on the time step."""

import typing


class Variant:
    """Variant base class.

    Provides methods common to all variants.

    A variant object represents a scalar function of the time step. Subclasses
    implement ``__call__(timestep)`` and may override `min` and `max`.

    .. rubric:: Example:

    .. code-block:: python

        class Linear(mpcdfill.variant.Variant):
            def __call__(self, timestep):
                return 1.0 + 0.001 * timestep

    """

    def __call__(self, timestep):
        """Evaluate the function.

        Args:
            timestep (int): The time step.

        Returns:
            float: The value of the function at the given time step.
        """
        raise NotImplementedError

    @property
    def min(self):
        """The minimum value of this variant for :math:`t \\in [0,\\infty)`."""
        raise NotImplementedError

    @property
    def max(self):
        """The maximum value of this variant for :math:`t \\in [0,\\infty)`."""
        raise NotImplementedError

    def __eq__(self, other):
        """Return whether two variants are equivalent."""
        if not isinstance(other, Variant):
            return NotImplemented
        if not isinstance(other, type(self)):
            return False
        return self.__dict__ == other.__dict__

    def __getstate__(self):
        """Get the variant's ``__dict__`` attribute."""
        return self.__dict__

    def __setstate__(self, state):
        """Restore the state of the variant."""
        self.__dict__.update(state)


class Constant(Variant):
    """A constant value.

    Args:
        value (float): The value.

    `Constant` returns `value` at all time steps.

    .. rubric:: Example:

    .. code-block:: python

        variant = mpcdfill.variant.Constant(1.0)

    Attributes:
        value (float): The value.
    """

    def __init__(self, value):
        self.value = float(value)

    def __call__(self, timestep):
        return self.value

    @property
    def min(self):
        return self.value

    @property
    def max(self):
        return self.value

    def __repr__(self):
        return "mpcdfill.variant.Constant({})".format(self.value)


class Ramp(Variant):
    """A linear ramp.

    Args:
        A (float): The start value.
        B (float): The end value.
        t_start (int): The start time step.
        t_ramp (int): The length of the ramp.

    `Ramp` holds the value *A* until time *t_start*. Then it ramps linearly
    from *A* to *B* over *t_ramp* steps and holds the value *B* after that.

    .. rubric:: Example:

    .. code-block:: python

        variant = mpcdfill.variant.Ramp(A=1.0, B=2.0, t_start=10_000,
                                        t_ramp=100_000)

    Attributes:
        A (float): The start value.
        B (float): The end value.
        t_start (int): The start time step.
        t_ramp (int): The length of the ramp.
    """

    def __init__(self, A, B, t_start, t_ramp):
        self.A = float(A)
        self.B = float(B)
        self.t_start = int(t_start)
        self.t_ramp = int(t_ramp)
        if self.t_start < 0 or self.t_ramp < 0:
            raise ValueError("t_start and t_ramp must be non-negative")

    def __call__(self, timestep):
        if timestep < self.t_start:
            return self.A
        elif timestep >= self.t_start + self.t_ramp:
            return self.B
        s = (timestep - self.t_start) / self.t_ramp
        return (1.0 - s) * self.A + s * self.B

    @property
    def min(self):
        return min(self.A, self.B)

    @property
    def max(self):
        return max(self.A, self.B)

    def __repr__(self):
        return "mpcdfill.variant.Ramp(A={}, B={}, t_start={}, t_ramp={})".format(
            self.A, self.B, self.t_start, self.t_ramp
        )


variant_like = typing.Union[Variant, float]
"""
Objects that are like a variant.

Any subclass of `Variant` is accepted along with float instances and objects
convertible to float. They are internally converted to variants of type
`Constant` via ``Constant(float(a))`` where ``a`` is the float or float
convertible object.
"""
