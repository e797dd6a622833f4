# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Operation class types.

Operations act on the state of the system at defined points during the
simulation's run loop. Objects with parameters derive from `_BaseObject`. Their
parameters are stored in a `ParameterDict` while detached. Attaching builds the
backend object that executes the kernels, after which parameter reads come
from the backend object and parameters without a backend setter become read
only.
"""

from mpcdfill.data.parameterdicts import ParameterDict
from mpcdfill.error import MutabilityError


class _BaseObject:
    """Handle parameters and attachment of mpcdfill objects."""

    _reserved_default_attrs = {"_cpp_obj": None, "_state": None}

    def __init__(self):
        object.__setattr__(self, "_param_dict", ParameterDict())
        object.__setattr__(self, "_cpp_obj", None)
        object.__setattr__(self, "_state", None)

    def __getattr__(self, attr):
        if attr in self._reserved_default_attrs:
            return self._reserved_default_attrs[attr]
        if attr == "_param_dict" or attr.startswith("__"):
            raise AttributeError(attr)
        if attr in self._param_dict:
            return self._getattr_param(attr)
        raise AttributeError(
            "Object {} has no attribute {}".format(type(self), attr)
        )

    def __setattr__(self, attr, value):
        if attr.startswith("_"):
            object.__setattr__(self, attr, value)
        elif attr in self._param_dict:
            self._setattr_param(attr, value)
        else:
            object.__setattr__(self, attr, value)

    def _getattr_param(self, attr):
        if self._attached and hasattr(self._cpp_obj, attr):
            return getattr(self._cpp_obj, attr)
        return self._param_dict[attr]

    def _setattr_param(self, attr, value):
        if not self._attached:
            self._param_dict[attr] = value
            return
        old_value = self._param_dict._dict[attr]
        self._param_dict[attr] = value
        try:
            setattr(self._cpp_obj, attr, self._param_dict[attr])
        except AttributeError as err:
            self._param_dict._set_raw(attr, old_value)
            raise MutabilityError(attr) from err
        except Exception:
            self._param_dict._set_raw(attr, old_value)
            raise

    @property
    def _attached(self):
        return self._cpp_obj is not None

    def _attach(self, state):
        self._state = state
        try:
            self._attach_hook()
        except Exception:
            self._cpp_obj = None
            self._state = None
            raise

    def _attach_hook(self):
        pass

    def _detach(self):
        if self._attached:
            # keep values changed through the backend object
            for key in self._param_dict:
                if hasattr(type(self._cpp_obj), key):
                    self._param_dict._set_raw(key, getattr(self._cpp_obj, key))
            self._detach_hook()
            self._cpp_obj = None
        self._state = None

    def _detach_hook(self):
        pass

    def __getstate__(self):
        state = dict(self.__dict__)
        state["_cpp_obj"] = None
        state["_state"] = None
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._param_dict == other._param_dict


class Operation(_BaseObject):
    """Represents an operation.

    Operations act on the simulation state at defined points. Virtual particle
    fillers are operations that add particles each time they are called.

    Warning:
        This class should not be instantiated by users. The class can be used
        for `isinstance` or `issubclass` checks.
    """

    _doc_inherited = """
    ----------

    **Members inherited from** `Operation <mpcdfill.operation.Operation>`:

    .. py:property:: state

        State this operation is attached to.
        `Read more... <mpcdfill.operation.Operation.state>`
    """

    @property
    def state(self):
        """mpcdfill.State: State this operation is attached to (`None` \
        when detached)."""
        return self._state


__all__ = [
    "Operation",
]
