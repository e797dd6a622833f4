# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Use a `Device` class to choose which hardware device should execute the
virtual particle fill kernels. `Device` also sets where to write log messages
and how verbose the message output should be. Pass a `Device` object to
`mpcdfill.State` on instantiation to set the options for that state.

User scripts may instantiate multiple `Device` objects and use each with a
different `mpcdfill.State` object. One `Device` object may also be shared
with many `mpcdfill.State` objects.

.. rubric:: Examples:

.. code-block:: python

    device = mpcdfill.device.CPU()

.. skip: next if(gpu_not_available)

.. code-block:: python

    device = mpcdfill.device.GPU()

Tip:
    Reuse `Device` objects when possible. The first fill on a new `Device`
    compiles the kernels, which takes a noticeable amount of time.

See Also:
    `mpcdfill.State`
"""

import abc
import contextlib
import itertools
import logging
import sys
import types

import numba
from numba import cuda

import mpcdfill
from mpcdfill.error import GPUNotAvailableError

_messenger_ids = itertools.count()


class _Messenger:
    """Route notice messages to stdout or a file.

    Each messenger owns a private `logging.Logger` so that devices with
    different notice levels and files do not interfere with each other.
    """

    def __init__(self, notice_level, message_filename):
        self._logger = logging.getLogger(
            "mpcdfill.device.messenger{}".format(next(_messenger_ids))
        )
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False
        self._handler = None
        self._notice_level = 2

        if notice_level is not None:
            self.set_notice_level(notice_level)

        if message_filename is not None:
            self.open_file(message_filename)
        else:
            self.open_std()

    def get_notice_level(self):
        return self._notice_level

    def set_notice_level(self, notice_level):
        self._notice_level = int(notice_level)

    def _set_handler(self, handler):
        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler.close()
        handler.terminator = ""
        handler.setFormatter(logging.Formatter("%(message)s"))
        self._logger.addHandler(handler)
        self._handler = handler

    def open_file(self, filename):
        self._set_handler(logging.FileHandler(filename, mode="w"))

    def open_std(self):
        self._set_handler(logging.StreamHandler(sys.stdout))

    def notice(self, level, message):
        if level <= self._notice_level:
            self._logger.info(message)

    def warning(self, message):
        self._logger.warning("*Warning*: " + message)

    def close(self):
        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None


class NoticeFile:
    """A file-like object that writes to a `Device` notice stream.

    Args:
        device (`Device`): The `Device` object.
        level (int): Message notice level. Default value is 1.

    .. rubric:: Example:

    .. code-block:: python

        notice_file = mpcdfill.device.NoticeFile(device=device)

    Note:
        Use this in combination with `Device.message_filename` to combine notice
        messages with output from code that expects file-like objects.
    """

    def __init__(self, device, level=1):
        self._msg = device._msg
        self._buff = ""
        self._level = level

    def write(self, message):
        """Writes data to the associated devices notice stream.

        Args:
            message (str): Message to write.

        .. rubric:: Example:

        .. code-block:: python

            notice_file.write("Message\\n")
        """
        self._buff += message

        lines = self._buff.split("\n")

        for line in lines[:-1]:
            self._msg.notice(self._level, line + "\n")

        self._buff = lines[-1]

    def writable(self):
        """Provide file-like API call writable."""
        return True

    def flush(self):
        """Flush the output."""
        pass


class Device(abc.ABC):
    """Base class device.

    Provides methods and properties common to `CPU` and `GPU`, including those
    that control where status messages are stored (`message_filename`) how many
    status messages mpcdfill prints (`notice_level`) and a method for user
    provided status messages (`notice`).

    Warning:
        `Device` cannot be used directly. Instantiate a `CPU` or `GPU` object.
    """

    _doc_inherited = """
    ----------

    **Members inherited from** `Device <mpcdfill.device.Device>`:

    .. py:property:: notice_level

        Minimum level of messages to print.
        `Read more... <mpcdfill.device.Device.notice_level>`

    .. py:property:: message_filename

        Filename to write messages to.
        `Read more... <mpcdfill.device.Device.message_filename>`

    .. py:property:: device

        Descriptions of the active hardware device.
        `Read more... <mpcdfill.device.Device.device>`

    .. py:method:: notice

        Write a notice message.
        `Read more... <mpcdfill.device.Device.notice>`
    """

    def __init__(self, notice_level, message_filename):
        self._msg = _Messenger(notice_level, message_filename)

        # name of the message file
        self._message_filename = message_filename

    @property
    def notice_level(self):
        """int: Minimum level of messages to print.

        `notice_level` controls the verbosity of messages printed by mpcdfill.
        The default level of 2 shows messages that the developers expect most
        users will want to see. Set the level lower to reduce verbosity or as
        high as 10 to get extremely verbose debugging messages.

        .. rubric:: Example:

        .. code-block:: python

            device.notice_level = 4
        """
        return self._msg.get_notice_level()

    @notice_level.setter
    def notice_level(self, notice_level):
        self._msg.set_notice_level(notice_level)

    @property
    def message_filename(self):
        """str: Filename to write messages to.

        By default, mpcdfill prints all messages to Python's `sys.stdout`.

        Set `message_filename` to a filename to redirect these messages to that
        file.

        Set `message_filename` to `None` to use the system's ``stdout``.

        .. rubric:: Example:

        .. code-block:: python

            device.message_filename = str(path / "messages.log")
        """
        return self._message_filename

    @message_filename.setter
    def message_filename(self, filename):
        self._message_filename = filename
        if filename is not None:
            self._msg.open_file(filename)
        else:
            self._msg.open_std()

    @property
    @abc.abstractmethod
    def device(self):
        """str: Descriptions of the active hardware device."""
        pass

    def notice(self, message, level=1):
        """Write a notice message.

        Args:
            message (str): Message to write.
            level (int): Message notice level.

        Write the given message string to the output defined by
        `message_filename` when `notice_level` >= ``level``.

        .. rubric:: Example:

        .. code-block:: python

            device.notice("Message")
        """
        self._msg.notice(level, str(message) + "\n")


class GPU(Device):
    """Select a GPU to execute the fill kernels.

    Args:
        message_filename (str): Filename to write messages to. When `None`, use
            `sys.stdout`.

        notice_level (int): Minimum level of messages to print.

        gpu_id (int): GPU id to use. Set to `None` to use device 0.

    Tip:
        Call `GPU.get_available_devices` to get a human readable list of
        devices. ``gpu_id = 0`` will select the first device in this list,
        ``1`` will select the second, and so on.

    .. rubric:: Kernel limits

    Each kernel compiled for the device supports a maximum number of threads
    per block. The first time a filler attaches on a `GPU`, it queries this
    limit and stores it in `kernel_limits`. Requested block sizes are clamped
    to the stored value. `close` releases the CUDA context and clears the
    stored limits.

    .. rubric:: Example:

    .. skip: next if(gpu_not_available)

    .. code-block:: python

        gpu = mpcdfill.device.GPU()

    {inherited}

    ----------

    **Members defined in** `GPU`:
    """

    __doc__ = __doc__.replace("{inherited}", Device._doc_inherited)

    def __init__(
        self,
        message_filename=None,
        notice_level=2,
        gpu_id=None,
    ):
        super().__init__(notice_level, message_filename)

        if not GPU.is_available():
            raise GPUNotAvailableError(
                "No usable CUDA device: "
                + "; ".join(GPU.get_unavailable_device_reasons())
            )

        if gpu_id is None:
            gpu_id = 0

        self._gpu_id = gpu_id
        self._cuda_device = cuda.select_device(gpu_id)
        self._kernel_limits = {}
        self._msg.notice(
            3, "mpcdfill is running on {}\n".format(self.device)
        )

    @property
    def device(self):
        """str: Descriptions of the active hardware device."""
        name = self._cuda_device.name
        if isinstance(name, bytes):
            name = name.decode()
        return "[{}] {}".format(self._gpu_id, name)

    @property
    def compute_capability(self):
        """tuple(int, int): Compute capability of the device.

        The tuple includes the major and minor versions of the CUDA compute
        capability: ``(major, minor)``.
        """
        return tuple(self._cuda_device.compute_capability)

    @property
    def kernel_limits(self):
        """Mapping[str, int]: Maximum threads per block of each kernel \
        that has been attached on this device (*read only*)."""
        return types.MappingProxyType(self._kernel_limits)

    def _cache_kernel_limit(self, name, query):
        """Store the block size limit of a kernel the first time it is seen.

        Args:
            name (str): Kernel name.
            query (callable): Returns the limit for the kernel.

        Returns:
            int: The cached limit.
        """
        if name not in self._kernel_limits:
            self._kernel_limits[name] = int(query())
            self._msg.notice(
                4,
                "Kernel {} supports at most {} threads per block\n".format(
                    name, self._kernel_limits[name]
                ),
            )
        return self._kernel_limits[name]

    def close(self):
        """Release the CUDA context held by this device.

        Clears `kernel_limits`. Fillers attached with this device must not be
        used after closing it.
        """
        self._kernel_limits.clear()
        cuda.close()

    @staticmethod
    def is_available():
        """Test if the GPU device is available.

        Returns:
            bool: `True` if a CUDA device can be used, `False` if not.
        """
        return mpcdfill.version.gpu_enabled

    @staticmethod
    def get_available_devices():
        """Get the available GPU devices.

        Returns:
            list[str]: Descriptions of the available devices (if any).
        """
        if not cuda.is_available():
            return []
        devices = []
        for gpu in cuda.gpus:
            name = gpu.name
            if isinstance(name, bytes):
                name = name.decode()
            devices.append("[{}] {}".format(gpu.id, name))
        return devices

    @staticmethod
    def get_unavailable_device_reasons():
        """Get messages describing the reasons why devices are unavailable.

        Returns:
            list[str]: Messages indicating why some devices are unavailable
            (if any).
        """
        if cuda.is_available():
            return []
        return ["numba.cuda reports that no CUDA driver or device is present"]

    @contextlib.contextmanager
    def enable_profiling(self):
        """Enable GPU profiling.

        When using GPU profiling tools, select the option to disable profiling
        on start. Open :py:func:`enable_profiling` as a context manager and
        continue the simulation for a time. Profiling stops when the context
        manager closes.

        .. rubric:: Example:

        .. skip: next if(gpu_not_available)

        .. code-block:: python

            with gpu.enable_profiling():
                filler.fill(timestep=0)
        """
        try:
            cuda.profile_start()
            yield None
        finally:
            cuda.profile_stop()


class CPU(Device):
    """Select the CPU to execute the fill kernels.

    Args:
        message_filename (str): Filename to write messages to. When `None`, use
            `sys.stdout`.

        notice_level (int): Minimum level of messages to print.

        num_cpu_threads (int): Number of threads used by the parallel CPU
            kernels, at most ``numba.config.NUMBA_NUM_THREADS``. When `None`,
            use numba's current setting.

    .. rubric:: Example:

    .. code-block:: python

        cpu = mpcdfill.device.CPU()
    """

    __doc__ += Device._doc_inherited

    def __init__(
        self,
        message_filename=None,
        notice_level=2,
        num_cpu_threads=None,
    ):
        if num_cpu_threads is not None:
            num_cpu_threads = int(num_cpu_threads)
            max_threads = numba.config.NUMBA_NUM_THREADS
            if not 1 <= num_cpu_threads <= max_threads:
                raise ValueError(
                    "num_cpu_threads must be between 1 and {}, got {}".format(
                        max_threads, num_cpu_threads
                    )
                )
        super().__init__(notice_level, message_filename)
        self._num_cpu_threads = num_cpu_threads

    @property
    def device(self):
        """str: Descriptions of the active hardware device."""
        return "CPU"

    @property
    def num_cpu_threads(self):
        """int: Number of threads used by the parallel CPU kernels.

        `None` selects numba's current setting. Other values apply only
        while a fill runs on this device.
        """
        return self._num_cpu_threads


def auto_select(
    message_filename=None,
    notice_level=2,
):
    """Automatically select the hardware device.

    Args:
        message_filename (str): Filename to write messages to. When `None`, use
            `sys.stdout`.

        notice_level (int): Minimum level of messages to print.

    Returns:
        Instance of `GPU` if available, otherwise `CPU`.

    .. rubric:: Example:

    .. code-block:: python

        device = mpcdfill.device.auto_select()
    """
    if len(GPU.get_available_devices()) > 0:
        return GPU(message_filename, notice_level)
    else:
        return CPU(message_filename, notice_level)


__all__ = [
    "CPU",
    "GPU",
    "Device",
    "NoticeFile",
    "auto_select",
]
