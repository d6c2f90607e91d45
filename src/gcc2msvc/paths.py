"""Path translation between WSL mount paths and native Windows drive paths.

Windows drives are mounted under ``/mnt`` (``C:`` as ``/mnt/c``, ``D:`` as
``/mnt/d`` and so on).  cl.exe accepts forward slashes, so only the drive
prefix is rewritten::

    /mnt/c/src/foo.c  <->  c:/src/foo.c
    /usr/include      ->   ./usr/include
"""

from __future__ import annotations

import string

MOUNT_PREFIX = "/mnt/"

_DRIVE_LETTERS = frozenset(string.ascii_letters)


def to_native_path(path: str) -> str:
    """Convert a POSIX path into a form cl.exe/link.exe understand.

    ``/mnt/<drive>[/rest]`` becomes ``<drive>:/rest`` (drive case preserved).
    Any other absolute path is made relative with a ``.`` prefix, since it
    has no meaning on the Windows side.  Relative paths are returned as-is.
    """
    if not path.startswith("/"):
        return path

    if path.startswith(MOUNT_PREFIX) and len(path) > len(MOUNT_PREFIX):
        drive = path[len(MOUNT_PREFIX)]
        rest = path[len(MOUNT_PREFIX) + 1 :]
        if drive in _DRIVE_LETTERS:
            if rest == "":
                return f"{drive}:/"
            if rest.startswith("/"):
                return f"{drive}:/{rest[1:]}"

    return f".{path}"


def to_posix_path(path: str) -> str:
    """Convert a native ``<drive>:`` path into its ``/mnt/<drive>`` form.

    The drive letter is lower-cased and backslashes after it become forward
    slashes.  Paths without a drive prefix are returned unchanged.
    """
    if len(path) < 2 or path[0] not in _DRIVE_LETTERS or path[1] != ":":
        return path
    rest = path[2:]
    if rest and rest[0] not in "\\/":
        return path
    return MOUNT_PREFIX + path[0].lower() + rest.replace("\\", "/")
