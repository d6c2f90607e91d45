"""invoke.py – Run cl.exe / link.exe and map their exit status.

The assembled argument vector is spawned directly (no shell) and waited
for.  Exit status policy:

- normal exit: the child's own exit code;
- the executable could not be started: :data:`SPAWN_FAILURE` (127);
- killed by a signal: :data:`ABNORMAL_EXIT` (1).
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from gcc2msvc.assemble import Toolchain, format_command
from gcc2msvc.cli import error_msg
from gcc2msvc.config import ToolchainConfig
from gcc2msvc.paths import to_posix_path

SPAWN_FAILURE = 127
ABNORMAL_EXIT = 1

# Lines of banner shown per tool by --version
_VERSION_LINES = 3


def _exit_status(returncode: int) -> int:
    if returncode < 0:
        error_msg("the program did not terminate normally")
        return ABNORMAL_EXIT
    return returncode


def _spawn_error(argv: Sequence[str], exc: OSError) -> int:
    error_msg(f"failed to execute {argv[0]}: {exc.strerror or exc}")
    return SPAWN_FAILURE


def run_command(argv: Sequence[str], *, verbose: bool = False, print_only: bool = False) -> int:
    """Echo (if verbose) and run *argv*, returning the exit code to report."""
    if verbose:
        # flush so the echo lands before anything the child writes
        print(format_command(argv), flush=True)
    if print_only:
        return 0

    try:
        result = subprocess.run(list(argv))
    except OSError as e:
        return _spawn_error(argv, e)
    return _exit_status(result.returncode)


def run_merged(argv: Sequence[str]) -> int:
    """Run *argv* with its stderr folded into stdout (``--help-cl``, ``--help-link``)."""
    try:
        result = subprocess.run(list(argv), stderr=subprocess.STDOUT)
    except OSError as e:
        return _spawn_error(argv, e)
    return _exit_status(result.returncode)


def run_head(argv: Sequence[str], lines: int = _VERSION_LINES) -> int:
    """Run *argv* and print only the first *lines* lines of its combined output."""
    try:
        result = subprocess.run(list(argv), stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
    except OSError as e:
        return _spawn_error(argv, e)
    text = result.stdout.decode("utf-8", errors="replace")
    for line in text.splitlines()[:lines]:
        print(line)
    return _exit_status(result.returncode)


def show_version(toolchain: Toolchain, cfg: ToolchainConfig) -> int:
    """Print the cl.exe and link.exe banners; return the status of the last one.

    With the default driver both the 64-bit and the 32-bit cl.exe are shown.
    """
    if toolchain.uses_default_driver:
        drivers = [to_posix_path(cfg.cl_x64), to_posix_path(cfg.cl_x86)]
    else:
        drivers = [toolchain.driver]

    for driver in drivers:
        run_head([driver, "/help"])
    return run_head([toolchain.link_exe])
