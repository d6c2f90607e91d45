"""assemble.py – Build the final cl.exe command line from a translation.

Two steps, both run after the whole argument list has been scanned (``-m32``
may appear anywhere and changes the defaults):

``resolve_toolchain(translation, cfg)``
    Picks the driver executable and the default include/library directories
    for the requested bit-width.

``assemble_command(translation, toolchain, overlay)``
    Lays out the argument vector::

        <driver> /Zc:threadSafeInit /GR <compile flags> <INCLUDE flags>
                 <default /I flags> /link <link flags> <LIB flags>
                 [/out:a.exe] <default /libpath flags>

    The ``/link`` section is only present when linking is enabled.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from gcc2msvc.config import ToolchainConfig
from gcc2msvc.flag_data import (
    DEFAULT_OUTPUT,
    LINK_MARKER,
    RTTI_FLAG,
    THREADSAFE_STATICS_FLAG,
)
from gcc2msvc.overlay import Overlay
from gcc2msvc.paths import to_posix_path
from gcc2msvc.translate import Translation


@dataclass
class Toolchain:
    """Driver and default search paths chosen for one run."""

    driver: str  # POSIX form, ready to execute
    default_driver: str  # native form, for the selected bit-width
    include_dirs: list[str] = field(default_factory=list)
    lib_dirs: list[str] = field(default_factory=list)
    uses_default_driver: bool = True
    warnings: list[str] = field(default_factory=list)

    @property
    def link_exe(self) -> str:
        """link.exe living next to the driver."""
        return str(PurePosixPath(self.driver).with_name("link.exe"))

    @property
    def include_flags(self) -> list[str]:
        return [f"/I{d}" for d in self.include_dirs]

    @property
    def lib_flags(self) -> list[str]:
        return [f"/libpath:{d}" for d in self.lib_dirs]


def resolve_toolchain(t: Translation, cfg: ToolchainConfig) -> Toolchain:
    """Choose driver and default paths; ``--cl=`` beats ``CL_CMD`` beats the default."""
    if t.target_is_32bit:
        default_driver, lib_dirs = cfg.cl_x86, cfg.lib_dirs_x86
    else:
        default_driver, lib_dirs = cfg.cl_x64, cfg.lib_dirs_x64

    custom = t.driver_override or cfg.cl_cmd
    warnings: list[str] = []
    if custom and t.target_is_32bit:
        warnings.append("ignoring `-m32' when using a custom cl.exe")

    return Toolchain(
        driver=to_posix_path(custom or default_driver),
        default_driver=default_driver,
        include_dirs=list(cfg.include_dirs),
        lib_dirs=list(lib_dirs),
        uses_default_driver=not custom,
        warnings=warnings,
    )


def assemble_command(
    t: Translation,
    toolchain: Toolchain,
    overlay: Overlay | None = None,
) -> list[str]:
    """Return the full argument vector, driver first."""
    overlay = overlay or Overlay()

    compile_args: list[str] = []
    # These govern the whole translation unit, so they go ahead of everything
    if t.threadsafe_statics_enabled:
        compile_args.append(THREADSAFE_STATICS_FLAG)
    if t.rtti_enabled:
        compile_args.append(RTTI_FLAG)
    compile_args += t.compile_args
    compile_args += overlay.compile_args
    if t.default_include_paths_enabled:
        compile_args += toolchain.include_flags

    if t.linking_enabled:
        link_args = t.link_args + overlay.link_args
        if not t.output_name_provided:
            link_args.append(f"/out:{DEFAULT_OUTPUT}")
        if t.default_library_paths_enabled:
            link_args += toolchain.lib_flags
        compile_args += [LINK_MARKER, *link_args]

    return [toolchain.driver, *compile_args]


def format_command(argv: Sequence[str]) -> str:
    """Render an argument vector as a copy-pasteable shell line."""
    return shlex.join(argv)
