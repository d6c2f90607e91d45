"""Toolchain configuration for gcc2msvc.

Collects everything the translator would otherwise read from the process
environment (``CL_CMD``, ``INCLUDE``, ``LIB``) together with the default
MSVC install locations, so the engine can run from explicit values.

The built-in defaults point at Visual Studio 2015 (VC 14.0) with the
Windows 10 SDK.  They can be overridden by a ``gcc2msvc.toml`` file::

    [toolchain]
    cl_x64 = "D:/VS/VC/bin/amd64/cl.exe"
    cl_x86 = "D:/VS/VC/bin/cl.exe"
    includes = ["D:/VS/VC/include"]
    libpaths_x64 = ["D:/VS/VC/lib/amd64"]
    libpaths_x86 = ["D:/VS/VC/lib"]

The file is taken from ``$GCC2MSVC_CONFIG`` when set, otherwise the first
``gcc2msvc.toml`` found walking up from the current directory.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib  # type: ignore[import]
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[import,no-redef]

CONFIG_FILENAME = "gcc2msvc.toml"
CONFIG_ENV_VAR = "GCC2MSVC_CONFIG"

# ---------------------------------------------------------------------------
# Built-in MSVC locations (native form)
# ---------------------------------------------------------------------------

_VC_DIR = "C:/Program Files (x86)/Microsoft Visual Studio 14.0/VC"
_SDK_DIR = "C:/Program Files (x86)/Windows Kits/10"
_SDK_VERSION = "10.0.10240.0"

DEFAULT_CL_X64 = f"{_VC_DIR}/bin/amd64/cl.exe"
DEFAULT_CL_X86 = f"{_VC_DIR}/bin/cl.exe"

DEFAULT_INCLUDES: list[str] = [
    f"{_VC_DIR}/include",
    f"{_SDK_DIR}/Include/{_SDK_VERSION}/ucrt",
    f"{_SDK_DIR}/Include/{_SDK_VERSION}/um",
    f"{_SDK_DIR}/Include/{_SDK_VERSION}/shared",
]

DEFAULT_LIBPATHS_X64: list[str] = [
    f"{_VC_DIR}/lib/amd64",
    f"{_SDK_DIR}/Lib/{_SDK_VERSION}/ucrt/x64",
    f"{_SDK_DIR}/Lib/{_SDK_VERSION}/um/x64",
]

DEFAULT_LIBPATHS_X86: list[str] = [
    f"{_VC_DIR}/lib",
    f"{_SDK_DIR}/Lib/{_SDK_VERSION}/ucrt/x86",
    f"{_SDK_DIR}/Lib/{_SDK_VERSION}/um/x86",
]


class ConfigError(Exception):
    """Raised when a gcc2msvc.toml file is missing or malformed."""


@dataclass
class ToolchainConfig:
    """Resolved toolchain settings for one run."""

    # --- [toolchain] ---
    cl_x64: str = DEFAULT_CL_X64
    cl_x86: str = DEFAULT_CL_X86
    include_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDES))
    lib_dirs_x64: list[str] = field(default_factory=lambda: list(DEFAULT_LIBPATHS_X64))
    lib_dirs_x86: list[str] = field(default_factory=lambda: list(DEFAULT_LIBPATHS_X86))

    # --- environment ---
    cl_cmd: str | None = None  # CL_CMD
    include_env: str = ""  # INCLUDE
    lib_env: str = ""  # LIB

    # Where the [toolchain] overrides came from, if anywhere
    source: Path | None = None


def _find_config(start: Optional[Path] = None) -> Path | None:
    """Walk up from *start* (or cwd) looking for gcc2msvc.toml."""
    candidate = (start or Path.cwd()).resolve()
    while True:
        if (candidate / CONFIG_FILENAME).is_file():
            return candidate / CONFIG_FILENAME
        if candidate == candidate.parent:
            return None
        candidate = candidate.parent


def _str_value(table: dict, key: str, path: Path) -> str | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{path}: [toolchain].{key} must be a string")
    return value


def _list_value(table: dict, key: str, path: Path) -> list[str] | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{path}: [toolchain].{key} must be a list of strings")
    return list(value)


def _apply_file(cfg: ToolchainConfig, path: Path) -> None:
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    table = raw.get("toolchain", {})
    if not isinstance(table, dict):
        raise ConfigError(f"{path}: [toolchain] must be a table")

    cfg.cl_x64 = _str_value(table, "cl_x64", path) or cfg.cl_x64
    cfg.cl_x86 = _str_value(table, "cl_x86", path) or cfg.cl_x86
    includes = _list_value(table, "includes", path)
    if includes is not None:
        cfg.include_dirs = includes
    libs_x64 = _list_value(table, "libpaths_x64", path)
    if libs_x64 is not None:
        cfg.lib_dirs_x64 = libs_x64
    libs_x86 = _list_value(table, "libpaths_x86", path)
    if libs_x86 is not None:
        cfg.lib_dirs_x86 = libs_x86
    cfg.source = path


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[Path] = None,
) -> ToolchainConfig:
    """Build a :class:`ToolchainConfig` from the environment and config file.

    Args:
        environ: Environment mapping.  Defaults to ``os.environ``.
        config_path: Explicit config file.  When ``None`` the file is taken
            from ``$GCC2MSVC_CONFIG`` or discovered from the current
            directory upward; a missing file is fine in that case.

    Raises:
        ConfigError: An explicitly named config file is unreadable, or a
            config file is malformed.
    """
    env = os.environ if environ is None else environ

    cfg = ToolchainConfig(
        cl_cmd=env.get("CL_CMD") or None,
        include_env=env.get("INCLUDE", ""),
        lib_env=env.get("LIB", ""),
    )

    if config_path is None and env.get(CONFIG_ENV_VAR):
        config_path = Path(env[CONFIG_ENV_VAR])
    if config_path is None:
        config_path = _find_config()
    if config_path is not None:
        _apply_file(cfg, config_path)

    return cfg
