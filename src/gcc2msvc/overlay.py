"""Turn the ``INCLUDE`` / ``LIB`` search lists into cl.exe and link.exe flags."""

from __future__ import annotations

from dataclasses import dataclass, field

from gcc2msvc.paths import to_native_path


@dataclass
class Overlay:
    """Flags derived from the semicolon-separated environment path lists."""

    compile_args: list[str] = field(default_factory=list)
    link_args: list[str] = field(default_factory=list)


def split_path_list(value: str | None) -> list[str]:
    """Split a ``;``-separated list, dropping empty entries."""
    if not value:
        return []
    return [entry for entry in value.split(";") if entry]


def build_overlay(include_env: str | None, lib_env: str | None) -> Overlay:
    """Map ``INCLUDE`` entries to ``/I<dir>`` and ``LIB`` entries to ``/libpath:<dir>``."""
    return Overlay(
        compile_args=[f"/I{to_native_path(d)}" for d in split_path_list(include_env)],
        link_args=[f"/libpath:{to_native_path(d)}" for d in split_path_list(lib_env)],
    )
