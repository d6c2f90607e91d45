"""main.py – gcc2msvc command-line entry point.

Accepts a GCC-style command line and runs the equivalent MSVC cl.exe
command.  Every token is handed to the translator as-is: Typer's own option
parsing and help are switched off, since ``--help`` and friends are part of
the translated dialect.

Usage::

    gcc2msvc -O2 -Wall -I/mnt/c/include -o hello.exe hello.c
    gcc2msvc --print-only -c -m32 foo.c
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

import typer

from gcc2msvc.assemble import Toolchain, assemble_command, format_command, resolve_toolchain
from gcc2msvc.cli import error_msg, warn_msg
from gcc2msvc.config import ConfigError, load_config
from gcc2msvc.invoke import run_command, run_merged, show_version
from gcc2msvc.overlay import build_overlay
from gcc2msvc.translate import translate

USAGE = """\
This program is a wrapper for msvc's cl.exe and intended to be used
from a WSL shell ("Bash on Windows").
It is invoked with gcc options (only a limited number) and turns
them into msvc options to call cl.exe.
The msvc options may not exactly do the same as their gcc counterparts.

Supported GCC options (see `man gcc' for more information):
  -c -C -DDEFINE[=ARG] -fconstexpr-depth=num -ffp-contract=fast|off
  -finline-functions -fno-inline -fno-rtti -fno-threadsafe-statics
  -fomit-frame-pointer -fopenmp -fpermissive -fsized-deallocation -fstack-check
  -fstack-protector -funsigned-char -fwhole-program -g -include file -I path
  -llibname -L path -m32 -mavx -mavx2 -mdll -msse -msse2 -nodefaultlibs -nostdinc
  -nostdinc++ -nostdlib -O0 -O1 -O2 -O3 -Os -o file -print-search-dirs -shared
  -std=c<..>|gnu<..> -trigraphs -UDEFINE -w -Wall -Werror -Wextra
  -Wl,--out-implib,libname -Wl,-output-def,defname -Wl,--whole-archive -x <c|c++>

Other options:
  --help                display this information
  --help-cl             display cl.exe's help information
  --help-link           display link.exe's help information
  --version             display version information of cl.exe and link.exe
  --verbose             print commands
  --print-only          print commands and don't do anything
  --cl=path             path to cl.exe
  -Wcl,arg -Wlink,arg   pass msvc options directly to cl.exe/link.exe;
                        see also https://msdn.microsoft.com/en-us/library/19z1t1wy.aspx

Environment variables:
  CL_CMD           path to cl.exe
  INCLUDE          semicolon (;) separated list of include paths
  LIB              semicolon (;) separated list of library search paths
  GCC2MSVC_CONFIG  path to a gcc2msvc.toml with default toolchain locations
"""


def usage(prog: str) -> str:
    return f"Usage: {prog} [options] file...\n\n{USAGE}"


def print_search_dirs(toolchain: Toolchain) -> None:
    print(f"cl.exe: {toolchain.default_driver}")
    print(f"includes: {format_command(toolchain.include_flags)}")
    print(f"libraries: {format_command(toolchain.lib_flags)}")


def run(
    args: Sequence[str],
    environ: Mapping[str, str] | None = None,
    *,
    prog: str = "gcc2msvc",
    config_path: Path | None = None,
) -> int:
    """Translate *args*, then run (or just print) the cl.exe command.

    Returns the process exit code; diagnostics are printed, never raised.
    """
    t = translate(args)
    if t.show_help:
        print(usage(prog))
        return 0

    try:
        cfg = load_config(environ, config_path)
    except ConfigError as e:
        error_msg(str(e))
        return 1

    toolchain = resolve_toolchain(t, cfg)
    for warning in toolchain.warnings:
        warn_msg(warning)

    if t.help_cl:
        return run_merged([toolchain.driver, "/help"])
    if t.help_link:
        return run_merged([toolchain.link_exe])
    if t.version:
        return show_version(toolchain, cfg)
    if t.print_search_dirs:
        print_search_dirs(toolchain)
        return 0

    overlay = build_overlay(cfg.include_env, cfg.lib_env)
    argv = assemble_command(t, toolchain, overlay)
    return run_command(argv, verbose=t.verbose, print_only=t.print_only)


app = typer.Typer(
    help="Run MSVC cl.exe with a GCC-style command line.",
    add_completion=False,
)


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    }
)
def main(ctx: typer.Context) -> None:
    """Translate GCC options to cl.exe options and run cl.exe."""
    raise typer.Exit(code=run(ctx.args, prog=ctx.find_root().info_name or "gcc2msvc"))


def main_entry() -> None:
    """Package entry point used by the ``gcc2msvc`` console script."""
    app()


if __name__ == "__main__":
    main_entry()
