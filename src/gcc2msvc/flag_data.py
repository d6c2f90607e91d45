"""GCC → MSVC flag correspondence tables.

Only flags that map onto a fixed cl.exe/link.exe spelling live here; flags
that carry a value or change translation state are handled by the rules in
:mod:`gcc2msvc.translate`.
"""

# Exact-match flags that turn into one or more cl.exe flags.
SIMPLE_COMPILE_FLAGS: dict[str, tuple[str, ...]] = {
    # -C -w -g (-c is handled by the compile-only rule)
    "-C": ("/C",),
    "-w": ("/w",),
    "-g": ("/Zi",),
    # -O0 -O1 -O2 -O3 -Os
    "-O0": ("/Od",),
    "-O1": ("/O2", "/Ot"),
    "-O2": ("/O2", "/Ot"),
    "-O3": ("/Ox",),
    "-Os": ("/O1", "/Os"),
    # -Wall -Wextra -Werror
    "-Wall": ("/W3",),
    "-Wextra": ("/Wall",),
    "-Werror": ("/WX",),
    # -mdll -msse -msse2 -mavx -mavx2
    "-mdll": ("/LD",),
    "-msse": ("/arch:SSE",),
    "-msse2": ("/arch:SSE2",),
    "-mavx": ("/arch:AVX",),
    "-mavx2": ("/arch:AVX2",),
    # -fno-inline and the positive -f features
    "-fno-inline": ("/Ob0",),
    "-fomit-frame-pointer": ("/Oy",),
    "-fpermissive": ("/permissive",),
    "-finline-functions": ("/Ob2",),
    "-fopenmp": ("/openmp",),
    "-fstack-protector": ("/GS",),
    "-fstack-check": ("/GS",),
    "-funsigned-char": ("/J",),
    "-fsized-deallocation": ("/Zc:sizedDealloc",),
    "-fwhole-program": ("/GL",),
    # -shared -trigraphs
    "-shared": ("/LD",),
    "-trigraphs": ("/Zc:trigraphs",),
}

# -x <lang>
LANGUAGE_FLAGS: dict[str, str] = {
    "c": "/TC",
    "c++": "/TP",
}

# -ffp-contract=<mode>
FP_CONTRACT_FLAGS: dict[str, str] = {
    "fast": "/fp:fast",
    "off": "/fp:strict",
}

# -l<name> selecting the MSVC C runtime instead of a link entry
RUNTIME_LIBRARIES: dict[str, str] = {
    "msvcrt": "/MD",
    "libcmt": "/MT",
}

# -l<name> that link.exe pulls in implicitly
IMPLICIT_LIBRARIES: frozenset[str] = frozenset({"c", "m", "rt", "stdc++", "gcc_s"})

# -Wl,<option>,<file> (or -Wl,<option> -Wl,<file>)
LINKER_FILE_OPTIONS: dict[str, str] = {
    "--out-implib": "/implib:",
    "-output-def": "/def:",
}

# Implicit flags, prepended unless -fno-rtti / -fno-threadsafe-statics
RTTI_FLAG = "/GR"
THREADSAFE_STATICS_FLAG = "/Zc:threadSafeInit"

LINK_MARKER = "/link"
DEFAULT_OUTPUT = "a.exe"
