"""translate.py – GCC argument scanner and flag mapper.

Walks a GCC-style argument list once, left to right, and sorts every token
into cl.exe compile flags, link.exe flags, or a mode switch on the
:class:`Translation`.  Classification is an ordered rule table where the
first matching rule wins, so longer prefixes (``-Wlink``, ``-fno-rtti``,
``-std=``) sit before anything that could shadow them.

Unknown flags are dropped without a diagnostic so that unsupported GCC
options never break an otherwise valid build.  A flag whose value is given
as a separate token but is the last argument contributes nothing.

Usage::

    from gcc2msvc.translate import translate

    t = translate(["-c", "-O2", "-I/mnt/c/inc", "foo.c"])
    t.compile_args   # ['/c', '/O2', '/Ot', '/Ic:/inc', 'foo.c']
    t.linking_enabled  # False
"""

from __future__ import annotations

import shlex
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from gcc2msvc.flag_data import (
    FP_CONTRACT_FLAGS,
    IMPLICIT_LIBRARIES,
    LANGUAGE_FLAGS,
    LINKER_FILE_OPTIONS,
    RUNTIME_LIBRARIES,
    SIMPLE_COMPILE_FLAGS,
)
from gcc2msvc.paths import to_native_path

# ---------------------------------------------------------------------------
# Translation state
# ---------------------------------------------------------------------------


@dataclass
class Translation:
    """Accumulated result of scanning one argument list."""

    compile_args: list[str] = field(default_factory=list)
    link_args: list[str] = field(default_factory=list)

    # --- assembly policy ---
    linking_enabled: bool = True
    rtti_enabled: bool = True
    threadsafe_statics_enabled: bool = True
    output_name_provided: bool = False
    default_include_paths_enabled: bool = True
    default_library_paths_enabled: bool = True
    target_is_32bit: bool = False

    # --- driver selection (--cl=) ---
    driver_override: str | None = None

    # --- front-end switches ---
    verbose: bool = False
    print_only: bool = False
    show_help: bool = False
    help_cl: bool = False
    help_link: bool = False
    version: bool = False
    print_search_dirs: bool = False


class _Cursor:
    """Position in the argument list with a one-token lookahead."""

    def __init__(self, tokens: Sequence[str]) -> None:
        self._tokens = tokens
        self.pos = 0

    def __iter__(self) -> _Cursor:
        return self

    def __next__(self) -> str:
        if self.pos >= len(self._tokens):
            raise StopIteration
        token = self._tokens[self.pos]
        self.pos += 1
        return token

    def peek(self) -> str | None:
        if self.pos < len(self._tokens):
            return self._tokens[self.pos]
        return None

    def take(self) -> str | None:
        """Consume and return the next token, or None at end of input."""
        return next(self, None)


Handler = Callable[[Translation, str, _Cursor], None]


@dataclass(frozen=True)
class Rule:
    """One entry of the classification table."""

    name: str
    matches: Callable[[str], bool]
    handler: Handler


def _exact(*names: str) -> Callable[[str], bool]:
    accepted = frozenset(names)
    return lambda token: token in accepted


def _prefix(prefix: str, *, min_len: int = 0) -> Callable[[str], bool]:
    return lambda token: token.startswith(prefix) and len(token) >= min_len


def _flag_or_comma(flag: str) -> Callable[[str], bool]:
    # "-Wl" alone or "-Wl,<value>"
    return lambda token: token == flag or token.startswith(flag + ",")


def _value(token: str, prefix_len: int, cursor: _Cursor) -> str | None:
    """Return the flag value, either attached (``-Ifoo``) or the next token."""
    if len(token) > prefix_len:
        return token[prefix_len:]
    return cursor.take()


def _split_raw(raw: str) -> list[str]:
    try:
        return shlex.split(raw)
    except ValueError:
        return raw.split()


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _long_option(t: Translation, token: str, cursor: _Cursor) -> None:
    if token == "--help":
        t.show_help = True
    elif token.startswith("--cl=") and len(token) > 5:
        t.driver_override = token[5:]
    elif token == "--verbose":
        t.verbose = True
    elif token == "--print-only":
        t.verbose = t.print_only = True
    elif token == "--help-cl":
        t.help_cl = True
    elif token == "--help-link":
        t.help_link = True
    elif token == "--version":
        t.version = True


def _help(t: Translation, token: str, cursor: _Cursor) -> None:
    t.show_help = True


def _compile_only(t: Translation, token: str, cursor: _Cursor) -> None:
    t.compile_args.append("/c")
    t.linking_enabled = False


def _simple(t: Translation, token: str, cursor: _Cursor) -> None:
    t.compile_args.extend(SIMPLE_COMPILE_FLAGS[token])


def _language(t: Translation, token: str, cursor: _Cursor) -> None:
    lang = _value(token, 2, cursor)
    if lang in LANGUAGE_FLAGS:
        t.compile_args.append(LANGUAGE_FLAGS[lang])


def _output(t: Translation, token: str, cursor: _Cursor) -> None:
    out = _value(token, 2, cursor)
    if out is not None:
        t.link_args.append(f"/out:{to_native_path(out)}")
        t.output_name_provided = True


def _include_dir(t: Translation, token: str, cursor: _Cursor) -> None:
    path = _value(token, 2, cursor)
    if path is not None:
        t.compile_args.append(f"/I{to_native_path(path)}")


def _define(t: Translation, token: str, cursor: _Cursor) -> None:
    # -DNAME[=VALUE] / -UNAME, passed through untouched
    macro = _value(token, 2, cursor)
    if macro is not None:
        t.compile_args.append(f"/{token[1]}{macro}")


def _library_dir(t: Translation, token: str, cursor: _Cursor) -> None:
    path = _value(token, 2, cursor)
    if path is not None:
        t.link_args.append(f"/libpath:{to_native_path(path)}")


def _library(t: Translation, token: str, cursor: _Cursor) -> None:
    name = token[2:]
    if name in RUNTIME_LIBRARIES:
        t.compile_args.append(RUNTIME_LIBRARIES[name])
    elif name not in IMPLICIT_LIBRARIES:
        t.link_args.append(f"{name}.lib")


def _link_passthrough(t: Translation, token: str, cursor: _Cursor) -> None:
    raw = cursor.take() if token == "-Wlink" else token[len("-Wlink,") :]
    if raw:
        t.link_args.extend(_split_raw(raw))


def _cl_passthrough(t: Translation, token: str, cursor: _Cursor) -> None:
    raw = cursor.take() if token == "-Wcl" else token[len("-Wcl,") :]
    if raw:
        t.compile_args.extend(_split_raw(raw))


def _linker_value(cursor: _Cursor) -> str | None:
    """Consume a trailing ``-Wl,<value>`` token (``-Wl,--out-implib -Wl,foo``)."""
    following = cursor.peek()
    if following is not None and following.startswith("-Wl,") and len(following) > 4:
        cursor.take()
        return following[4:]
    return None


def _linker_option(t: Translation, token: str, cursor: _Cursor) -> None:
    opt = cursor.take() if token == "-Wl" else token[4:]
    if not opt:
        return

    if opt == "--whole-archive":
        t.link_args.append("/wholearchive")
        return

    name: str | None = None
    kind = ""
    for option, link_flag in LINKER_FILE_OPTIONS.items():
        if opt.startswith(option + ",") and len(opt) > len(option) + 1:
            name, kind = opt[len(option) + 1 :], link_flag
            break
        if opt == option:
            name, kind = _linker_value(cursor), link_flag
            break

    if name:
        t.link_args.append(f"{kind}{to_native_path(name)}")


def _target_32bit(t: Translation, token: str, cursor: _Cursor) -> None:
    t.target_is_32bit = True


def _no_rtti(t: Translation, token: str, cursor: _Cursor) -> None:
    t.rtti_enabled = False


def _no_threadsafe_statics(t: Translation, token: str, cursor: _Cursor) -> None:
    t.threadsafe_statics_enabled = False


def _constexpr_depth(t: Translation, token: str, cursor: _Cursor) -> None:
    t.compile_args.append("/constexpr:depth" + token[len("-fconstexpr-depth=") :])


def _fp_contract(t: Translation, token: str, cursor: _Cursor) -> None:
    mode = token[len("-ffp-contract=") :]
    if mode in FP_CONTRACT_FLAGS:
        t.compile_args.append(FP_CONTRACT_FLAGS[mode])


def _no_std_include(t: Translation, token: str, cursor: _Cursor) -> None:
    t.default_include_paths_enabled = False


def _no_std_lib(t: Translation, token: str, cursor: _Cursor) -> None:
    t.default_library_paths_enabled = False


def _no_default_libs(t: Translation, token: str, cursor: _Cursor) -> None:
    t.link_args.append("/nodefaultlib")
    t.default_library_paths_enabled = False


def _std(t: Translation, token: str, cursor: _Cursor) -> None:
    # -std=gnu11 -> /std:c11, -std=c++17 -> /std:c++17
    version = token[len("-std=") :]
    if version.startswith("gnu"):
        version = "c" + version[3:]
    t.compile_args.append(f"/std:{version}")


def _force_include(t: Translation, token: str, cursor: _Cursor) -> None:
    # NOTE: unlike -I, the header path is not translated
    header = cursor.take()
    if header is not None:
        t.compile_args.append(f"/FI{header}")


def _print_search_dirs(t: Translation, token: str, cursor: _Cursor) -> None:
    t.print_search_dirs = True


def _operand(t: Translation, token: str, cursor: _Cursor) -> None:
    t.compile_args.append(to_native_path(token))


def _ignore(t: Translation, token: str, cursor: _Cursor) -> None:
    pass


# ---------------------------------------------------------------------------
# Rule table (first match wins)
# ---------------------------------------------------------------------------

RULES: tuple[Rule, ...] = (
    Rule("long-option", _prefix("--"), _long_option),
    Rule("help", _exact("-h", "-?", "-help"), _help),
    Rule("compile-only", _exact("-c"), _compile_only),
    Rule("simple", lambda token: token in SIMPLE_COMPILE_FLAGS, _simple),
    Rule("language", _prefix("-x"), _language),
    Rule("output", _prefix("-o"), _output),
    Rule("include-dir", _prefix("-I"), _include_dir),
    Rule("define", lambda token: token[:2] in ("-D", "-U"), _define),
    Rule("library-dir", _prefix("-L"), _library_dir),
    Rule("library", _prefix("-l", min_len=3), _library),
    Rule("link-passthrough", _flag_or_comma("-Wlink"), _link_passthrough),
    Rule("linker-option", _flag_or_comma("-Wl"), _linker_option),
    Rule("cl-passthrough", _flag_or_comma("-Wcl"), _cl_passthrough),
    Rule("target-32bit", _exact("-m32"), _target_32bit),
    Rule("no-rtti", _exact("-fno-rtti"), _no_rtti),
    Rule("no-threadsafe-statics", _exact("-fno-threadsafe-statics"), _no_threadsafe_statics),
    Rule("constexpr-depth", _prefix("-fconstexpr-depth=", min_len=19), _constexpr_depth),
    Rule("fp-contract", _prefix("-ffp-contract="), _fp_contract),
    Rule("no-std-include", _exact("-nostdinc", "-nostdinc++"), _no_std_include),
    Rule("no-std-lib", _exact("-nostdlib"), _no_std_lib),
    Rule("no-default-libs", _exact("-nodefaultlibs"), _no_default_libs),
    Rule("std", _prefix("-std=", min_len=6), _std),
    Rule("force-include", _exact("-include"), _force_include),
    Rule("print-search-dirs", _exact("-print-search-dirs"), _print_search_dirs),
    Rule("operand", lambda token: token != "" and not token.startswith("-"), _operand),
)

_FALLBACK = Rule("ignored", lambda token: True, _ignore)


def classify(token: str) -> Rule:
    """Return the first rule in :data:`RULES` that accepts *token*."""
    for rule in RULES:
        if rule.matches(token):
            return rule
    return _FALLBACK


def translate(args: Sequence[str]) -> Translation:
    """Scan a GCC argument list into a :class:`Translation`.

    Scanning stops early on a help request; everything else is consumed.
    """
    t = Translation()
    cursor = _Cursor(args)
    for token in cursor:
        classify(token).handler(t, token, cursor)
        if t.show_help:
            break
    return t
