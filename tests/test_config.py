"""Tests for the toolchain config loader."""

from pathlib import Path

import pytest

from gcc2msvc.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CL_X64,
    DEFAULT_CL_X86,
    DEFAULT_INCLUDES,
    DEFAULT_LIBPATHS_X64,
    ConfigError,
    ToolchainConfig,
    _find_config,
    load_config,
)

# ---------------------------------------------------------------------------
# Helper: write a gcc2msvc.toml and return its path
# ---------------------------------------------------------------------------


def _write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "gcc2msvc.toml"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config discovery away from any gcc2msvc.toml above the repo."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)


# ---------------------------------------------------------------------------
# Defaults and environment
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_builtin_defaults(self) -> None:
        cfg = load_config(environ={})
        assert cfg.cl_x64 == DEFAULT_CL_X64
        assert cfg.cl_x86 == DEFAULT_CL_X86
        assert cfg.include_dirs == DEFAULT_INCLUDES
        assert cfg.lib_dirs_x64 == DEFAULT_LIBPATHS_X64
        assert cfg.cl_cmd is None
        assert cfg.include_env == ""
        assert cfg.lib_env == ""
        assert cfg.source is None

    def test_defaults_are_native_paths(self) -> None:
        assert DEFAULT_CL_X64.startswith("C:/")
        assert DEFAULT_CL_X86.endswith("/cl.exe")

    def test_default_lists_not_shared(self) -> None:
        a = ToolchainConfig()
        a.include_dirs.append("X:/extra")
        assert ToolchainConfig().include_dirs == DEFAULT_INCLUDES

    def test_environment_values(self) -> None:
        env = {"CL_CMD": "D:/VC/cl.exe", "INCLUDE": "a;b", "LIB": "c"}
        cfg = load_config(environ=env)
        assert cfg.cl_cmd == "D:/VC/cl.exe"
        assert cfg.include_env == "a;b"
        assert cfg.lib_env == "c"

    def test_empty_cl_cmd_is_unset(self) -> None:
        assert load_config(environ={"CL_CMD": ""}).cl_cmd is None


# ---------------------------------------------------------------------------
# Config file
# ---------------------------------------------------------------------------


class TestConfigFile:
    def test_overrides(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path,
            '[toolchain]\n'
            'cl_x64 = "D:/VS/bin/amd64/cl.exe"\n'
            'cl_x86 = "D:/VS/bin/cl.exe"\n'
            'includes = ["D:/VS/include"]\n'
            'libpaths_x64 = ["D:/VS/lib/amd64"]\n'
            'libpaths_x86 = ["D:/VS/lib"]\n',
        )
        cfg = load_config(environ={}, config_path=path)
        assert cfg.cl_x64 == "D:/VS/bin/amd64/cl.exe"
        assert cfg.cl_x86 == "D:/VS/bin/cl.exe"
        assert cfg.include_dirs == ["D:/VS/include"]
        assert cfg.lib_dirs_x64 == ["D:/VS/lib/amd64"]
        assert cfg.lib_dirs_x86 == ["D:/VS/lib"]
        assert cfg.source == path

    def test_partial_override_keeps_defaults(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, '[toolchain]\nincludes = []\n')
        cfg = load_config(environ={}, config_path=path)
        assert cfg.include_dirs == []
        assert cfg.cl_x64 == DEFAULT_CL_X64

    def test_no_toolchain_table(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "")
        cfg = load_config(environ={}, config_path=path)
        assert cfg.cl_x64 == DEFAULT_CL_X64

    def test_env_var_selects_file(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, '[toolchain]\ncl_x64 = "E:/cl.exe"\n')
        cfg = load_config(environ={CONFIG_ENV_VAR: str(path)})
        assert cfg.cl_x64 == "E:/cl.exe"

    def test_discovered_from_cwd_parent(self, tmp_path: Path) -> None:
        _write_config(tmp_path, '[toolchain]\ncl_x86 = "F:/cl.exe"\n')
        cfg = load_config(environ={})
        assert cfg.cl_x86 == "F:/cl.exe"

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read config"):
            load_config(environ={}, config_path=tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "[toolchain\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(environ={}, config_path=path)

    def test_wrong_string_type(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "[toolchain]\ncl_x64 = 3\n")
        with pytest.raises(ConfigError, match="must be a string"):
            load_config(environ={}, config_path=path)

    def test_wrong_list_type(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, '[toolchain]\nincludes = "C:/inc"\n')
        with pytest.raises(ConfigError, match="list of strings"):
            load_config(environ={}, config_path=path)

    def test_toolchain_not_a_table(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, 'toolchain = "x"\n')
        with pytest.raises(ConfigError, match="must be a table"):
            load_config(environ={}, config_path=path)


class TestFindConfig:
    def test_not_found(self, tmp_path: Path) -> None:
        start = tmp_path / "a" / "b"
        start.mkdir(parents=True)
        assert _find_config(start) is None

    def test_found_in_ancestor(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "")
        start = tmp_path / "a" / "b"
        start.mkdir(parents=True)
        assert _find_config(start) == path.resolve()
