"""Tests for the sandboxed override file."""

from pathlib import Path
from typing import Any

import pytest

from railsnav.overrides import (
    Sandbox,
    SandboxError,
    find_override,
    source_override,
    yaml_runner,
)


class TestSandbox:
    def test_sets_local_option(self) -> None:
        options: dict[str, Any] = {}
        Sandbox(options).set_option("suffixesadd", [".haml"])
        assert options == {"suffixesadd": [".haml"]}

    def test_rejects_other_options(self) -> None:
        options: dict[str, Any] = {}
        with pytest.raises(SandboxError, match="makeprg"):
            Sandbox(options).set_option("makeprg", "make")
        assert options == {}

    def test_rejects_wrongly_typed_value(self) -> None:
        options: dict[str, Any] = {"suffixesadd": [".rb"]}
        with pytest.raises(SandboxError, match="suffixesadd"):
            Sandbox(options).set_option("suffixesadd", ".haml")
        assert options == {"suffixesadd": [".rb"]}

    def test_nothing_applied_when_one_key_is_bad(self) -> None:
        options: dict[str, Any] = {"suffixesadd": [".rb"]}
        with pytest.raises(SandboxError, match="makeprg"):
            Sandbox(options).set_options({"suffixesadd": [".haml"], "makeprg": "make"})
        assert options == {"suffixesadd": [".rb"]}


class TestYamlRunner:
    def test_mapping(self, tmp_path: Path) -> None:
        f = tmp_path / "railsnav.yml"
        f.write_text("path:\n  - /a\n  - /b\n")
        options: dict[str, Any] = {}
        yaml_runner(f, Sandbox(options))
        assert options == {"path": ["/a", "/b"]}

    def test_empty_file(self, tmp_path: Path) -> None:
        f = tmp_path / "railsnav.yml"
        f.write_text("")
        options: dict[str, Any] = {}
        yaml_runner(f, Sandbox(options))
        assert options == {}

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        f = tmp_path / "railsnav.yml"
        f.write_text("- one\n- two\n")
        with pytest.raises(SandboxError, match="mapping"):
            yaml_runner(f, Sandbox({}))

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        f = tmp_path / "railsnav.yml"
        f.write_text("path: [unclosed\n")
        with pytest.raises(SandboxError):
            yaml_runner(f, Sandbox({}))

    def test_not_utf8(self, tmp_path: Path) -> None:
        f = tmp_path / "railsnav.yml"
        f.write_bytes(b"path: \xff\xfe\n")
        with pytest.raises(SandboxError):
            yaml_runner(f, Sandbox({}))

    def test_partial_mapping_not_applied(self, tmp_path: Path) -> None:
        f = tmp_path / "railsnav.yml"
        f.write_text("suffixesadd: [.haml]\nmakeprg: make\n")
        options: dict[str, Any] = {"suffixesadd": [".rb"]}
        with pytest.raises(SandboxError):
            yaml_runner(f, Sandbox(options))
        assert options == {"suffixesadd": [".rb"]}


class TestSourceOverride:
    def test_missing_file(self, tmp_path: Path) -> None:
        assert find_override(tmp_path) is None
        assert source_override(tmp_path, {}) is False

    def test_runner_gets_path_and_sandbox(self, tmp_path: Path) -> None:
        (tmp_path / "config").mkdir()
        override = tmp_path / "config" / "railsnav.yml"
        override.write_text("anything the runner understands\n")
        seen: list[tuple[Path, Sandbox]] = []

        def runner(path: Path, sandbox: Sandbox) -> None:
            seen.append((path, sandbox))
            sandbox.set_option("includeexpr", "custom")

        options: dict[str, Any] = {}
        assert source_override(tmp_path, options, runner) is True
        assert seen[0][0] == override
        assert options == {"includeexpr": "custom"}
