"""Command lines for the project commands (rake, script/*, cd)."""

from __future__ import annotations

from pathlib import Path

from railsnav.config import RAKE, RUBY


def rake_command(root: Path, task: str | None = None) -> list[str]:
    cmd = [RAKE, "-f", str(root / "Rakefile")]
    if task:
        cmd.append(task)
    return cmd


def script_command(root: Path, script: str, args: list[str] | None = None) -> list[str]:
    """Return the command running ``script/<script>`` with *args*."""
    script_path = root / "script" / script
    if script_path.parent != root / "script":
        raise ValueError(f"Invalid script name: {script}")
    return [RUBY, str(script_path), *(args or [])]


def console_command(root: Path, env: str | None = None) -> list[str]:
    return script_command(root, "console", [env] if env else [])


def cd_target(root: Path, subdir: str = "") -> Path:
    """Return the directory a project-relative cd should land in."""
    target = (root / subdir).resolve() if subdir else root
    if target != root.resolve() and root.resolve() not in target.parents:
        raise ValueError(f"{subdir} is outside the project")
    return target
