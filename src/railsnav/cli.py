"""railsnav CLI — entry point for all commands."""

from __future__ import annotations

import subprocess
from pathlib import Path

import typer
from rich import print as rprint

from railsnav import __version__


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"railsnav {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="railsnav",
    help="Rails-aware file navigation: resolve names under the cursor to files.",
    no_args_is_help=True,
)


def _root(path: Path) -> Path:
    from railsnav.project import NotAProjectError, require_root

    try:
        return require_root(path)
    except NotAProjectError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _run(cmd: list[str], cwd: Path, dry_run: bool) -> None:
    typer.echo(" ".join(cmd))
    if dry_run:
        return
    result = subprocess.run(cmd, cwd=cwd)
    if result.returncode != 0:
        raise typer.Exit(result.returncode)


def _read_line(file: Path, line: int) -> str:
    lines = file.read_text(encoding="utf-8").splitlines()
    if not 1 <= line <= len(lines):
        rprint(f"[red]Line {line} is outside {file}[/red]")
        raise typer.Exit(1)
    return lines[line - 1]


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: N803
        None, "--version", "-V", callback=version_callback, is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """railsnav — Rails file navigation."""
    from railsnav.log import setup_logging

    setup_logging("DEBUG" if verbose else None)


@app.command()
def root(
    path: Path = typer.Argument(Path("."), help="File or directory inside a project"),
) -> None:
    """Print the Rails project root enclosing PATH."""
    typer.echo(str(_root(path)))


@app.command()
def resolve(
    token: str = typer.Argument("", help="Token to resolve (default: token under cursor)"),
    context: str = typer.Option("", "--context", "-c", help="Text preceding the token"),
    file: Path | None = typer.Option(None, "--file", "-f", help="Current buffer file"),
    line: int | None = typer.Option(None, "--line", help="1-based line in --file"),
    column: int | None = typer.Option(None, "--column", help="0-based cursor column"),
    explain: bool = typer.Option(False, "--explain", help="Show the rule that fired"),
) -> None:
    """Resolve TOKEN to the file Rails conventions put it in."""
    from railsnav.context import extract_context, token_at, token_span
    from railsnav.project import find_root
    from railsnav.resolver import explain as explain_token

    project = find_root(file) if file is not None else None
    if file is not None and line is not None:
        text = _read_line(file, line)
        if not token and column is not None:
            token = token_at(text, column)
            span = token_span(text, column)
            context = extract_context(text, span[0] if span else column)
        else:
            context = extract_context(text, column if column is not None else text.find(token))

    if not token:
        rprint("[red]No token to resolve.[/red]")
        raise typer.Exit(1)

    buffer_path = file.absolute() if file is not None else None
    resolution = explain_token(token, context, buffer_path=buffer_path, root=project)
    if explain:
        rprint(f"[green]{resolution.path}[/green]  (rule: {resolution.rule})")
    else:
        typer.echo(resolution.path)


@app.command()
def find(
    token: str = typer.Argument(help="Token to resolve and look up"),
    file: Path = typer.Option(..., "--file", "-f", help="Current buffer file"),
    context: str = typer.Option("", "--context", "-c", help="Text preceding the token"),
) -> None:
    """Resolve TOKEN and locate the file on the project's search path."""
    from railsnav.buffer import EditorState
    from railsnav.finder import find_file
    from railsnav.resolver import resolve as resolve_token

    project = _root(file)
    buffer = EditorState().open(file)
    candidate = resolve_token(token, context, buffer_path=buffer.path, root=project)
    search = [str(buffer.path.parent), *buffer.options["path"]]
    found = find_file(candidate, search, buffer.options["suffixesadd"])
    if found is None:
        rprint(f"[yellow]Can't find file[/yellow] \"{candidate}\" in path")
        raise typer.Exit(1)
    typer.echo(str(found))


@app.command()
def alternate(
    file: Path = typer.Argument(help="Current buffer file"),
) -> None:
    """Print the alternate file (test ↔ implementation) for FILE."""
    from railsnav.alternate import find_alternate
    from railsnav.project import relative_path

    project = _root(file)
    typer.echo(str(project / find_alternate(relative_path(project, file), project)))


@app.command()
def partial(
    file: Path = typer.Argument(help="Template to extract from"),
    args: list[str] | None = typer.Argument(None, help="Partial name"),
    first: int = typer.Option(..., "--first", help="First line (1-based)"),
    last: int = typer.Option(..., "--last", help="Last line (1-based, inclusive)"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing partial"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show, don't write"),
) -> None:
    """Move lines FIRST..LAST of FILE into a new partial."""
    from railsnav.partial import (
        InvalidPartialArgument,
        PartialExistsError,
        extract_partial,
        parse_arguments,
        write_partial,
    )

    project = _root(file)
    lines = file.read_text(encoding="utf-8").splitlines()
    try:
        name = parse_arguments(args or [])
        result = extract_partial(lines, first, last, name, file.absolute(), project)
    except InvalidPartialArgument as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if dry_run:
        rprint(f"[yellow]Would write:[/yellow] {result.path}")
        typer.echo("\n".join(result.body))
        rprint(f"[yellow]Replacement:[/yellow] {result.render}")
        return

    try:
        written = write_partial(result, force=force)
    except PartialExistsError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)
    file.write_text("\n".join(result.lines) + "\n", encoding="utf-8")
    rprint(f"[green]Partial created:[/green] {written}")


@app.command()
def options(
    file: Path = typer.Argument(help="File inside a project"),
) -> None:
    """Print the buffer options for FILE as JSON."""
    from railsnav.buffer import EditorState
    from railsnav.options import BufferOptions

    buffer = EditorState().open(file)
    if not buffer.is_rails:
        rprint(f"[red]Not in a Rails project: {file}[/red]")
        raise typer.Exit(1)

    typer.echo(BufferOptions.model_validate(buffer.options).model_dump_json(indent=2))


@app.command()
def rake(
    task: str | None = typer.Argument(None, help="Rake task"),
    path: Path = typer.Option(Path("."), "--path", help="File or dir in the project"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the command only"),
) -> None:
    """Run rake against the project's Rakefile."""
    from railsnav.commands import rake_command

    project = _root(path)
    _run(rake_command(project, task), project, dry_run)


@app.command()
def script(
    name: str = typer.Argument(help="Script under script/ (generate, server ...)"),
    args: list[str] | None = typer.Argument(None, help="Script arguments"),
    path: Path = typer.Option(Path("."), "--path", help="File or dir in the project"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the command only"),
) -> None:
    """Run one of the project's script/* helpers."""
    from railsnav.commands import script_command

    project = _root(path)
    try:
        cmd = script_command(project, name, args or [])
    except ValueError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)
    _run(cmd, project, dry_run)


@app.command()
def console(
    env: str | None = typer.Argument(None, help="Rails environment"),
    path: Path = typer.Option(Path("."), "--path", help="File or dir in the project"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the command only"),
) -> None:
    """Launch script/console."""
    from railsnav.commands import console_command

    project = _root(path)
    _run(console_command(project, env), project, dry_run)


@app.command()
def cd(
    subdir: str = typer.Argument("", help="Directory relative to the project root"),
    path: Path = typer.Option(Path("."), "--path", help="File or dir in the project"),
) -> None:
    """Print a project-relative directory, for the shell to cd into."""
    from railsnav.commands import cd_target

    project = _root(path)
    try:
        typer.echo(str(cd_target(project, subdir)))
    except ValueError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)
