"""CLI commands using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from fs_test_helpers import __version__
from fs_test_helpers.assertions import assert_files_have_same_contents, assert_matches
from fs_test_helpers.fake import DEFAULT_ENCODING, Dir, Fake
from fs_test_helpers.manifest import ManifestError, load_manifest

app = typer.Typer(
    name="fs-test-helpers",
    help="Build and check filesystem fixtures for tests",
    no_args_is_help=True,
)

console = Console()


def show_success(message: str) -> None:
    """Show success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def show_error(message: str) -> None:
    """Show error message."""
    console.print(f"[red]✗[/red] {escape(message)}")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"fs-test-helpers v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Build and check filesystem fixtures for tests."""
    pass


def _load(manifest: Path) -> list[Fake]:
    """Load a manifest, exiting with status 1 when it is unusable."""
    try:
        return load_manifest(manifest)
    except (OSError, ManifestError) as e:
        show_error(str(e))
        raise typer.Exit(1) from e


def _add_branch(parent: Tree, fake: Fake) -> None:
    if isinstance(fake, Dir):
        branch = parent.add(f"[bold blue]{escape(fake.name)}/[/bold blue]")
        for child in fake.children:
            _add_branch(branch, child)
    else:
        size = len(fake.contents.encode(DEFAULT_ENCODING)) if fake.contents else 0
        parent.add(f"{escape(fake.name)} [dim]({size} bytes)[/dim]")


@app.command("show")
def show(
    manifest: Annotated[Path, typer.Argument(help="Manifest YAML file")],
) -> None:
    """Print the tree a manifest describes."""
    fakes = _load(manifest)
    tree = Tree(f"[bold]{escape(manifest.name)}[/bold]")
    for fake in fakes:
        _add_branch(tree, fake)
    console.print(tree)


@app.command("create")
def create(
    manifest: Annotated[Path, typer.Argument(help="Manifest YAML file")],
    dest: Annotated[Path, typer.Argument(help="Existing base directory")],
) -> None:
    """Create the fakes described by a manifest under DEST."""
    fakes = _load(manifest)
    try:
        for fake in fakes:
            path = fake.create(dest)
            show_success(f"Created {path}")
    except OSError as e:
        show_error(f"Could not create fixture: {e}")
        raise typer.Exit(1) from e


@app.command("check")
def check(
    manifest: Annotated[Path, typer.Argument(help="Manifest YAML file")],
    dest: Annotated[Path, typer.Argument(help="Base directory to check")],
    exact: Annotated[
        bool, typer.Option("--exact", "-e", help="Fail on entries the manifest lacks")
    ] = False,
) -> None:
    """Check that DEST holds what a manifest describes.

    Entries filled with a uuid cannot match and should not be checked.
    """
    fakes = _load(manifest)
    for fake in fakes:
        try:
            assert_matches(fake, dest, exact=exact)
        except AssertionError as e:
            show_error(str(e))
            raise typer.Exit(1) from e
        except OSError as e:
            show_error(f"Could not read fixture: {e}")
            raise typer.Exit(1) from e
        show_success(f"{dest / fake.name} matches")


@app.command("compare")
def compare(
    first: Annotated[Path, typer.Argument(help="First file")],
    second: Annotated[Path, typer.Argument(help="Second file")],
) -> None:
    """Check that two files have byte-for-byte identical contents."""
    try:
        assert_files_have_same_contents(first, second)
    except AssertionError as e:
        show_error(str(e))
        raise typer.Exit(1) from e
    except OSError as e:
        show_error(f"Could not read file: {e}")
        raise typer.Exit(1) from e
    show_success(f"{first} and {second} have the same contents")


if __name__ == "__main__":
    app()
