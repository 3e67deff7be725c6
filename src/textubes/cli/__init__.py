"""
Textubes CLI.

Commands:

- validate: check a grammar and print errors/warnings
- compile: turn a grammar into an editor flow file
- preprocess: print the strict-JSON form of pasted grammar text
- generate: sample text from a grammar with the reference runtime
- node-types: list the node types compiled graphs use
"""

import logging
import platform
from pathlib import Path

import typer

from textubes import __version__
from textubes.cli.ui import (
    console,
    node_types_table,
    print_diagnostics,
    print_error,
    print_success,
)
from textubes.core.errors import GrammarParseError, GrammarValidationError, TextubesError
from textubes.core.flow import dump_flow, to_flow_document
from textubes.core.importer import ConfirmWarnings, import_grammar, parse_grammar_text
from textubes.core.manifest import DEFAULT_CONFIG_FILE, load_config
from textubes.core.preprocess import preprocess_grammar_text
from textubes.core.validator import validate_grammar
from textubes.runtime import generate as generate_samples

app = typer.Typer(
    help="Textubes – compile Tracery grammars into text-pipeline node graphs",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"textubes {__version__} (Python {platform.python_version()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Textubes CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read(file: Path) -> str:
    return file.read_text(encoding="utf-8")


def _make_confirm(assume_yes: bool) -> ConfirmWarnings:
    def confirm(warnings: list[str]) -> bool:
        print_diagnostics([], warnings)
        if assume_yes:
            return True
        return typer.confirm("Compile anyway? Unsupported syntax will be ignored", default=False)

    return confirm


@app.command()
def validate(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Grammar file"),
) -> None:
    """Validate a Tracery grammar without compiling it."""
    try:
        grammar = parse_grammar_text(_read(file), source=file)
    except GrammarParseError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    result = validate_grammar(grammar)
    print_diagnostics(result.errors, result.warnings)

    if not result.valid:
        raise typer.Exit(code=1)
    print_success("Grammar is valid.")


@app.command("compile")
def compile_command(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Grammar file"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the flow file here (default: stdout)"
    ),
    dark: bool | None = typer.Option(
        None, "--dark/--light", help="Display theme (default: from textubes.toml)"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Compile despite warnings"),
    name: str | None = typer.Option(None, "--name", "-n", help="Flow name"),
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE), "--config", "-c", help="Path to textubes.toml"
    ),
) -> None:
    """Compile a Tracery grammar into a Textubes flow file."""
    try:
        settings = load_config(config)
        is_dark_mode = settings.compiler.dark_mode if dark is None else dark
        graph = import_grammar(
            _read(file),
            is_dark_mode=is_dark_mode,
            confirm=_make_confirm(yes),
            layout=settings.layout,
            source=file,
        )
    except GrammarValidationError as e:
        print_diagnostics(e.errors, e.warnings)
        raise typer.Exit(code=1)
    except TextubesError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if graph is None:
        print_error("Cancelled.")
        raise typer.Exit(code=1)

    flow = dump_flow(to_flow_document(graph, is_dark_mode=is_dark_mode, name=name or file.stem))
    if output is None:
        typer.echo(flow)
    else:
        output.write_text(flow + "\n", encoding="utf-8")
        print_success(f"Wrote {len(graph.nodes)} nodes and {len(graph.edges)} edges to {output}")


@app.command()
def preprocess(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Grammar file"),
) -> None:
    """Print the strict-JSON form of a pasted grammar literal."""
    typer.echo(preprocess_grammar_text(_read(file)))


@app.command()
def generate(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Grammar file"),
    count: int = typer.Option(5, "--count", "-n", min=1, help="Number of samples"),
    seed: int | None = typer.Option(None, "--seed", "-s", help="Random seed"),
) -> None:
    """Compile a grammar and print sample outputs."""
    try:
        graph = import_grammar(_read(file), confirm=_make_confirm(True), source=file)
    except GrammarValidationError as e:
        print_diagnostics(e.errors, e.warnings)
        raise typer.Exit(code=1)
    except TextubesError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    for sample in generate_samples(graph, count=count, seed=seed):
        typer.echo(sample)


@app.command("node-types")
def node_types() -> None:
    """List the node types used by compiled grammars."""
    console.print(node_types_table())


def main() -> None:
    app()


__all__ = ["app", "main"]
