# src/monkey/cli/main.py
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..config import config
from ..environment import Environment
from ..evaluator import evaluate, reset_summary, EVAL_SUMMARY, NULL
from ..lexer import Lexer
from ..monkey_token import EOF
from ..object import ERROR_OBJ
from ..parser import parse

console = Console()
logger = logging.getLogger("monkey.cli")

_EXIT_WORDS = {"exit", "quit"}


def _setup_logging():
    level = logging.DEBUG if config.debug else config.log_level
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=console, show_path=False, show_time=False)],
        force=True,
    )


def _read_source(file):
    with open(file, "r", encoding="utf-8") as f:
        return f.read()


def _print_parse_errors(errors):
    console.print("[bold red]Parser Errors:[/bold red]")
    for error in errors:
        console.print(f"  ❌ {escape(error)}")


def _print_result(result):
    style = "red" if result.type() == ERROR_OBJ else "green"
    console.print(f"[{style}]{escape(result.inspect())}[/{style}]", soft_wrap=True)


@click.group()
@click.version_option(version=__version__, prog_name="Monkey")
@click.option("--debug", is_flag=True, default=False, help="Trace the parser and evaluator.")
def cli(debug):
    """Monkey Programming Language - a small tree-walking interpreter"""
    if debug:
        config.set("debug", True)
    _setup_logging()


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def run(file):
    """Run a Monkey program"""
    program, errors = parse(_read_source(file))

    if errors:
        _print_parse_errors(errors)
        sys.exit(1)

    reset_summary()
    result = evaluate(program, Environment())
    logger.debug("Evaluation summary: %s", EVAL_SUMMARY)

    if result is not NULL:
        _print_result(result)
    if result.type() == ERROR_OBJ:
        sys.exit(1)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def check(file):
    """Check syntax of a Monkey file"""
    _, errors = parse(_read_source(file))

    if errors:
        console.print("[bold red]❌ Syntax Errors Found:[/bold red]")
        for error in errors:
            console.print(f"  {escape(error)}")
        sys.exit(1)

    console.print("[bold green]✅ Syntax is valid![/bold green]")


@cli.command(name="ast")
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def show_ast(file):
    """Show the canonical rendering of a Monkey file's AST"""
    program, errors = parse(_read_source(file))

    if errors:
        _print_parse_errors(errors)
        sys.exit(1)

    console.print(Panel.fit(
        escape(str(program)),
        title="[bold blue]Abstract Syntax Tree[/bold blue]",
        border_style="blue"
    ))


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def tokens(file):
    """Show tokens of a Monkey file"""
    lexer = Lexer(_read_source(file))

    table = Table(title="Tokens")
    table.add_column("Type", style="cyan")
    table.add_column("Literal", style="green")
    table.add_column("Line", style="yellow")
    table.add_column("Column", style="yellow")

    for token in lexer.tokens():
        if token.type == EOF:
            break
        table.add_row(escape(token.type), escape(token.literal), str(token.line), str(token.column))

    console.print(table)


@cli.command()
def repl():
    """Start the Monkey REPL"""
    env = Environment()
    console.print(f"[bold green]Monkey REPL v{__version__}[/bold green]")
    console.print("Type 'exit' to quit\n")

    while True:
        try:
            line = console.input(escape(config.prompt))
        except (EOFError, KeyboardInterrupt):
            console.print("\n👋 Goodbye!")
            break

        if line.strip() in _EXIT_WORDS:
            break
        if not line.strip():
            continue

        program, errors = parse(line)
        if errors:
            _print_parse_errors(errors)
            continue

        # One Environment for the whole session, so bindings carry over
        result = evaluate(program, env)
        if result is not NULL:
            _print_result(result)


if __name__ == "__main__":
    cli()
