"""
Command-line entry point.

    loxpy SCRIPT     run a script once and exit with its status code
    loxpy            start the interactive loop
"""

import logging
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import DEFAULT_MAX_NESTING_DEPTH, DEFAULT_PROMPT, InterpreterConfig
from .repl import Repl
from .runner import EXIT_IO_ERROR, ScriptLoadError, run_file


def configure_logging(verbose: bool = False):
    """Send the package's log records to stderr through rich."""
    package_logger = logging.getLogger("loxpy")
    package_logger.handlers.clear()
    package_logger.addHandler(RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=verbose,
    ))
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("script", type=click.Path(dir_okay=False), required=False)
@click.option("--print-ast", is_flag=True, help="Print the parsed expression tree before evaluating")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr")
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_NESTING_DEPTH,
    show_default=True,
    help="Deepest allowed expression nesting",
)
@click.option(
    "--strict-comparisons",
    is_flag=True,
    help="Make <, <=, > and >= raise on non-number operands instead of returning false",
)
@click.option("--prompt", default=DEFAULT_PROMPT, show_default=True, help="Interactive prompt text")
@click.version_option(__version__, prog_name="loxpy")
@click.pass_context
def main(ctx: click.Context, script: Optional[str], print_ast: bool, verbose: bool,
         max_depth: int, strict_comparisons: bool, prompt: str):
    """Run a Lox expression SCRIPT, or start an interactive session."""
    configure_logging(verbose)

    config = InterpreterConfig(
        max_nesting_depth=max_depth,
        strict_comparisons=strict_comparisons,
        prompt=prompt,
    )

    if script is None:
        Repl(config).run()
        return

    try:
        result = run_file(script, config, print_ast=print_ast)
    except ScriptLoadError as e:
        click.echo(str(e), err=True)
        ctx.exit(EXIT_IO_ERROR)

    ctx.exit(result.exit_code)
