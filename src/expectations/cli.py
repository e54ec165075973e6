"""Command-line interface for running expectations."""

import logging
import sys

import click
from rich.console import Console

from expectations.config import ExpectationsSettings
from expectations.exceptions import DiscoveryError
from expectations.reports import ConsoleReporter
from expectations.testing import Runner, collect, run_cases, select_cases


@click.command()
@click.argument("path", required=False, default=".", type=click.Path(exists=True))
@click.option("--pattern", "-k", default=None, help="Only run namespaces fully matching this regex")
@click.option("--verbose", "-v", "verbose", count=True, help="Also list passing expectations")
@click.option("--quiet", "-q", is_flag=True, help="Only print failures and errors")
@click.option("--no-stack-trace", is_flag=True, help="Do not print stack traces of errors")
def main(path: str, pattern: str | None, verbose: int, quiet: bool, no_stack_trace: bool) -> None:
    """
    Run the expectations declared in expect_*.py files under PATH.

    Exits with status 1 when any expectation failed or errored.

    Example:
        expectations tests/ -k "expect_(math|strings)" -v
    """
    overrides: dict[str, object] = {}
    if pattern is not None:
        overrides["pattern"] = pattern
    if verbose or quiet:
        overrides["verbosity"] = -1 if quiet else min(verbose, 2)
    if no_stack_trace:
        overrides["show_stack_trace"] = False
    settings = ExpectationsSettings(**overrides)

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    console = Console()
    try:
        cases = collect(path)
    except DiscoveryError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    cases = select_cases(cases, settings.pattern)
    if not cases:
        console.print("[yellow]No expectations found.[/yellow]")
        sys.exit(0)

    reporter = ConsoleReporter(console, settings.verbosity, show_stack_trace=settings.show_stack_trace)
    runner = Runner([reporter], settings=settings)
    result = run_cases(cases, runner)
    sys.exit(0 if result.ok else 1)


if __name__ == "__main__":
    main()
