"""CLI for ptrsg."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager

import click

from ptrsg import __version__
from ptrsg.exceptions import PTRSGError
from ptrsg.workloads import CHAOS_LEVELS

logger = logging.getLogger("ptrsg")


class _DebugPrefixFormatter(logging.Formatter):
    """Plain messages, with ``[DEBUG]`` in front of debug records."""

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        if record.levelno <= logging.DEBUG:
            return f"[DEBUG] {msg}"
        return msg


@contextmanager
def _logging_to_stdout(verbosity: str):
    """Route the package logger to stdout at the level *verbosity* asks for."""
    level = {"none": logging.WARNING, "lite": logging.INFO, "heavy": logging.DEBUG}[verbosity]
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_DebugPrefixFormatter("%(message)s"))
    old_level, old_propagate = logger.level, logger.propagate
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    try:
        yield
    finally:
        handler.flush()
        logger.removeHandler(handler)
        logger.setLevel(old_level)
        logger.propagate = old_propagate


@click.group()
@click.version_option(__version__)
def main() -> None:
    """🎲 ptrsg: seeds from the timing jitter of six language runtimes."""


_chaos_option = click.option(
    "--chaos",
    type=click.Choice(sorted(CHAOS_LEVELS)),
    default="high",
    show_default=True,
    help="low runs lua, python, node and go; high adds cpp and rust.",
)


# ────────────────────────────────────────────────────────────
# Seed generation
# ────────────────────────────────────────────────────────────


@main.command()
@click.option(
    "--verbose",
    "verbose",
    type=click.Choice(["none", "lite", "heavy"]),
    default="none",
    is_flag=False,
    flag_value="heavy",
    help="Diagnostic output; a bare --verbose means heavy.",
)
@click.option("--queue", is_flag=True, help="Run languages one at a time instead of all at once.")
@_chaos_option
@click.option(
    "-S",
    "--seed-bits",
    "bits",
    type=click.IntRange(1, 512),
    default=512,
    show_default=True,
    help="Seed length in bits.",
)
def generate(verbose: str, queue: bool, chaos: str, bits: int) -> None:
    """Generate a seed from workload timings.

    Examples:

        ptrsg generate

        ptrsg generate -S 128 --chaos low

        ptrsg generate --queue --verbose lite
    """
    from ptrsg.pipeline import RunConfig, Verbosity, generate_seed

    try:
        config = RunConfig(bits=bits, chaos=chaos, queue=queue, verbosity=Verbosity.parse(verbose))
        with _logging_to_stdout(verbose):
            result = generate_seed(config)
    except PTRSGError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if config.verbosity >= Verbosity.LITE:
        from ptrsg.report import print_table, timings_table

        print_table(timings_table(result.timings))

    click.echo(f"Seed generated ({result.bits}-bit): {result.value}")


# ────────────────────────────────────────────────────────────
# Discovery
# ────────────────────────────────────────────────────────────


@main.command()
@_chaos_option
def languages(chaos: str) -> None:
    """List the workloads a chaos level runs."""
    from ptrsg.report import print_table, workloads_table
    from ptrsg.workloads import select_workloads

    print_table(workloads_table(select_workloads(chaos)))


@main.command()
@_chaos_option
def preflight(chaos: str) -> None:
    """Check that every tool a chaos level needs can be invoked."""
    from ptrsg.preflight import probe_tools
    from ptrsg.report import print_table, tools_table
    from ptrsg.workloads import required_probes, select_workloads

    statuses = probe_tools(required_probes(select_workloads(chaos)))
    print_table(tools_table(statuses))

    missing = [s.tool for s in statuses if not s.available]
    if missing:
        click.echo(f"Preflight check failed: {', '.join(missing)} missing!", err=True)
        sys.exit(1)
    click.echo("All required tools are available.")
