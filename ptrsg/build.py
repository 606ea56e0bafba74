"""Ahead-of-time compilation for compiled workloads."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from ptrsg.exceptions import BuildError
from ptrsg.workloads.base import CompiledWorkload, Workload

logger = logging.getLogger("ptrsg")


def _tail(text: str, lines: int = 5) -> str:
    return "\n".join(text.strip().splitlines()[-lines:])


def compile_workload(workload: CompiledWorkload, source_path: Path, stream: bool = False) -> Path:
    """Compile *source_path* and return the executable's path.

    With *stream* the compiler inherits stdout/stderr; otherwise its
    stderr is captured for the error message.
    """
    executable = workload.executable_path(source_path)
    argv = workload.compile_command(source_path, executable)
    logger.debug("%s compile: %s", workload.name, argv)

    try:
        r = subprocess.run(
            argv,
            stdout=None if stream else subprocess.DEVNULL,
            stderr=None if stream else subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except (OSError, ValueError) as e:
        raise BuildError(f"{workload.name}: cannot launch {argv[0]}: {e}") from e

    if r.returncode != 0:
        msg = f"{workload.name}: {argv[0]} exited with status {r.returncode}"
        if r.stderr:
            msg += f"\n{_tail(r.stderr)}"
        raise BuildError(msg)
    if not executable.exists():
        raise BuildError(f"{workload.name}: {argv[0]} produced no executable at {executable}")
    return executable


def build_artifacts(
    workloads: list[Workload],
    sources: dict[str, Path],
    stream: bool = False,
) -> dict[str, Path]:
    """Return the runnable artifact for every workload.

    Interpreted workloads run straight from their source; compiled ones
    are built one after another and the first failure aborts the run.
    """
    artifacts: dict[str, Path] = {}
    for workload in workloads:
        source_path = sources[workload.name]
        if isinstance(workload, CompiledWorkload):
            artifacts[workload.name] = compile_workload(workload, source_path, stream)
        else:
            artifacts[workload.name] = source_path
    return artifacts
