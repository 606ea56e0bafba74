"""Execution scheduler: run every artifact once and time it.

Two modes:

1. Queued: one process at a time, in the order given.
2. Parallel: one thread per process, all joined before returning.

Timings are wall-clock nanoseconds from just before launch to exit.
"""

from __future__ import annotations

import logging
import subprocess
import threading
import time
from dataclasses import dataclass

from ptrsg.exceptions import ExecutionError

logger = logging.getLogger("ptrsg")


@dataclass(frozen=True)
class RunSpec:
    """A language name and the argv that runs its artifact."""

    name: str
    argv: tuple[str, ...]


class TimingTable:
    """Thread-safe language → elapsed-nanoseconds mapping.

    Each language may be recorded exactly once.
    """

    def __init__(self) -> None:
        self._records: dict[str, int] = {}
        self._lock = threading.Lock()

    def record(self, name: str, elapsed_ns: int) -> None:
        with self._lock:
            if name in self._records:
                raise ExecutionError(f"{name}: timing recorded twice")
            self._records[name] = elapsed_ns

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._records)

    def as_dict(self) -> dict[str, int]:
        """Snapshot sorted by language name."""
        with self._lock:
            return {k: self._records[k] for k in sorted(self._records)}

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._records


def time_run(argv: tuple[str, ...] | list[str], stream: bool = False) -> int:
    """Run *argv* to completion and return its wall-clock duration in ns.

    With *stream* the child writes straight to our stdout/stderr;
    otherwise stdout is discarded and stderr kept for the error message.
    """
    argv = list(argv)
    logger.debug("Running: %s", argv)
    try:
        t0 = time.perf_counter_ns()
        r = subprocess.run(
            argv,
            stdout=None if stream else subprocess.DEVNULL,
            stderr=None if stream else subprocess.PIPE,
        )
        elapsed = time.perf_counter_ns() - t0
    except (OSError, ValueError) as e:
        raise ExecutionError(f"cannot launch {argv[0]}: {e}") from e

    if r.returncode != 0:
        msg = f"{' '.join(argv)} exited with status {r.returncode}"
        if r.stderr:
            msg += f"\n{r.stderr.decode(errors='replace').strip()}"
        raise ExecutionError(msg)
    return elapsed


def run_queued(specs: list[RunSpec], stream: bool = False) -> TimingTable:
    """Run *specs* strictly one after another; the first failure aborts."""
    table = TimingTable()
    for spec in specs:
        logger.info("Running %s...", spec.name)
        table.record(spec.name, time_run(spec.argv, stream))
    return table


def run_parallel(specs: list[RunSpec], stream: bool = False) -> TimingTable:
    """Launch all *specs* at once and wait for every one of them.

    A failure in any worker is raised only after all threads have
    joined, so no process is left running behind the caller.
    """
    table = TimingTable()
    errors: list[ExecutionError] = []
    errors_lock = threading.Lock()

    def _worker(spec: RunSpec) -> None:
        try:
            table.record(spec.name, time_run(spec.argv, stream))
        except ExecutionError as e:
            with errors_lock:
                errors.append(e)
        except Exception as e:
            with errors_lock:
                errors.append(ExecutionError(f"{spec.name}: {e}"))

    threads = []
    for spec in specs:
        logger.info("Starting %s...", spec.name)
        t = threading.Thread(target=_worker, args=(spec,), name=f"ptrsg-{spec.name}")
        t.start()
        threads.append(t)

    for t in threads:
        t.join()

    if errors:
        raise errors[0]
    return table


def execute(specs: list[RunSpec], queue: bool = False, stream: bool = False) -> TimingTable:
    """Run *specs* in the configured mode and return the filled table."""
    if queue:
        return run_queued(specs, stream)
    return run_parallel(specs, stream)
