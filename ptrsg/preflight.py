"""Preflight gate: make sure every external tool can be invoked.

All probes run concurrently; nothing else in the pipeline starts until
every probe has finished.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from dataclasses import dataclass

from ptrsg.exceptions import MissingToolError
from ptrsg.workloads.base import ToolProbe

logger = logging.getLogger("ptrsg")

PROBE_TIMEOUT = 10.0  # seconds


@dataclass(frozen=True)
class ToolStatus:
    """Outcome of probing one tool."""

    tool: str
    available: bool
    detail: str = ""


def probe_tool(probe: ToolProbe, timeout: float = PROBE_TIMEOUT) -> ToolStatus:
    """Run *probe* and report whether the tool answered successfully."""
    try:
        r = subprocess.run(
            probe.argv,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except (OSError, ValueError, subprocess.TimeoutExpired) as e:
        return ToolStatus(probe.tool, False, str(e))

    # Some tools (lua -v on 5.1) print their banner to stderr.
    output = (r.stdout.strip() or r.stderr.strip()).splitlines()
    first = output[0] if output else ""
    if r.returncode != 0:
        detail = f"exit status {r.returncode}"
        if first:
            detail += f": {first}"
        return ToolStatus(probe.tool, False, detail)
    return ToolStatus(probe.tool, True, first)


def probe_tools(probes: list[ToolProbe], timeout: float = PROBE_TIMEOUT) -> list[ToolStatus]:
    """Probe every tool concurrently; results come back in *probes* order."""
    results: dict[str, ToolStatus] = {}
    results_lock = threading.Lock()

    def _worker(probe: ToolProbe) -> None:
        try:
            status = probe_tool(probe, timeout)
        except Exception as e:
            status = ToolStatus(probe.tool, False, f"probe failed: {e}")
        logger.debug("%s → %s", " ".join(probe.argv), status.detail or "ok")
        with results_lock:
            results[probe.tool] = status

    threads = []
    for probe in probes:
        t = threading.Thread(target=_worker, args=(probe,), daemon=True)
        t.start()
        threads.append(t)
    for t in threads:
        t.join()

    return [results[p.tool] for p in probes]


def check_tools(probes: list[ToolProbe], timeout: float = PROBE_TIMEOUT) -> list[ToolStatus]:
    """Probe *probes* and raise :class:`MissingToolError` if any failed."""
    statuses = probe_tools(probes, timeout)
    missing = [s.tool for s in statuses if not s.available]
    if missing:
        raise MissingToolError(missing)
    logger.debug("Preflight check passed: all required tools are available")
    return statuses
