"""Workload implementations and chaos-level selection."""

from __future__ import annotations

from ptrsg.exceptions import ConfigError
from ptrsg.workloads.base import (
    CompiledWorkload,
    InterpretedWorkload,
    ToolProbe,
    Workload,
)
from ptrsg.workloads.compiled import CppWorkload, GoWorkload, RustWorkload
from ptrsg.workloads.interpreted import LuaWorkload, NodeWorkload, PythonWorkload

# Enumeration order; queued runs follow it.
ALL_WORKLOADS: list[type[Workload]] = [
    LuaWorkload,
    PythonWorkload,
    NodeWorkload,
    GoWorkload,
    CppWorkload,
    RustWorkload,
]

CHAOS_LEVELS: dict[str, tuple[str, ...]] = {
    "low": ("lua", "python", "node", "go"),
    "high": tuple(cls.name for cls in ALL_WORKLOADS),
}


def select_workloads(chaos: str = "high") -> list[Workload]:
    """Instantiate the workloads of a chaos level in enumeration order."""
    if chaos not in CHAOS_LEVELS:
        raise ConfigError(f"chaos must be one of {', '.join(CHAOS_LEVELS)}, got {chaos!r}")
    wanted = CHAOS_LEVELS[chaos]
    return [cls() for cls in ALL_WORKLOADS if cls.name in wanted]


def required_probes(workloads: list[Workload]) -> list[ToolProbe]:
    """Distinct tool probes for *workloads*, first occurrence wins."""
    seen: set[str] = set()
    probes: list[ToolProbe] = []
    for workload in workloads:
        if workload.probe.tool not in seen:
            seen.add(workload.probe.tool)
            probes.append(workload.probe)
    return probes


__all__ = [
    "ALL_WORKLOADS",
    "CHAOS_LEVELS",
    "CompiledWorkload",
    "InterpretedWorkload",
    "ToolProbe",
    "Workload",
    "required_probes",
    "select_workloads",
]
