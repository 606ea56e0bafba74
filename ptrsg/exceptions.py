"""Exception hierarchy for ptrsg.

Every stage raises a subclass of PTRSGError; the CLI is the only place
that turns one into a message and a non-zero exit status.
"""

from __future__ import annotations


class PTRSGError(Exception):
    """Base exception for all ptrsg errors."""


class ConfigError(PTRSGError):
    """Run configuration is invalid (bit length or chaos level)."""


class MissingToolError(PTRSGError):
    """One or more external tools could not be invoked."""

    def __init__(self, tools: list[str]) -> None:
        self.tools = list(tools)
        super().__init__(f"Preflight check failed: {', '.join(self.tools)} missing!")


class ProvisionError(PTRSGError):
    """A workload source file could not be written."""


class BuildError(PTRSGError):
    """A compiler could not be launched or exited non-zero."""


class ExecutionError(PTRSGError):
    """A workload process failed to launch, exited non-zero, or left no timing."""
