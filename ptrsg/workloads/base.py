"""Abstract base classes for language workloads."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ToolProbe:
    """An external tool and the arguments that make it print its version."""

    tool: str
    args: tuple[str, ...] = ("--version",)

    @property
    def argv(self) -> list[str]:
        return [self.tool, *self.args]


class Workload(ABC):
    """Base class for a timed sorting workload in one language.

    Every workload declares its metadata as class attributes and
    implements ``command``. Compiled languages derive from
    :class:`CompiledWorkload` instead.
    """

    name: str = "unnamed"
    description: str = ""
    extension: str = ""
    source: str = ""
    probe: ToolProbe = ToolProbe("true")

    requires_build: bool = False

    @property
    def filename(self) -> str:
        return f"task.{self.extension}"

    @abstractmethod
    def command(self, artifact: Path) -> list[str]:
        """Return the argv that runs *artifact*."""
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class InterpretedWorkload(Workload):
    """A workload run as ``<interpreter> <source>``."""

    interpreter: str = ""

    def command(self, artifact: Path) -> list[str]:
        return [self.interpreter, str(artifact)]


class CompiledWorkload(Workload):
    """A workload compiled ahead of time and run as a bare executable."""

    requires_build = True

    def executable_path(self, source_path: Path) -> Path:
        return source_path.parent / f"task_{self.name}"

    @abstractmethod
    def compile_command(self, source_path: Path, executable: Path) -> list[str]:
        """Return the compiler argv producing *executable* from *source_path*.

        Optimisation is kept at the lowest level the toolchain offers so
        that run times stay long enough to carry jitter.
        """
        ...

    def command(self, artifact: Path) -> list[str]:
        return [str(artifact)]
