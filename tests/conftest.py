"""Shared fixtures: workloads that only need the running Python."""

import sys
from pathlib import Path

import pytest

from ptrsg.workloads.base import CompiledWorkload, InterpretedWorkload, ToolProbe


class QuickWorkload(InterpretedWorkload):
    name = "quick"
    extension = "quick.py"
    interpreter = sys.executable
    probe = ToolProbe(sys.executable)
    source = "sorted(str(i) for i in range(1000))\n"


class SlowWorkload(QuickWorkload):
    name = "slow"
    extension = "slow.py"
    source = "import time\ntime.sleep(0.05)\n"


class FailingWorkload(QuickWorkload):
    name = "failing"
    extension = "failing.py"
    source = "raise SystemExit(3)\n"


class PyCompiledWorkload(CompiledWorkload):
    """'Compiles' by copying the source into an executable shell of Python."""

    name = "pyc"
    extension = "pyc.py"
    probe = ToolProbe(sys.executable)
    source = "pass\n"
    compiler_script = (
        "import sys\n"
        "src, exe = sys.argv[1], sys.argv[2]\n"
        "open(exe, 'w').write(open(src).read())\n"
    )

    def compile_command(self, source_path: Path, executable: Path) -> list[str]:
        return [sys.executable, "-c", self.compiler_script, str(source_path), str(executable)]

    def command(self, artifact: Path) -> list[str]:
        return [sys.executable, str(artifact)]


class BrokenCompilerWorkload(PyCompiledWorkload):
    name = "broken"
    extension = "broken.py"
    compiler_script = "import sys\nsys.stderr.write('syntax error\\n')\nsys.exit(2)\n"


@pytest.fixture
def quick():
    return QuickWorkload()


@pytest.fixture
def python_only(monkeypatch):
    """Make the pipeline run a pair of Python-only workloads."""
    from ptrsg import pipeline

    workloads = [QuickWorkload(), SlowWorkload()]
    monkeypatch.setattr(pipeline, "select_workloads", lambda chaos: list(workloads))
    return workloads


@pytest.fixture
def with_failure(monkeypatch):
    from ptrsg import pipeline

    workloads = [QuickWorkload(), FailingWorkload()]
    monkeypatch.setattr(pipeline, "select_workloads", lambda chaos: list(workloads))
    return workloads
