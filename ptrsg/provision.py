"""Run-scoped working directory and workload source files."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

from ptrsg.exceptions import ProvisionError
from ptrsg.workloads.base import Workload

logger = logging.getLogger("ptrsg")


class Workspace:
    """Ephemeral directory owned by a single run.

    Usage::

        with Workspace() as ws:
            sources = ws.provision(workloads)

    The directory and everything built inside it is removed when the
    ``with`` block exits, whether or not it raised.
    """

    def __init__(self, prefix: str = "prandom_") -> None:
        self._prefix = prefix
        self._path: Path | None = None

    @property
    def path(self) -> Path:
        if self._path is None:
            raise RuntimeError("workspace is not open")
        return self._path

    def __enter__(self) -> Workspace:
        try:
            self._path = Path(tempfile.mkdtemp(prefix=self._prefix))
        except OSError as e:
            raise ProvisionError(f"cannot create working directory: {e}") from e
        logger.info("Preparing files in %s...", self._path)
        return self

    def __exit__(self, *exc_info) -> None:
        if self._path is not None:
            shutil.rmtree(self._path, ignore_errors=True)
            logger.debug("Removed %s", self._path)
            self._path = None

    def provision(self, workloads: list[Workload]) -> dict[str, Path]:
        """Write each workload's source to ``task.<ext>``.

        Returns a mapping from language name to source path. Any write
        failure aborts the whole set.
        """
        paths: dict[str, Path] = {}
        for workload in workloads:
            path = self.path / workload.filename
            if path.exists():
                raise ProvisionError(f"{workload.name}: {path.name} already provisioned")
            try:
                path.write_text(workload.source)
            except OSError as e:
                raise ProvisionError(f"{workload.name}: cannot write {path}: {e}") from e
            paths[workload.name] = path
        return paths
