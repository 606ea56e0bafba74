"""End-to-end seed generation.

Architecture:
1. Validate the run configuration
2. Probe every external tool the selected workloads need
3. Write workload sources into a fresh working directory
4. Compile the compiled languages
5. Run and time every artifact (queued or parallel)
6. BLAKE2b the serialized timings and truncate to the requested width
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum

from ptrsg import __version__
from ptrsg.build import build_artifacts
from ptrsg.exceptions import ConfigError, ExecutionError
from ptrsg.extractor import MAX_BITS, hash_buffer, serialize_timings, truncate_digest
from ptrsg.preflight import check_tools
from ptrsg.provision import Workspace
from ptrsg.scheduler import RunSpec, execute
from ptrsg.workloads import CHAOS_LEVELS, required_probes, select_workloads

logger = logging.getLogger("ptrsg")


class Verbosity(IntEnum):
    NONE = 0
    LITE = 1
    HEAVY = 2

    @classmethod
    def parse(cls, value: str) -> Verbosity:
        try:
            return cls[value.upper()]
        except KeyError:
            raise ConfigError(f"invalid verbosity {value!r}") from None


@dataclass(frozen=True)
class RunConfig:
    """Options for one seed generation run."""

    bits: int = MAX_BITS
    chaos: str = "high"
    queue: bool = False
    verbosity: Verbosity = Verbosity.NONE

    def __post_init__(self) -> None:
        if isinstance(self.bits, bool) or not isinstance(self.bits, int):
            raise ConfigError(f"bits must be an integer, got {self.bits!r}")
        if not 1 <= self.bits <= MAX_BITS:
            raise ConfigError(f"bits must be 1-{MAX_BITS}, got {self.bits}")
        if self.chaos not in CHAOS_LEVELS:
            raise ConfigError(f"chaos must be low or high, got {self.chaos!r}")


@dataclass(frozen=True)
class SeedResult:
    """A generated seed and the measurements it was derived from."""

    bits: int
    value: int
    digest: bytes
    timings: dict[str, int] = field(default_factory=dict)


def generate_seed(config: RunConfig) -> SeedResult:
    """Run every stage and return the seed.

    Any stage failure propagates as a :class:`ptrsg.exceptions.PTRSGError`;
    no seed is produced from a partial set of timings.
    """
    stream = config.verbosity >= Verbosity.HEAVY
    workloads = select_workloads(config.chaos)
    check_tools(required_probes(workloads))
    logger.info("PTRSG %s", __version__)
    logger.info("Using chaos=%s, queue=%s", config.chaos, config.queue)

    with Workspace() as ws:
        sources = ws.provision(workloads)
        artifacts = build_artifacts(workloads, sources, stream=stream)
        specs = [RunSpec(w.name, tuple(w.command(artifacts[w.name]))) for w in workloads]
        table = execute(specs, queue=config.queue, stream=stream)

    timings = table.as_dict()
    missing = sorted({w.name for w in workloads} - set(timings))
    if missing:
        raise ExecutionError(f"no timing recorded for {', '.join(missing)}")

    digest = hash_buffer(serialize_timings(timings))
    logger.debug("Full Blake2b: %s", digest.hex())
    return SeedResult(
        bits=config.bits,
        value=truncate_digest(digest, config.bits),
        digest=digest,
        timings=timings,
    )
