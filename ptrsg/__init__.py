"""
ptrsg: Polyglot Timing Random Seed Generator.

Runs the same string-sorting workload under Lua, Python, Node.js, Go,
C++ and Rust, times every run at nanosecond resolution and hashes the
timings with BLAKE2b into a 1–512 bit seed.
"""

__version__ = "2.1.0"

from ptrsg.exceptions import PTRSGError
from ptrsg.extractor import extract_seed
from ptrsg.pipeline import RunConfig, SeedResult, Verbosity, generate_seed

__all__ = [
    "PTRSGError",
    "RunConfig",
    "SeedResult",
    "Verbosity",
    "extract_seed",
    "generate_seed",
    "__version__",
]
