"""Go, C++ and Rust sorting workloads.

Each one is compiled into the run's working directory with optimisation
disabled, then executed directly.
"""

from __future__ import annotations

from pathlib import Path

from ptrsg.workloads.base import CompiledWorkload, ToolProbe


class GoWorkload(CompiledWorkload):
    name = "go"
    description = "Go sort.Strings over strconv-built strings"
    extension = "go"
    probe = ToolProbe("go", ("version",))
    source = """package main
import (
    "sort"
    "strconv"
)
func main() {
    s := make([]string, 100000)
    for i := 0; i < 100000; i++ {
        s[i] = strconv.Itoa(i) + strconv.Itoa(i*i)
    }
    sort.Strings(s)
}
"""

    def compile_command(self, source_path: Path, executable: Path) -> list[str]:
        return ["go", "build", "-o", str(executable), str(source_path)]


class CppWorkload(CompiledWorkload):
    """std::sort over a vector filled through ostringstream."""

    name = "cpp"
    description = "C++ std::sort over ostringstream-built strings"
    extension = "cpp"
    probe = ToolProbe("g++", ("--version",))
    source = """#include <iostream>
#include <vector>
#include <string>
#include <algorithm>
#include <sstream>
int main() {
    std::vector<std::string> v;
    v.reserve(100000);
    for (int i = 0; i < 100000; ++i) {
        std::ostringstream oss;
        oss << i << i*i;
        v.push_back(oss.str());
    }
    std::sort(v.begin(), v.end());
    return 0;
}
"""

    def compile_command(self, source_path: Path, executable: Path) -> list[str]:
        return ["g++", "-O0", str(source_path), "-o", str(executable)]


class RustWorkload(CompiledWorkload):
    name = "rust"
    description = "Rust Vec<String>::sort over format!-built strings"
    extension = "rs"
    probe = ToolProbe("rustc", ("--version",))
    # u64 keeps i * i from overflowing
    source = """fn main() {
    let mut v: Vec<String> = (0u64..100_000)
        .map(|i| format!("{}{}", i, i * i))
        .collect();
    v.sort();
}
"""

    def compile_command(self, source_path: Path, executable: Path) -> list[str]:
        return ["rustc", "-C", "opt-level=0", str(source_path), "-o", str(executable)]
