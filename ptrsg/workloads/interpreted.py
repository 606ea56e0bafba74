"""Lua, Python and Node.js sorting workloads."""

from __future__ import annotations

import sys

from ptrsg.workloads.base import InterpretedWorkload, ToolProbe


class LuaWorkload(InterpretedWorkload):
    """Builds and sorts a Lua table of 100,000 strings."""

    name = "lua"
    description = "Lua table.sort over concatenated integers"
    extension = "lua"
    interpreter = "lua"
    probe = ToolProbe("lua", ("-v",))
    source = """local t = {}
for i = 1, 100000 do
    t[i] = tostring(i) .. i
end
table.sort(t)
"""


class PythonWorkload(InterpretedWorkload):
    """List comprehension plus ``list.sort``.

    Runs under the interpreter executing ptrsg itself, so the probe
    always targets a Python that is known to exist.
    """

    name = "python"
    description = "CPython list.sort over str(i) + str(i*i)"
    extension = "py"
    interpreter = sys.executable
    probe = ToolProbe(sys.executable, ("--version",))
    source = """lst = [str(i) + str(i*i) for i in range(100000)]
lst.sort()
"""


class NodeWorkload(InterpretedWorkload):
    name = "node"
    description = "V8 Array.prototype.sort over string concatenations"
    extension = "js"
    interpreter = "node"
    probe = ToolProbe("node", ("--version",))
    source = """let arr = Array.from({length: 100000}, (_, i) => '' + i + (i*i));
arr.sort();
"""
