"""
Function definitions and the loop-pair index.
"""

from typing import Dict, List, Optional

from ..errors import StructuralError
from ..values import VarDefList
from .statement import Statement, StatementKind


def build_loop_pairs(stmts: List[Statement], name: str = "") -> Dict[int, int]:
    """
    Match LOOP / END_LOOP statements.

    Scans the statements once with a stack of open LOOP positions. Each
    END_LOOP closes the most recent open LOOP.

    Returns:
        Bidirectional mapping: loop position -> end position and
        end position -> loop position.

    Raises:
        StructuralError: on an END_LOOP without open LOOP, or a LOOP
            that is never closed.
    """
    pairs: Dict[int, int] = {}
    open_loops: List[int] = []
    for pos, stmt in enumerate(stmts):
        if stmt.kind == StatementKind.LOOP:
            open_loops.append(pos)
        elif stmt.kind == StatementKind.END_LOOP:
            if not open_loops:
                raise StructuralError(
                    f"Unpaired END_LOOP at statement {pos} in function '{name}'",
                    name, pos)
            start = open_loops.pop()
            pairs[start] = pos
            pairs[pos] = start
    if open_loops:
        pos = open_loops[-1]
        raise StructuralError(
            f"LOOP at statement {pos} in function '{name}' has no END_LOOP",
            name, pos)
    return pairs


class FunctionDefinition:
    """A named, ordered list of statements."""

    def __init__(self, name: str, args: Optional[VarDefList] = None,
                 stmts: Optional[List[Statement]] = None, note: str = ""):
        self.name = name
        self.args = args or VarDefList()
        self.stmts: List[Statement] = list(stmts or [])
        self.note = note
        self._loop_pairs: Optional[Dict[int, int]] = None

    def add_stmt(self, stmt: Statement) -> 'FunctionDefinition':
        self.stmts.append(stmt)
        self._loop_pairs = None
        return self

    @property
    def loop_pairs(self) -> Dict[int, int]:
        """Loop-pair index, built from the statements on first use."""
        if self._loop_pairs is None:
            self._loop_pairs = build_loop_pairs(self.stmts, self.name)
        return self._loop_pairs

    def validate(self):
        """Build the loop-pair index now so structural faults surface early."""
        _ = self.loop_pairs

    def __len__(self):
        return len(self.stmts)

    def __repr__(self):
        return f"FunctionDefinition({self.name!r}, {len(self.stmts)} statements)"
