"""Error and diagnostic taxonomy.

Fatal conditions are ``LayoutError`` subclasses and abort the call. Non-fatal
conditions are ``LayoutWarning`` instances collected into
``LayoutResult.diagnostics``; they are never raised.
"""

from __future__ import annotations


class LayoutError(Exception):
    pass


class EmptyInputError(LayoutError):
    def __init__(self) -> None:
        super().__init__("cannot lay out an empty roadmap: no nodes supplied")


class DuplicateNodeError(LayoutError):
    def __init__(self, node_id: str) -> None:
        super().__init__(f"node id '{node_id}' appears more than once")
        self.node_id = node_id


class CyclicSpineError(LayoutError):
    def __init__(self, cycle: list[str]) -> None:
        path = " -> ".join([*cycle, cycle[0]]) if cycle else "?"
        super().__init__(f"spine edges form a cycle: {path}")
        self.cycle = cycle


class ConfigurationError(LayoutError):
    pass


class ParseError(LayoutError):
    pass


class LayoutWarning(UserWarning):
    """Base class for non-fatal layout diagnostics."""

    def to_dict(self) -> dict[str, object]:
        return {"kind": type(self).__name__, "message": str(self)}


class DanglingEdgeWarning(LayoutWarning):
    def __init__(self, edge_id: str, missing: str) -> None:
        super().__init__(f"edge '{edge_id}' references missing node '{missing}'; skipped")
        self.edge_id = edge_id
        self.missing = missing


class OrphanRibWarning(LayoutWarning):
    def __init__(self, node_id: str) -> None:
        super().__init__(f"branch node '{node_id}' has no spine parent; placed at origin")
        self.node_id = node_id


class ResidualCollisionWarning(LayoutWarning):
    def __init__(self, pairs: list[tuple[str, str]], passes: int) -> None:
        super().__init__(f"{len(pairs)} overlapping node pair(s) remain after {passes} pass(es)")
        self.pairs = pairs
        self.passes = passes
