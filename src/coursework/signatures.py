from __future__ import annotations
from typing import Iterable, List, Optional, Set

import libcst as cst


class SolutionParseError(Exception):
    """Solution source could not be parsed."""


class _SymbolCollector(cst.CSTVisitor):
    """Collect top-level defs/classes, plus methods as `Class.method`."""

    def __init__(self) -> None:
        self.names: Set[str] = set()
        self._class: Optional[cst.ClassDef] = None
        self._depth = 0  # function nesting

    def visit_ClassDef(self, node: cst.ClassDef) -> Optional[bool]:
        if self._class is not None or self._depth:
            return False  # nested classes are not part of the surface
        self._class = node
        self.names.add(node.name.value)
        return True

    def leave_ClassDef(self, original_node: cst.ClassDef) -> None:
        if self._class is original_node:
            self._class = None

    def visit_FunctionDef(self, node: cst.FunctionDef) -> Optional[bool]:
        if self._depth == 0:
            name = node.name.value
            self.names.add(f"{self._class.name.value}.{name}" if self._class else name)
        self._depth += 1
        return True

    def leave_FunctionDef(self, original_node: cst.FunctionDef) -> None:
        self._depth -= 1


def _parse(code: str) -> cst.Module:
    try:
        return cst.parse_module(code)
    except cst.ParserSyntaxError as e:
        raise SolutionParseError(f"Cannot parse solution: {e.message} (line {e.raw_line})") from e


def defined_symbols(code: str) -> Set[str]:
    col = _SymbolCollector()
    _parse(code).visit(col)
    return col.names


def missing_symbols(code: str, required: Iterable[str]) -> List[str]:
    have = defined_symbols(code)
    return [r for r in required if r not in have]
