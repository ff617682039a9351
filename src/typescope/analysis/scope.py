"""Nesting context for one depth-first walk of a file's syntax tree."""

from __future__ import annotations

from typing import Optional

from ..scanning.syntax import TypeKind
from .builder import FileOverviewBuilder, FunctionBuilder, TypeBuilder


class ScopeStack:
    """Tracks the innermost enclosing type and the active function.

    Types nest, so they are kept on a stack of names. Functions use a single
    slot: entering a nested function replaces the outer one, and exiting
    clears the slot.

    The stack stores names and resolves them through the file builder on
    every query. Because the per-file namespace is flat, a nested type that
    reuses an enclosing type's name replaces the enclosing entry, and the
    enclosing scope keeps writing into the replacement after the nested
    declaration closes.
    """

    def __init__(self, file_builder: FileOverviewBuilder):
        self._file = file_builder
        self._types: list[str] = []
        self._function: Optional[FunctionBuilder] = None

    @property
    def depth(self) -> int:
        return len(self._types)

    def enter_type(self, name: str, kind: TypeKind) -> TypeBuilder:
        builder = self._file.declare_type(name, kind)
        self._types.append(name)
        return builder

    def exit_type(self) -> str:
        if not self._types:
            raise RuntimeError("exit_type() called without a matching enter_type()")
        return self._types.pop()

    def enter_function(self, function: FunctionBuilder) -> None:
        self._function = function

    def exit_function(self) -> None:
        self._function = None

    def current_type_name(self) -> Optional[str]:
        return self._types[-1] if self._types else None

    def current_type(self) -> Optional[TypeBuilder]:
        name = self.current_type_name()
        if name is None:
            return None
        return self._file.types.get(name)

    def current_function(self) -> Optional[FunctionBuilder]:
        return self._function
