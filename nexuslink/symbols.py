"""A three-tier symbol registry: global, imported and exported tables."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Any, Iterator

__all__ = ["SymbolType", "Symbol", "SymbolTable", "SymbolRegistry"]


class SymbolType(enum.Enum):
    """What kind of entity a symbol names."""

    FUNCTION = 0
    VARIABLE = 1
    TYPE = 2


@dataclass(eq=False)
class Symbol:
    """A named address provided by a component."""

    name: str
    address: Any
    type: SymbolType
    component_id: str
    ref_count: int = 0


class SymbolTable:
    """An ordered collection of symbols, looked up by name."""

    def __init__(self, initial_capacity: int = 64) -> None:
        if initial_capacity < 1:
            raise ValueError("initial capacity must be positive")
        self._symbols: list[Symbol] = []
        self.capacity = initial_capacity

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def add(
        self, name: str, address: Any, type: SymbolType, component_id: str
    ) -> Symbol:
        """Append a new symbol, even if one with this name exists already."""
        if len(self._symbols) >= self.capacity:
            self.capacity *= 2
        symbol = Symbol(name, address, type, component_id)
        self._symbols.append(symbol)
        return symbol

    def find(self, name: str) -> Symbol | None:
        """Return the first symbol with this name, or ``None``."""
        return next((symbol for symbol in self._symbols if symbol.name == name), None)

    def remove(self, name: str) -> bool:
        """Remove the first symbol with this name; the last symbol takes its place."""
        for index, symbol in enumerate(self._symbols):
            if symbol.name == name:
                last = self._symbols.pop()
                if index < len(self._symbols):
                    self._symbols[index] = last
                return True
        return False

    def update_address(self, name: str, new_address: Any) -> bool:
        """Point the first symbol with this name at a new address."""
        symbol = self.find(name)
        if symbol is None:
            return False
        symbol.address = new_address
        return True

    def copy_symbols(self, src: SymbolTable, component_filter: str | None = None) -> None:
        """Copy symbols from ``src``, optionally only those of one component.

        The reference count lands on the first symbol here with the copied name.
        """
        for symbol in list(src):
            if component_filter is not None and symbol.component_id != component_filter:
                continue
            self.add(symbol.name, symbol.address, symbol.type, symbol.component_id)
            target = self.find(symbol.name)
            if target is not None:
                target.ref_count = symbol.ref_count

    def component_symbols(self, component_id: str) -> list[Symbol]:
        """Return every symbol provided by one component, in table order."""
        return [symbol for symbol in self._symbols if symbol.component_id == component_id]

    def format_stats(self, table_name: str) -> str:
        """Describe the table: sizes, counts per type and the most used symbol."""
        counts = {kind: 0 for kind in SymbolType}
        for symbol in self._symbols:
            counts[symbol.type] += 1

        lines = [
            f"Symbol Table: {table_name}",
            f"  Total symbols: {len(self._symbols)}",
            f"  Capacity: {self.capacity}",
            f"  Functions: {counts[SymbolType.FUNCTION]}",
            f"  Variables: {counts[SymbolType.VARIABLE]}",
            f"  Types: {counts[SymbolType.TYPE]}",
        ]

        most_used: Symbol | None = None
        for symbol in self._symbols:
            if symbol.ref_count > (most_used.ref_count if most_used else 0):
                most_used = symbol
        if most_used is not None:
            lines.append(
                f"  Most referenced symbol: {most_used.name} "
                f"({most_used.ref_count} references)"
            )
        return "\n".join(lines) + "\n"


class SymbolRegistry:
    """Global, imported and exported symbol tables searched in priority order."""

    def __init__(self) -> None:
        self.global_ = SymbolTable(64)
        self.imported = SymbolTable(128)
        self.exported = SymbolTable(128)
        self.usage: list[tuple[str, str]] = []

    def _search_order(self) -> tuple[SymbolTable, SymbolTable, SymbolTable]:
        return (self.exported, self.imported, self.global_)

    def resolve(self, name: str) -> Any:
        """Return the address of ``name``, preferring exported over imported over global.

        The found symbol's reference count is raised; ``None`` means not found.
        """
        for table in self._search_order():
            symbol = table.find(name)
            if symbol is not None:
                symbol.ref_count += 1
                return symbol.address
        return None

    def track_usage(self, symbol_name: str, using_component: str) -> None:
        """Record and report that a component uses a symbol."""
        self.usage.append((using_component, symbol_name))
        print(
            f"[SYMBOL USAGE] Component '{using_component}' is using symbol '{symbol_name}'"
        )

    def lookup_with_type(
        self, name: str, expected_type: SymbolType, using_component: str
    ) -> Any:
        """Resolve ``name`` only where the first entry in a table has the expected type."""
        for table in self._search_order():
            symbol = table.find(name)
            if symbol is not None and symbol.type is expected_type:
                symbol.ref_count += 1
                self.track_usage(name, using_component)
                return symbol.address
        return None

    def context_aware_resolve(self, name: str, context: str, using_component: str) -> Any:
        """Report the resolution context, then resolve ``name`` as usual."""
        print(
            f"[CONTEXT RESOLUTION] Resolving '{name}' in context '{context}' "
            f"for component '{using_component}'"
        )
        return self.resolve(name)

    def dependency_graph(self) -> str:
        """Render components and import-to-export links as a DOT graph."""
        components = dict.fromkeys(
            symbol.component_id
            for table in (self.global_, self.imported, self.exported)
            for symbol in table
        )

        parts = [
            "digraph SymbolDependencies {\n",
            "  rankdir=LR;\n",
            "  node [shape=box, style=filled, fillcolor=lightblue];\n\n",
        ]
        parts.extend(f'  "{component}" [label="{component}"];\n' for component in components)
        parts.append("\n")
        for imported in self.imported:
            exported = self.exported.find(imported.name)
            if exported is not None:
                parts.append(
                    f'  "{imported.component_id}" -> "{exported.component_id}" '
                    f'[label="{imported.name}"];\n'
                )
        parts.append("}\n")
        return "".join(parts)

    def write_dependency_graph(self, output_file: str | os.PathLike[str]) -> None:
        """Write the DOT dependency graph to a file."""
        with open(output_file, "w", encoding="utf-8") as handle:
            handle.write(self.dependency_graph())
        print(f"Symbol dependency graph written to {os.fspath(output_file)}")