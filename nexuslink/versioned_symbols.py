"""Version-aware symbol tables and context-aware symbol resolution."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterator

from nexuslink import semver

__all__ = [
    "VersionedSymbolType",
    "VersionedSymbol",
    "ComponentDependency",
    "VersionedSymbolTable",
    "VersionedSymbolRegistry",
]

_DEFAULT_SYMBOL_VERSION = "1.0.0"
_ANY_VERSION = "*"
_DIRECT_DEPENDENCY_BOOST = 1000


class VersionedSymbolType(enum.Enum):
    """What kind of entity a versioned symbol names."""

    FUNCTION = 0
    VARIABLE = 1
    TYPE = 2
    CONSTANT = 3


@dataclass(eq=False)
class VersionedSymbol:
    """A named, versioned address provided by a component."""

    name: str
    version: str
    address: Any
    type: VersionedSymbolType
    component_id: str
    priority: int = 0
    ref_count: int = 0


@dataclass
class ComponentDependency:
    """One component's requirement on another."""

    from_id: str
    to_id: str
    version_req: str = _ANY_VERSION
    optional: bool = False


class VersionedSymbolTable:
    """An ordered collection of versioned symbols; names may repeat."""

    def __init__(self, initial_capacity: int = 64) -> None:
        if initial_capacity < 1:
            raise ValueError("initial capacity must be positive")
        self._symbols: list[VersionedSymbol] = []
        self.capacity = initial_capacity

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[VersionedSymbol]:
        return iter(self._symbols)

    def add(
        self,
        name: str,
        version: str | None,
        address: Any,
        type: VersionedSymbolType,
        component_id: str,
        priority: int = 0,
    ) -> VersionedSymbol:
        """Append a symbol; a missing version defaults to ``1.0.0``."""
        if len(self._symbols) >= self.capacity:
            self.capacity *= 2
        symbol = VersionedSymbol(
            name,
            version if version is not None else _DEFAULT_SYMBOL_VERSION,
            address,
            type,
            component_id,
            priority,
        )
        self._symbols.append(symbol)
        return symbol

    def find_all(self, name: str) -> list[VersionedSymbol]:
        """Return every symbol with this name, in table order."""
        return [symbol for symbol in self._symbols if symbol.name == name]


class VersionedSymbolRegistry:
    """Global, imported and exported tables plus component dependencies."""

    def __init__(self) -> None:
        self.global_ = VersionedSymbolTable(64)
        self.imported = VersionedSymbolTable(128)
        self.exported = VersionedSymbolTable(128)
        self.dependencies: list[ComponentDependency] = []

    def add_dependency(
        self,
        component_id: str,
        depends_on_id: str,
        version_constraint: str | None = None,
        optional: bool = False,
    ) -> ComponentDependency:
        """Record that one component depends on another; no constraint means ``*``."""
        dependency = ComponentDependency(
            component_id,
            depends_on_id,
            version_constraint if version_constraint is not None else _ANY_VERSION,
            optional,
        )
        self.dependencies.append(dependency)
        return dependency

    def dependencies_of(self, component_id: str) -> list[str]:
        """Return the ids a component depends on, in the order they were added."""
        return [dep.to_id for dep in self.dependencies if dep.from_id == component_id]

    def is_direct_dependency(self, component_id: str, potential_dependency: str) -> bool:
        """Tell whether ``component_id`` was declared to depend on ``potential_dependency``."""
        return self.version_constraint(component_id, potential_dependency) is not None

    def version_constraint(self, component_id: str, dependency_id: str) -> str | None:
        """Return the constraint of the first matching dependency, or ``None``."""
        return next(
            (
                dep.version_req
                for dep in self.dependencies
                if dep.from_id == component_id and dep.to_id == dependency_id
            ),
            None,
        )

    def _best_exported(
        self, name: str, version_constraint: str | None, requesting_component: str
    ) -> tuple[VersionedSymbol | None, int]:
        best: VersionedSymbol | None = None
        best_priority = -1
        for symbol in self.exported.find_all(name):
            if version_constraint is not None and not semver.satisfies(
                symbol.version, version_constraint
            ):
                continue
            effective = symbol.priority
            if self.is_direct_dependency(requesting_component, symbol.component_id):
                effective += _DIRECT_DEPENDENCY_BOOST
            specific = self.version_constraint(requesting_component, symbol.component_id)
            if specific is not None and not semver.satisfies(symbol.version, specific):
                continue
            if effective > best_priority:
                best, best_priority = symbol, effective
        return best, best_priority

    def _best_global(
        self, name: str, version_constraint: str | None
    ) -> tuple[VersionedSymbol | None, int]:
        best: VersionedSymbol | None = None
        best_priority = -1
        for symbol in self.global_.find_all(name):
            if version_constraint is not None and not semver.satisfies(
                symbol.version, version_constraint
            ):
                continue
            if symbol.priority > best_priority:
                best, best_priority = symbol, symbol.priority
        return best, best_priority

    def _record_import(
        self, name: str, symbol: VersionedSymbol, requesting_component: str
    ) -> None:
        already = any(
            sym.name == name and sym.component_id == requesting_component
            for sym in self.imported
        )
        if not already:
            self.imported.add(
                name, symbol.version, symbol.address, symbol.type, requesting_component, 0
            )

    def resolve(
        self,
        name: str,
        version_constraint: str | None = None,
        requesting_component: str = "",
    ) -> Any:
        """Resolve ``name`` for a component, honouring versions and dependencies.

        Exported symbols are preferred; among them a symbol provided by a direct
        dependency of the requester gets a large priority boost and must meet
        that dependency's constraint. Without an exported match the global table
        is searched. Returns the address, or ``None`` if nothing matches.
        """
        best, priority = self._best_exported(name, version_constraint, requesting_component)
        if best is not None:
            best.ref_count += 1
            self._record_import(name, best, requesting_component)
            print(
                f"Resolved '{name}' version '{best.version}' from component "
                f"'{best.component_id}' (priority: {priority})"
            )
            return best.address

        best, priority = self._best_global(name, version_constraint)
        if best is not None:
            best.ref_count += 1
            print(
                f"Resolved '{name}' version '{best.version}' from global table "
                f"(priority: {priority})"
            )
            return best.address

        shown = version_constraint if version_constraint is not None else "any"
        print(
            f"Failed to resolve symbol '{name}' with constraint '{shown}' "
            f"for component '{requesting_component}'"
        )
        return None

    def resolve_typed(
        self,
        name: str,
        version_constraint: str | None,
        expected_type: VersionedSymbolType,
        requesting_component: str,
    ) -> Any:
        """Resolve like :meth:`resolve`, returning ``None`` on a type mismatch."""
        address = self.resolve(name, version_constraint, requesting_component)
        if address is None:
            return None

        for table in (self.exported, self.global_):
            for symbol in table.find_all(name):
                if symbol.address == address:
                    if symbol.type is not expected_type:
                        print(
                            f"Type mismatch for symbol '{name}': expected "
                            f"{expected_type.value}, got {symbol.type.value}"
                        )
                        return None
                    return address
        return address