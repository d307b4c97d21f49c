"""Component metadata: identity, dependencies, symbols and usage figures."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from typing import Any, Iterable

from nexuslink import jsonfmt

__all__ = [
    "MetadataError",
    "Dependency",
    "ComponentMetadata",
    "load_metadata",
    "generate_metadata_template",
]

_TEMPLATE_VERSION = "0.1.0"
_TEMPLATE_DESCRIPTION = "Auto-generated metadata template"


class MetadataError(Exception):
    """Raised when a metadata file cannot be read or parsed."""


@dataclass
class Dependency:
    """A component this one relies on, optionally pinned to a version."""

    id: str | None
    version: str | None = None
    optional: bool = False


@dataclass
class ComponentMetadata:
    """Everything known about one component."""

    id: str | None = None
    version: str | None = None
    description: str | None = None
    dependencies: list[Dependency] = field(default_factory=list)
    exported_symbols: list[str] = field(default_factory=list)
    imported_symbols: list[str] = field(default_factory=list)
    memory_footprint: int = 0
    avg_load_time_ms: float = 0.0
    last_used: int = 0
    usage_count: int = 0
    loaded: bool = False

    def track_usage(self) -> None:
        """Count one more use and stamp the current time."""
        self.usage_count += 1
        self.last_used = int(time.time())

    def recently_used(self, seconds_threshold: float) -> bool:
        """Tell whether the last use lies less than ``seconds_threshold`` ago."""
        return int(time.time()) - self.last_used < seconds_threshold

    def add_dependency(
        self, dep_id: str, dep_version: str | None = None, optional: bool = False
    ) -> Dependency:
        """Append a dependency and return it."""
        dependency = Dependency(dep_id, dep_version, optional)
        self.dependencies.append(dependency)
        return dependency

    def add_exported_symbol(self, symbol: str) -> None:
        """Record a symbol this component provides."""
        self.exported_symbols.append(symbol)

    def add_imported_symbol(self, symbol: str) -> None:
        """Record a symbol this component needs."""
        self.imported_symbols.append(symbol)

    def to_json(self) -> dict[str, Any]:
        """Return the metadata as a JSON-ready dictionary, usage figures included."""
        root: dict[str, Any] = {}
        if self.id is not None:
            root["id"] = self.id
        if self.version is not None:
            root["version"] = self.version
        if self.description is not None:
            root["description"] = self.description

        dependencies = []
        for dep in self.dependencies:
            entry: dict[str, Any] = {}
            if dep.id is not None:
                entry["id"] = dep.id
            if dep.version is not None:
                entry["version"] = dep.version
            entry["optional"] = dep.optional
            dependencies.append(entry)
        root["dependencies"] = dependencies

        root["exported_symbols"] = [s for s in self.exported_symbols if s is not None]
        root["imported_symbols"] = [s for s in self.imported_symbols if s is not None]
        root["memory_footprint"] = float(self.memory_footprint)
        root["avg_load_time_ms"] = float(self.avg_load_time_ms)
        root["usage_count"] = float(self.usage_count)
        root["last_used"] = float(self.last_used)
        return root

    def save(self, output_path: str | os.PathLike[str]) -> None:
        """Write the metadata to a file as indented JSON."""
        jsonfmt.write_file(self.to_json(), output_path, pretty=True)

    def missing_dependency(
        self, available: Iterable[ComponentMetadata | None]
    ) -> Dependency | None:
        """Return the first required dependency that ``available`` cannot meet.

        A dependency is met by a component with the same id whose version is
        equal to the requested one, or by any such component when either side
        has no version.
        """
        components = [comp for comp in available if comp is not None]
        for dep in self.dependencies:
            if dep.optional:
                continue
            if not any(_meets(comp, dep) for comp in components):
                return dep
        return None

    def check_dependencies(self, available: Iterable[ComponentMetadata | None]) -> bool:
        """Tell whether every required dependency is met by ``available``."""
        return self.missing_dependency(available) is None


def _meets(component: ComponentMetadata, dep: Dependency) -> bool:
    if component.id is None or dep.id is None or component.id != dep.id:
        return False
    if dep.version is not None and component.version is not None:
        return dep.version == component.version
    return True


def _symbol_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else "" for item in value]


def _dependency(entry: Any) -> Dependency:
    if not isinstance(entry, dict):
        return Dependency(None)
    return Dependency(
        jsonfmt.get_string(entry, "id"),
        jsonfmt.get_string(entry, "version"),
        jsonfmt.get_bool(entry, "optional", False),
    )


def load_metadata(metadata_path: str | os.PathLike[str]) -> ComponentMetadata:
    """Read component metadata from a JSON file.

    Usage figures in the file are ignored; a loaded component starts unused.
    """
    try:
        root = jsonfmt.parse_file(metadata_path)
    except (OSError, UnicodeDecodeError, jsonfmt.JsonParseError) as exc:
        raise MetadataError(
            f"Could not parse metadata file: {os.fspath(metadata_path)}"
        ) from exc

    metadata = ComponentMetadata(
        id=jsonfmt.get_string(root, "id"),
        version=jsonfmt.get_string(root, "version"),
        description=jsonfmt.get_string(root, "description"),
    )
    if isinstance(root, dict):
        dependencies = root.get("dependencies")
        if isinstance(dependencies, list):
            metadata.dependencies = [_dependency(entry) for entry in dependencies]
        metadata.exported_symbols = _symbol_list(root.get("exported_symbols"))
        metadata.imported_symbols = _symbol_list(root.get("imported_symbols"))
        footprint = root.get("memory_footprint")
        if isinstance(footprint, float):
            metadata.memory_footprint = int(footprint)
        load_time = root.get("avg_load_time_ms")
        if isinstance(load_time, float):
            metadata.avg_load_time_ms = load_time
    return metadata


def generate_metadata_template(
    component_id: str, output_path: str | os.PathLike[str]
) -> dict[str, Any]:
    """Write a starter metadata file for a component and return its content."""
    root: dict[str, Any] = {
        "id": component_id,
        "version": _TEMPLATE_VERSION,
        "description": _TEMPLATE_DESCRIPTION,
        "dependencies": [],
        "exported_symbols": [],
        "imported_symbols": [],
        "memory_footprint": 0.0,
        "avg_load_time_ms": 0.0,
    }
    jsonfmt.write_file(root, output_path, pretty=True)
    print(f"Generated metadata template at: {os.fspath(output_path)}")
    return root