"""Version conflict reports and DOT dependency graphs for a versioned registry."""

from __future__ import annotations

from nexuslink.versioned_symbols import VersionedSymbolRegistry

__all__ = ["detect_version_conflicts", "generate_dependency_graph"]

_REPORT_LIMIT = 1024
_HEADER_LIMIT = 511
_PIECE_LIMIT = 127

_GRAPH_HEADER = (
    "digraph DependencyGraph {\n"
    "  rankdir=LR;\n"
    "  node [shape=box, style=filled, fillcolor=lightblue];\n\n"
)


def _describe_conflict(name: str, symbols: list, versions: list[str]) -> str:
    header = f"Symbol '{name}' has {len(versions)} versions: "[:_HEADER_LIMIT]
    listed = ", ".join(version[:_PIECE_LIMIT] for version in versions)
    providers = ", ".join(
        f"{symbol.component_id}@{symbol.version}"[:_PIECE_LIMIT] for symbol in symbols
    )
    return f"{header}{listed} (provided by: {providers})"


def detect_version_conflicts(
    registry: VersionedSymbolRegistry, component_id: str | None = None
) -> str | None:
    """Report exported symbols that exist in more than one version.

    Returns ``None`` when there is no conflict; otherwise one line per
    conflicting symbol. Lines that would push the report to 1024 characters
    or more are left out. ``component_id`` is accepted for context only.
    """
    del component_id
    lines: list[str] = []
    length = 0
    found = False

    for name in dict.fromkeys(symbol.name for symbol in registry.exported):
        symbols = registry.exported.find_all(name)
        if len(symbols) < 2:
            continue
        versions = list(dict.fromkeys(symbol.version for symbol in symbols))
        if len(versions) < 2:
            continue
        found = True
        description = _describe_conflict(name, symbols, versions)
        if length + len(description) + 2 < _REPORT_LIMIT:
            if lines:
                length += 1
            lines.append(description)
            length += len(description)

    return "\n".join(lines) if found else None


def generate_dependency_graph(registry: VersionedSymbolRegistry) -> str:
    """Render components and their declared dependencies as a DOT graph."""
    components = dict.fromkeys(
        component
        for dep in registry.dependencies
        for component in (dep.from_id, dep.to_id)
    )
    components.update(dict.fromkeys(symbol.component_id for symbol in registry.exported))

    parts = [_GRAPH_HEADER, "  // Component nodes\n"]
    parts.extend(f'  "{component}" [label="{component}"];\n' for component in components)
    parts.append("\n  // Dependency edges\n")
    parts.extend(
        f'  "{dep.from_id}" -> "{dep.to_id}" '
        f'[label="{dep.version_req}{", optional" if dep.optional else ""}"];\n'
        for dep in registry.dependencies
    )
    parts.append("}\n")
    return "".join(parts)