import pytest

from nexuslink.analysis import detect_version_conflicts, generate_dependency_graph
from nexuslink.versioned_symbols import VersionedSymbolRegistry, VersionedSymbolType


def log_base10_v1(x):
    return int(x)


def log_base10_v2(x):
    return int(x * 2)


def calculate_v1(x):
    return x


def calculate_v2(x):
    return x * 2


def calculate_v2_1(x):
    return x * 2 + (x % 2)


def calculate_v3(x):
    return x * 2 + 1


@pytest.fixture
def diamond():
    registry = VersionedSymbolRegistry()
    registry.add_dependency("App", "LibMath1", "^1.0.0", False)
    registry.add_dependency("App", "LibStats", "^1.0.0", False)
    registry.add_dependency("LibMath1", "LibCore", "^1.0.0", False)
    registry.add_dependency("LibStats", "LibCore", "^2.0.0", False)
    registry.exported.add(
        "log_base10", "1.0.0", log_base10_v1, VersionedSymbolType.FUNCTION, "LibCore", 10
    )
    registry.exported.add(
        "log_base10", "2.0.0", log_base10_v2, VersionedSymbolType.FUNCTION, "LibCore", 10
    )
    return registry


@pytest.fixture
def integration():
    registry = VersionedSymbolRegistry()
    func = VersionedSymbolType.FUNCTION
    registry.exported.add("calculate", "1.0.0", calculate_v1, func, "math_lib_v1", 10)
    registry.exported.add("calculate", "2.0.0", calculate_v2, func, "math_lib_v2", 20)
    registry.exported.add(
        "calculate", "2.1.0", calculate_v2_1, func, "math_lib_v2_patch", 25
    )
    registry.exported.add("calculate", "3.0.0", calculate_v3, func, "math_lib_v3", 30)
    registry.add_dependency("app_v1", "math_lib_v1", "^1.0.0", False)
    registry.add_dependency("app_v2", "math_lib_v2", "^2.0.0", False)
    registry.add_dependency("app_v3", "math_lib_v3", "^3.0.0", False)
    registry.add_dependency("app_compatible", "math_lib_v2", ">=2.0.0", False)
    return registry


def test_diamond_conflict_details(diamond):
    details = detect_version_conflicts(diamond, "App")
    assert details == (
        "Symbol 'log_base10' has 2 versions: 1.0.0, 2.0.0 "
        "(provided by: LibCore@1.0.0, LibCore@2.0.0)"
    )


def test_diamond_dependency_graph(diamond):
    graph = generate_dependency_graph(diamond)
    assert graph == (
        "digraph DependencyGraph {\n"
        "  rankdir=LR;\n"
        "  node [shape=box, style=filled, fillcolor=lightblue];\n\n"
        "  // Component nodes\n"
        '  "App" [label="App"];\n'
        '  "LibMath1" [label="LibMath1"];\n'
        '  "LibStats" [label="LibStats"];\n'
        '  "LibCore" [label="LibCore"];\n'
        "\n  // Dependency edges\n"
        '  "App" -> "LibMath1" [label="^1.0.0"];\n'
        '  "App" -> "LibStats" [label="^1.0.0"];\n'
        '  "LibMath1" -> "LibCore" [label="^1.0.0"];\n'
        '  "LibStats" -> "LibCore" [label="^2.0.0"];\n'
        "}\n"
    )


def test_integration_conflicts_after_diamond_edges(integration):
    integration.add_dependency("app_diamond", "lib_a", "^1.0.0", False)
    integration.add_dependency("app_diamond", "lib_b", "^1.0.0", False)
    integration.add_dependency("lib_a", "math_lib_v1", "^1.0.0", False)
    integration.add_dependency("lib_b", "math_lib_v2", "^2.0.0", False)
    details = detect_version_conflicts(integration, "app_diamond")
    assert details == (
        "Symbol 'calculate' has 4 versions: 1.0.0, 2.0.0, 2.1.0, 3.0.0 "
        "(provided by: math_lib_v1@1.0.0, math_lib_v2@2.0.0, "
        "math_lib_v2_patch@2.1.0, math_lib_v3@3.0.0)"
    )


def test_integration_graph_nodes_and_edges(integration):
    graph = generate_dependency_graph(integration)
    assert graph.startswith(
        "digraph DependencyGraph {\n  rankdir=LR;\n"
        "  node [shape=box, style=filled, fillcolor=lightblue];\n\n"
    )
    assert '  "math_lib_v2_patch" [label="math_lib_v2_patch"];\n' in graph
    assert '  "app_compatible" -> "math_lib_v2" [label=">=2.0.0"];\n' in graph
    node_lines = [line for line in graph.splitlines() if "[label=" in line and "->" not in line]
    assert len(node_lines) == 8
    assert graph.endswith("}\n")


def test_no_conflicts_returns_none():
    registry = VersionedSymbolRegistry()
    registry.exported.add("f", "1.0.0", 1, VersionedSymbolType.FUNCTION, "a", 0)
    registry.exported.add("g", "2.0.0", 2, VersionedSymbolType.FUNCTION, "b", 0)
    assert detect_version_conflicts(registry, "a") is None


def test_same_version_twice_is_not_a_conflict():
    registry = VersionedSymbolRegistry()
    registry.exported.add("f", "1.0.0", 1, VersionedSymbolType.FUNCTION, "a", 0)
    registry.exported.add("f", "1.0.0", 2, VersionedSymbolType.FUNCTION, "b", 0)
    assert detect_version_conflicts(registry) is None


def test_repeated_versions_listed_once_but_all_providers_shown():
    registry = VersionedSymbolRegistry()
    registry.exported.add("f", "1.0.0", 1, VersionedSymbolType.FUNCTION, "a", 0)
    registry.exported.add("f", "2.0.0", 2, VersionedSymbolType.FUNCTION, "b", 0)
    registry.exported.add("f", "1.0.0", 3, VersionedSymbolType.FUNCTION, "c", 0)
    assert detect_version_conflicts(registry) == (
        "Symbol 'f' has 2 versions: 1.0.0, 2.0.0 (provided by: a@1.0.0, b@2.0.0, c@1.0.0)"
    )


def test_multiple_conflicts_one_line_each():
    registry = VersionedSymbolRegistry()
    for name in ("f", "g"):
        registry.exported.add(name, "1.0.0", 1, VersionedSymbolType.FUNCTION, "a", 0)
        registry.exported.add(name, "2.0.0", 2, VersionedSymbolType.FUNCTION, "b", 0)
    lines = detect_version_conflicts(registry).split("\n")
    assert lines == [
        "Symbol 'f' has 2 versions: 1.0.0, 2.0.0 (provided by: a@1.0.0, b@2.0.0)",
        "Symbol 'g' has 2 versions: 1.0.0, 2.0.0 (provided by: a@1.0.0, b@2.0.0)",
    ]


def test_report_is_capped_below_limit():
    registry = VersionedSymbolRegistry()
    for index in range(40):
        name = f"symbol_number_{index:02d}"
        registry.exported.add(name, "1.0.0", index, VersionedSymbolType.FUNCTION, "a", 0)
        registry.exported.add(name, "2.0.0", -index, VersionedSymbolType.FUNCTION, "b", 0)
    details = detect_version_conflicts(registry)
    lines = details.split("\n")
    assert len(details) < 1024
    assert 0 < len(lines) < 40
    assert lines[0].startswith("Symbol 'symbol_number_00' has 2 versions")


def test_optional_edge_label():
    registry = VersionedSymbolRegistry()
    registry.add_dependency("app", "plugin", None, True)
    graph = generate_dependency_graph(registry)
    assert '  "app" -> "plugin" [label="*, optional"];\n' in graph


def test_empty_registry_graph():
    graph = generate_dependency_graph(VersionedSymbolRegistry())
    assert graph == (
        "digraph DependencyGraph {\n"
        "  rankdir=LR;\n"
        "  node [shape=box, style=filled, fillcolor=lightblue];\n\n"
        "  // Component nodes\n"
        "\n  // Dependency edges\n"
        "}\n"
    )


def test_exported_only_component_appears_after_dependency_components():
    registry = VersionedSymbolRegistry()
    registry.add_dependency("x", "y")
    registry.exported.add("s", "1.0.0", 0, VersionedSymbolType.VARIABLE, "z", 0)
    registry.exported.add("t", "1.0.0", 0, VersionedSymbolType.VARIABLE, "y", 0)
    nodes = [
        line
        for line in generate_dependency_graph(registry).splitlines()
        if "[label=" in line and "->" not in line
    ]
    assert nodes == [
        '  "x" [label="x"];',
        '  "y" [label="y"];',
        '  "z" [label="z"];',
    ]