# nexuslink

`nexuslink` keeps track of the components in a modular application. It records what each component needs and what it provides. It also works out which implementation of a symbol a component should get, including in the diamond case, where two libraries depend on different versions of one shared library.

The package has no runtime dependencies.

## Modules

### `nexuslink.jsonfmt`

A small JSON reader and writer that works on plain Python values (`None`, `bool`, numbers, `str`, `list`, `dict`).

- `parse(text)` and `parse_file(path)` read a document. Malformed input raises `JsonParseError`, a `ValueError` that carries the failing `position`. Parsed numbers are always floats. When a key is repeated within an object, its first occurrence wins.
- `to_string(value, pretty=False)` and `write_file(value, path, pretty=False)` write a document.
  - With `pretty`, nested containers are indented by two spaces.
  - Whole numbers within the 32-bit integer range are written without a fraction. Other numbers use `%g`.
  - Object keys are written without escaping.
- `get_string`, `get_number` and `get_bool` return the member of an object when it has the expected type. Otherwise they return the given default.

### `nexuslink.semver`

- `parse(version_str)` turns `MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]`, `*` or `latest` into a frozen `SemVer`. It raises `SemVerError` when the major or minor part is missing.
- `compare(a, b)` returns -1, 0 or 1.
  - A wildcard orders below every concrete version.
  - A pre-release orders below the matching release.
  - Two pre-releases are compared as plain strings.
  - Build metadata is ignored.
- `satisfies(version, constraint)` accepts these constraints:
  - an exact version, or one written with `=`
  - `>`, `>=`, `<` and `<=`
  - `^` (same major)
  - `~` (same major and minor)
  - `*` and `latest`

  Input that cannot be parsed never matches.

### `nexuslink.symbols`

`SymbolRegistry` holds three `SymbolTable`s: `global_`, `imported` and `exported`.

- `resolve(name)` searches exported, then imported, then global. It raises the found symbol's `ref_count` and returns its address, or `None` if the name is not found.
- `lookup_with_type(name, expected_type, using_component)` does the same lookup, but only accepts a symbol of the expected `SymbolType`. It records the use in `usage`.
- `context_aware_resolve(name, context, using_component)` prints the context and then resolves as usual.
- `dependency_graph()` returns a DOT graph. `write_dependency_graph(path)` writes that graph to a file.

`SymbolTable` offers `add`, `find`, `remove`, `update_address`, `copy_symbols`, `component_symbols` and `format_stats`.

### `nexuslink.metadata`

`ComponentMetadata` is a dataclass with these fields:

- `id`, `version` and `description`
- `dependencies`, a list of `Dependency`
- `exported_symbols` and `imported_symbols`
- `memory_footprint` and `avg_load_time_ms`
- the usage figures `usage_count` and `last_used`

It has these methods:

- `track_usage` and `recently_used(seconds)`.
- `add_dependency`, `add_exported_symbol` and `add_imported_symbol`.
- `to_json()` and `save(path)`, which write indented JSON, usage figures included.
- `missing_dependency(available)` and `check_dependencies(available)`. They look for required dependencies among the given components. A versioned dependency needs an exactly equal version string; it is not matched as a semantic-version range.

The module also has two functions:

- `load_metadata(path)` reads a file and raises `MetadataError` if the file cannot be read or parsed. A loaded component always starts with zero usage.
- `generate_metadata_template(component_id, path)` writes a starter file and returns its content.

### `nexuslink.versioned_symbols`

`VersionedSymbolRegistry` holds three `VersionedSymbolTable`s (`global_`, `imported`, `exported`) and a list of `ComponentDependency`.

- `add_dependency(component_id, depends_on_id, version_constraint=None, optional=False)` records a dependency. A missing constraint is stored as `*`.
- `dependencies_of`, `is_direct_dependency` and `version_constraint` query the recorded dependencies.
- `resolve(name, version_constraint=None, requesting_component="")` picks among exported symbols that meet the constraint.
  - A symbol from a direct dependency of the requester gets a +1000 priority boost.
  - Such a symbol must also meet that dependency's own constraint.
  - The highest priority wins, and on a tie the earlier symbol wins.
  - The result is recorded in `imported` for the requester.
  - When no exported symbol matches, the global table is searched.
- `resolve_typed(...)` also checks the `VersionedSymbolType`. It returns `None` on a mismatch.

`resolve` and `resolve_typed` print a line to standard output that describes each resolution or failure.

### `nexuslink.analysis`

- `detect_version_conflicts(registry, component_id=None)` returns one line for each exported symbol that is present in more than one version, or `None` if there are no conflicts. Lines that would push the report to 1024 characters are left out.
- `generate_dependency_graph(registry)` renders the components and the declared dependencies in DOT format.

## Example: resolving a diamond dependency

```python
from nexuslink.versioned_symbols import VersionedSymbolRegistry, VersionedSymbolType
from nexuslink.analysis import detect_version_conflicts, generate_dependency_graph

def log_v1(x):
    return int(x)

def log_v2(x):
    return int(x * 2)

registry = VersionedSymbolRegistry()
registry.add_dependency("App", "LibMath1", "^1.0.0", False)
registry.add_dependency("App", "LibStats", "^1.0.0", False)
registry.add_dependency("LibMath1", "LibCore", "^1.0.0", False)
registry.add_dependency("LibStats", "LibCore", "^2.0.0", False)

registry.exported.add("log_base10", "1.0.0", log_v1, VersionedSymbolType.FUNCTION, "LibCore", 10)
registry.exported.add("log_base10", "2.0.0", log_v2, VersionedSymbolType.FUNCTION, "LibCore", 10)

print(registry.resolve("log_base10", None, "LibMath1")(10.0))  # 10
print(registry.resolve("log_base10", None, "LibStats")(10.0))  # 20

print(detect_version_conflicts(registry, "App"))
print(generate_dependency_graph(registry))
```

## Example: component metadata

```python
from nexuslink.metadata import ComponentMetadata, load_metadata

meta = ComponentMetadata(id="core", version="1.0.0", description="Core library")
meta.add_exported_symbol("core_init")
meta.add_dependency("logger", "1.0.0", False)
meta.save("core.json")

loaded = load_metadata("core.json")
print(loaded.exported_symbols)  # ['core_init']
```

## What it does not do

The package only keeps records. It does the following, and nothing more:

- A symbol's address is whatever Python object you register, such as a function.
- Symbols must be registered by hand.
- Resolving a symbol returns its registered object.

The package does not provide:

- loading or unloading of shared libraries
- lazy loading of functions
- a command-line tool

## Running the tests

```
pip install -e .[test]
pytest
```