"""Component metadata, JSON, semantic versioning and version-aware symbol resolution."""

__version__ = "0.1.0"

__all__ = ["jsonfmt", "semver", "symbols", "metadata", "versioned_symbols", "analysis"]