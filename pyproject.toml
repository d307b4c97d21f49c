[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nexuslink"
version = "0.1.0"
description = "Component metadata, semantic versioning and version-aware symbol resolution for modular applications"
requires-python = ">=3.10"
dependencies = []
keywords = ["symbols", "semver", "dependencies", "components", "diamond-dependency", "registry", "json"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nexuslink"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
