"""Semantic version parsing, ordering and constraint matching."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

__all__ = ["SemVerError", "SemVer", "parse", "compare", "satisfies"]

_WILDCARDS = frozenset({"*", "latest"})
_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_VERSION_START = frozenset("0123456789*")


class SemVerError(ValueError):
    """Raised when a string is not a version this module understands."""


@dataclass(frozen=True)
class SemVer:
    """A parsed semantic version, or a wildcard matching any version."""

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: str | None = None
    build: str | None = None
    is_wildcard: bool = False

    def __str__(self) -> str:
        if self.is_wildcard:
            return "*"
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is not None:
            text += f"-{self.prerelease}"
        if self.build is not None:
            text += f"+{self.build}"
        return text


def _integer(text: str, pos: int) -> tuple[int | None, int]:
    match = _INTEGER.match(text, pos)
    if match is None:
        return None, pos
    return int(match.group(1)), match.end()


def _component(text: str, pos: int, label: str) -> tuple[int, int]:
    value, end = _integer(text, pos)
    if value is None or not text.startswith(".", end):
        raise SemVerError(f"invalid {label} version in {text!r}")
    return value, end + 1


def parse(version_str: str) -> SemVer:
    """Parse ``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]``, ``*`` or ``latest``.

    Text after the patch number that starts neither a pre-release nor build
    metadata is ignored.
    """
    if not isinstance(version_str, str):
        raise TypeError("version must be a string")
    if version_str in _WILDCARDS:
        return SemVer(is_wildcard=True)

    major, pos = _component(version_str, 0, "major")
    minor, pos = _component(version_str, pos, "minor")
    patch, pos = _integer(version_str, pos)

    prerelease: str | None = None
    build: str | None = None
    rest = version_str[pos:]
    if rest.startswith("-"):
        prerelease, plus, after = rest[1:].partition("+")
        rest = plus + after
    if rest.startswith("+"):
        build = rest[1:]

    return SemVer(major, minor, patch or 0, prerelease, build)


def compare(a: SemVer, b: SemVer) -> int:
    """Return -1, 0 or 1 as ``a`` orders before, with or after ``b``.

    A wildcard orders below every concrete version; build metadata is ignored.
    """
    if a.is_wildcard:
        return 0 if b.is_wildcard else -1
    if b.is_wildcard:
        return 1

    for left, right in ((a.major, b.major), (a.minor, b.minor), (a.patch, b.patch)):
        if left != right:
            return 1 if left > right else -1

    if a.prerelease is not None and b.prerelease is None:
        return -1
    if a.prerelease is None and b.prerelease is not None:
        return 1
    if a.prerelease is not None and b.prerelease is not None:
        return (a.prerelease > b.prerelease) - (a.prerelease < b.prerelease)
    return 0


_Check = Callable[[SemVer, SemVer, int], bool]

_CHECKS: dict[str, _Check] = {
    "": lambda ver, cons, cmp: cmp == 0,
    "=": lambda ver, cons, cmp: cmp == 0,
    ">": lambda ver, cons, cmp: cmp > 0,
    ">=": lambda ver, cons, cmp: cmp >= 0,
    "<": lambda ver, cons, cmp: cmp < 0,
    "<=": lambda ver, cons, cmp: cmp <= 0,
    "^": lambda ver, cons, cmp: ver.major == cons.major and cmp >= 0,
    "~": lambda ver, cons, cmp: (
        ver.major == cons.major and ver.minor == cons.minor and cmp >= 0
    ),
}


def satisfies(version: str, constraint: str) -> bool:
    """Tell whether ``version`` meets ``constraint``.

    Constraints are an exact version or one prefixed by ``=``, ``>``, ``>=``,
    ``<``, ``<=``, ``^`` (same major) or ``~`` (same major and minor), or
    ``*``/``latest`` for any version. Unparsable input never matches.
    """
    try:
        ver = parse(version)
    except SemVerError:
        return False

    if constraint in _WILDCARDS:
        return True

    start = next(
        (index for index, char in enumerate(constraint) if char in _VERSION_START),
        len(constraint),
    )
    operator = constraint[:start][:2]

    try:
        cons = parse(constraint[start:])
    except SemVerError:
        return False

    check = _CHECKS.get(operator)
    if check is None:
        return False
    return check(ver, cons, compare(ver, cons))