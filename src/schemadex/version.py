"""Semantic version triples used to name schema documents."""

from __future__ import annotations

import re
from dataclasses import dataclass

from schemadex.errors import InvalidVersion

_SEPARATORS = re.compile(r"[._]")
_NUMBER = re.compile(r"[0-9]+")
_COMPONENT_MAX = 255


def _parse_component(text: str, component: str, label: str) -> int:
    if not _NUMBER.fullmatch(component):
        raise InvalidVersion(text, f"{label} component {component!r} is not a number")
    value = int(component)
    if value > _COMPONENT_MAX:
        raise InvalidVersion(text, f"{label} component {value} exceeds {_COMPONENT_MAX}")
    return value


@dataclass(frozen=True, order=True, slots=True)
class Version:
    """A ``(major, minor, patch)`` triple ordered component by component.

    The canonical text form is ``v<major>.<minor>.<patch>``; :meth:`parse`
    also accepts the ``v1_2_0`` spelling used in schema file names.
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for label, value in (("major", self.major), ("minor", self.minor), ("patch", self.patch)):
            if not 0 <= value <= _COMPONENT_MAX:
                raise InvalidVersion(
                    f"{self.major}.{self.minor}.{self.patch}",
                    f"{label} component {value} out of range",
                )

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse ``[v]MAJOR(.|_)MINOR(.|_)PATCH``; trailing components are ignored."""
        body = text[1:] if text.startswith("v") else text
        parts = _SEPARATORS.split(body)
        if len(parts) < 3:
            raise InvalidVersion(text, "expected major, minor and patch components")
        major, minor, patch = (
            _parse_component(text, part, label)
            for part, label in zip(parts[:3], ("major", "minor", "patch"))
        )
        return cls(major, minor, patch)

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}.{self.patch}"


def parse_version(text: str) -> Version:
    return Version.parse(text)


def compare_versions(a: Version, b: Version) -> int:
    """Return -1, 0 or 1 as ``a`` sorts before, equal to or after ``b``."""
    return (a > b) - (a < b)


def to_canonical_string(version: Version) -> str:
    return str(version)
