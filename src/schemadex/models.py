"""Core schemadex data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from schemadex.errors import NoDefaultVersion
from schemadex.version import Version


@dataclass(slots=True)
class ModelVersion:
    """One document of a resource; ``name is None`` marks the unversioned default."""

    name: Optional[Version]
    path: Path

    @property
    def is_default(self) -> bool:
        return self.name is None


@dataclass(slots=True)
class Model:
    """All documents indexed for one resource."""

    resource: str
    versions: List[ModelVersion] = field(default_factory=list)

    def named_versions(self) -> List[ModelVersion]:
        return [entry for entry in self.versions if entry.name is not None]

    def find_default(self) -> ModelVersion:
        """Return the unversioned document.

        When a directory produced several unversioned entries the last one
        added wins.
        """
        for entry in reversed(self.versions):
            if entry.name is None:
                return entry
        raise NoDefaultVersion(self.resource)

    def find_latest(self) -> ModelVersion:
        """Return the greatest named version, falling back to the default.

        Among entries carrying an identical version number the first one added
        wins.
        """
        named = self.named_versions()
        if not named:
            return self.find_default()
        return max(named, key=lambda entry: entry.name)

    def find_specific(self, version: str) -> Optional[ModelVersion]:
        """Exact match of ``version`` against canonical version strings."""
        for entry in self.versions:
            if entry.name is not None and str(entry.name) == version:
                return entry
        return None

    def version_list(self) -> List[str]:
        """Canonical version strings, latest first."""
        names = sorted({entry.name for entry in self.named_versions()}, reverse=True)
        return [str(name) for name in names]


@dataclass(slots=True)
class SchemaReference:
    """A position in the navigation history."""

    link: str
    resource: str
    version: str = ""
    fragment: str = ""

    @classmethod
    def from_resource(cls, resource: str, link_template: str) -> "SchemaReference":
        return cls(link=link_template.format(resource=resource), resource=resource)


@dataclass(slots=True)
class SearchValueResult:
    name: str
    content: str


@dataclass(slots=True)
class SearchPropertyResult:
    """A property hit; ``value`` is ``None`` when only the property name matched."""

    name: str
    value: Optional[SearchValueResult] = None


@dataclass(slots=True)
class SearchResourceResult:
    name: str
    model: str
    properties: List[SearchPropertyResult] = field(default_factory=list)
