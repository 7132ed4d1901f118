"""Utility helpers for working with schema files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from schemadex.errors import DirectoryUnreadable, ReadFailure


@dataclass(frozen=True, slots=True)
class SchemaFileName:
    """A schema file name split into resource and version token.

    ``Chassis.json`` has no token (the default document);
    ``Chassis.v1_2_0.json`` carries the token ``v1_2_0``.
    """

    resource: str
    version_token: Optional[str]

    @property
    def is_default(self) -> bool:
        return self.version_token is None


def split_schema_filename(filename: str) -> SchemaFileName:
    segments = filename.split(".")
    if len(segments) < 3:
        return SchemaFileName(resource=segments[0], version_token=None)
    return SchemaFileName(resource=segments[0], version_token=".".join(segments[1:-1]))


def iter_schema_files(directory: Path) -> Iterator[Path]:
    """Yield regular files directly inside ``directory`` in name order.

    Hidden files are skipped. Raises :class:`DirectoryUnreadable` when the
    directory cannot be listed.
    """
    directory = Path(directory)
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        raise DirectoryUnreadable(directory, exc.strerror or str(exc)) from exc

    for entry in entries:
        if entry.name.startswith("."):
            continue
        if entry.is_file():
            yield entry


def read_document(path: Path) -> str:
    """Read a schema document as UTF-8 text."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadFailure(path, str(exc)) from exc
