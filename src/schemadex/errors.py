"""Exceptions raised by the schema registry, search and navigation layers."""

from __future__ import annotations

from pathlib import Path


class SchemadexError(Exception):
    """Base class for all schemadex failures."""


class InvalidVersion(SchemadexError, ValueError):
    """Version text does not follow ``[v]major(.|_)minor(.|_)patch``."""

    def __init__(self, text: str, reason: str = "") -> None:
        self.text = text
        message = f"Invalid version: {text!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class IndexingError(SchemadexError):
    """Indexing a schema directory failed; the registry was left untouched."""


class DirectoryUnreadable(IndexingError):
    def __init__(self, directory: Path, reason: str = "") -> None:
        self.directory = Path(directory)
        message = f"Cannot read schema directory: {self.directory}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidVersionToken(IndexingError):
    """A versioned schema file carries an unparsable version token."""

    def __init__(self, filename: str, token: str) -> None:
        self.filename = filename
        self.token = token
        super().__init__(f"Invalid version token {token!r} in schema file name: {filename}")


class LookupFailure(SchemadexError, LookupError):
    """A resource or one of its documents could not be found."""


class UnknownResource(LookupFailure):
    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"Unknown resource: {resource}")


class NoDefaultVersion(LookupFailure):
    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"Resource {resource} has no unversioned default document")


class LinkNotRecognized(SchemadexError, ValueError):
    def __init__(self, link: str, reason: str = "") -> None:
        self.link = link
        message = f"Link not recognized: {link}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidPattern(SchemadexError, ValueError):
    def __init__(self, keyword: str, reason: str = "") -> None:
        self.keyword = keyword
        message = f"Invalid search pattern: {keyword!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MalformedDocument(SchemadexError):
    def __init__(self, resource: str, path: Path | None = None, reason: str = "") -> None:
        self.resource = resource
        self.path = path
        message = f"Malformed schema document for {resource}"
        if path is not None:
            message = f"{message}: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ReadFailure(SchemadexError):
    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = Path(path)
        message = f"Failed to read schema document: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
