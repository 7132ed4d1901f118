"""Keyword search across the latest document of every resource."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional, Protocol

from schemadex.errors import InvalidPattern, MalformedDocument
from schemadex.index.registry import SchemaRegistry
from schemadex.models import (
    Model,
    SearchPropertyResult,
    SearchResourceResult,
    SearchValueResult,
)
from schemadex.utils.files import read_document

LOGGER = logging.getLogger(__name__)

# Checked in order; the first matching field is reported.
VALUE_FIELDS = ("longDescription", "description")


class TextMatcher(Protocol):
    def matches(self, text: str) -> bool: ...


class RegexMatcher:
    """Case-insensitive regular expression matched anywhere in the text."""

    def __init__(self, keyword: str) -> None:
        try:
            self.pattern = re.compile(keyword, re.IGNORECASE)
        except re.error as exc:
            raise InvalidPattern(keyword, str(exc)) from exc

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def match_property(prop: Any, matcher: TextMatcher) -> Optional[SearchValueResult]:
    if not isinstance(prop, dict):
        return None
    for field_name in VALUE_FIELDS:
        text = prop.get(field_name)
        if isinstance(text, str) and matcher.matches(text):
            return SearchValueResult(name=field_name, content=text)
    return None


def match_definition(definition: Any, matcher: TextMatcher) -> List[SearchPropertyResult]:
    """Collect name and description hits for each property of a definition.

    A property whose name and description both match yields two rows.
    """
    matches: List[SearchPropertyResult] = []
    if not isinstance(definition, dict):
        return matches
    properties = definition.get("properties")
    if not isinstance(properties, dict):
        return matches

    for name, prop in properties.items():
        if matcher.matches(name):
            matches.append(SearchPropertyResult(name=name))
        value = match_property(prop, matcher)
        if value is not None:
            matches.append(SearchPropertyResult(name=name, value=value))
    return matches


def match_document(resource: str, document: Any, matcher: TextMatcher) -> List[SearchResourceResult]:
    results: List[SearchResourceResult] = []
    if not isinstance(document, dict):
        return results
    definitions = document.get("definitions")
    if not isinstance(definitions, dict):
        return results

    for model_name, definition in definitions.items():
        hits = match_definition(definition, matcher)
        if hits:
            results.append(SearchResourceResult(name=resource, model=model_name, properties=hits))
    return results


class Searcher:
    """High-level API to search the registry."""

    def __init__(self, registry: SchemaRegistry) -> None:
        self.registry = registry

    def search(self, keyword: str) -> List[SearchResourceResult]:
        return self.search_with(RegexMatcher(keyword))

    def search_with(self, matcher: TextMatcher) -> List[SearchResourceResult]:
        """Run ``matcher`` over every resource; any unreadable document aborts the search."""
        results: List[SearchResourceResult] = []
        for model in self.registry.snapshot():
            results.extend(match_document(model.resource, self._load_latest(model), matcher))
        LOGGER.debug("Search produced %d definition hits", len(results))
        return results

    def _load_latest(self, model: Model) -> Any:
        latest = model.find_latest()
        content = read_document(latest.path)
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise MalformedDocument(model.resource, latest.path, str(exc)) from exc
