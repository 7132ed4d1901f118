"""Navigation history through cross-referenced schema documents."""

from __future__ import annotations

import logging
import threading
from typing import List
from urllib.parse import urlsplit

from schemadex.config import DEFAULT_LINK_PREFIX, DEFAULT_LINK_TEMPLATE, DEFAULT_ROOT_RESOURCE
from schemadex.errors import LinkNotRecognized
from schemadex.index.registry import SchemaRegistry
from schemadex.models import SchemaReference

LOGGER = logging.getLogger(__name__)


def parse_schema_link(link: str, prefix: str = DEFAULT_LINK_PREFIX) -> tuple[str, str]:
    """Split ``<scheme>://<host><prefix><Resource>.json#<fragment>``.

    Returns ``(resource, fragment)``; the fragment is empty when absent.
    """
    try:
        parts = urlsplit(link)
    except ValueError as exc:
        raise LinkNotRecognized(link, str(exc)) from exc
    if not parts.scheme or not parts.netloc:
        raise LinkNotRecognized(link, "not an absolute URL")

    path = parts.path
    if not path.startswith(prefix) or not path.endswith(".json"):
        raise LinkNotRecognized(link, f"path must look like {prefix}<Resource>.json")
    resource = path[len(prefix) : -len(".json")]
    if not resource or "/" in resource:
        raise LinkNotRecognized(link, f"path must look like {prefix}<Resource>.json")
    return resource, parts.fragment


class PositionTracker:
    """Stack of visited references that is truncated when a resource is revisited.

    The stack always holds at least the root reference and never holds the
    same resource twice.
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        *,
        root_resource: str = DEFAULT_ROOT_RESOURCE,
        link_template: str = DEFAULT_LINK_TEMPLATE,
        link_prefix: str = DEFAULT_LINK_PREFIX,
    ) -> None:
        self.registry = registry
        self.link_template = link_template
        self.link_prefix = link_prefix
        self._lock = threading.Lock()
        self._stack: List[SchemaReference] = [
            SchemaReference.from_resource(root_resource, link_template)
        ]

    def current(self) -> List[SchemaReference]:
        with self._lock:
            return [
                SchemaReference(ref.link, ref.resource, ref.version, ref.fragment)
                for ref in self._stack
            ]

    def navigate_to(self, link: str) -> SchemaReference:
        """Make the resource behind ``link`` the current position."""
        resource, fragment = parse_schema_link(link, self.link_prefix)
        versions = self.registry.list_versions(resource)
        reference = SchemaReference(
            link=link,
            resource=resource,
            version=versions[0] if versions else "",
            fragment=fragment,
        )

        with self._lock:
            index = next(
                (i for i, ref in enumerate(self._stack) if ref.resource == resource), None
            )
            if index is None:
                self._stack.append(reference)
            else:
                if len(self._stack) > index + 1:
                    LOGGER.debug(
                        "Revisiting %s, dropping %d later positions",
                        resource,
                        len(self._stack) - index - 1,
                    )
                del self._stack[index + 1 :]
                self._stack[index] = reference
        return reference

    def reset(self, resource: str) -> None:
        with self._lock:
            self._stack = [SchemaReference.from_resource(resource, self.link_template)]
