"""Application context tying the registry, search and navigation together."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from schemadex.config import AppConfig
from schemadex.index.indexer import IndexStats
from schemadex.index.registry import SchemaRegistry
from schemadex.index.search import Searcher
from schemadex.models import SchemaReference, SearchResourceResult
from schemadex.navigation import PositionTracker

LOGGER = logging.getLogger(__name__)


class SchemaBrowser:
    """Entry point for the command line and web front ends.

    Owns one registry and one position tracker; each is guarded by its own
    lock, so index and navigation calls never wait on each other.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self.registry = SchemaRegistry()
        self.searcher = Searcher(self.registry)
        self.position = PositionTracker(
            self.registry,
            root_resource=self.config.root_resource,
            link_template=self.config.link_template,
            link_prefix=self.config.link_prefix,
        )

    @classmethod
    def from_config(cls, config: AppConfig, base_dir: Path | None = None) -> "SchemaBrowser":
        """Create a browser and index the configured schema directory, if any."""
        browser = cls(config)
        schema_dir = config.resolve_schema_dir(base_dir)
        if schema_dir is not None:
            browser.index_directory(schema_dir)
        return browser

    def index_directory(self, path: Path) -> IndexStats:
        LOGGER.info("Indexing schema directory %s", path)
        return self.registry.index(Path(path))

    def list_resources(self) -> List[str]:
        return self.registry.list_resources()

    def get_content(self, resource: str, version: str = "") -> str:
        return self.registry.get_content(resource, version)

    def list_versions(self, resource: str) -> List[str]:
        return self.registry.list_versions(resource)

    def resolve_link(self, link: str) -> SchemaReference:
        return self.position.navigate_to(link)

    def current_position(self) -> List[SchemaReference]:
        return self.position.current()

    def reset_position(self, resource: str) -> None:
        self.position.reset(resource)

    def search(self, keyword: str) -> List[SearchResourceResult]:
        LOGGER.debug("Searching for %r", keyword)
        return self.searcher.search(keyword)
