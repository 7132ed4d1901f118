"""In-memory registry of schema models and the version resolution policy."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, List, Mapping

from schemadex.errors import UnknownResource
from schemadex.index.indexer import Indexer, IndexStats
from schemadex.models import Model, ModelVersion
from schemadex.utils.files import read_document

LOGGER = logging.getLogger(__name__)


class SchemaRegistry:
    """Resource name to :class:`Model` mapping, replaced wholesale on re-index.

    A single lock guards the mapping. Indexing builds the replacement outside
    the lock and swaps it in one assignment, so readers never observe a partly
    populated registry.
    """

    def __init__(self, indexer: Indexer | None = None) -> None:
        self.indexer = indexer or Indexer()
        self._lock = threading.Lock()
        self._models: Dict[str, Model] = {}
        self._directory: Path | None = None

    @property
    def directory(self) -> Path | None:
        with self._lock:
            return self._directory

    def index(self, directory: Path) -> IndexStats:
        """Replace the registry contents with the models found in ``directory``."""
        models, stats = self.indexer.scan(directory)
        self.replace(models, directory=Path(directory))
        return stats

    def replace(self, models: Mapping[str, Model], *, directory: Path | None = None) -> None:
        snapshot = dict(models)
        with self._lock:
            self._models = snapshot
            self._directory = directory

    def clear(self) -> None:
        self.replace({})

    def snapshot(self) -> List[Model]:
        """Models in registry order, as of the last completed index."""
        with self._lock:
            return list(self._models.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._models)

    def __contains__(self, resource: object) -> bool:
        with self._lock:
            return resource in self._models

    def get(self, resource: str) -> Model:
        with self._lock:
            model = self._models.get(resource)
        if model is None:
            raise UnknownResource(resource)
        return model

    def list_resources(self) -> List[str]:
        with self._lock:
            return sorted(self._models)

    def list_versions(self, resource: str) -> List[str]:
        return self.get(resource).version_list()

    def resolve(self, resource: str, version: str = "") -> ModelVersion:
        """Pick the document for ``version``, or the default when it is not indexed."""
        model = self.get(resource)
        entry = model.find_specific(version) if version else None
        if entry is None:
            if version:
                LOGGER.debug("%s %s not indexed, using default document", resource, version)
            entry = model.find_default()
        return entry

    def get_content(self, resource: str, version: str = "") -> str:
        return read_document(self.resolve(resource, version).path)
