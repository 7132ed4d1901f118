"""Schema directory indexing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from schemadex.errors import InvalidVersion, InvalidVersionToken
from schemadex.models import Model, ModelVersion
from schemadex.utils.files import iter_schema_files, split_schema_filename
from schemadex.version import Version

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexStats:
    directory: Path | None = None
    resources: int = 0
    defaults: int = 0
    versioned: int = 0
    replaced_defaults: list[Path] = field(default_factory=list)

    @property
    def documents(self) -> int:
        return self.defaults + self.versioned

    def increment(self, entry: ModelVersion) -> None:
        if entry.is_default:
            self.defaults += 1
        else:
            self.versioned += 1


class Indexer:
    """Builds the resource-to-model mapping for one schema directory.

    The mapping is assembled in full before it is returned, so a failure on any
    file leaves no partial result behind.
    """

    def scan(self, directory: Path) -> tuple[Dict[str, Model], IndexStats]:
        directory = Path(directory)
        models: Dict[str, Model] = {}
        stats = IndexStats(directory=directory)

        for path in iter_schema_files(directory):
            entry, resource = self._load_entry(path)
            model = models.get(resource)
            if model is None:
                model = models[resource] = Model(resource=resource)

            if entry.is_default:
                previous = [v for v in model.versions if v.is_default]
                if previous:
                    LOGGER.warning(
                        "Multiple default documents for %s; using %s", resource, path.name
                    )
                    stats.replaced_defaults.extend(v.path for v in previous)
                    model.versions = [v for v in model.versions if not v.is_default]

            model.versions.append(entry)
            stats.increment(entry)

        stats.resources = len(models)
        LOGGER.info(
            "Indexed %s: %d resources, %d default and %d versioned documents",
            directory,
            stats.resources,
            stats.defaults,
            stats.versioned,
        )
        return models, stats

    def _load_entry(self, path: Path) -> tuple[ModelVersion, str]:
        parsed = split_schema_filename(path.name)
        if parsed.version_token is None:
            LOGGER.debug("Default document %s for %s", path.name, parsed.resource)
            return ModelVersion(name=None, path=path), parsed.resource

        try:
            version = Version.parse(parsed.version_token)
        except InvalidVersion as exc:
            raise InvalidVersionToken(path.name, parsed.version_token) from exc
        LOGGER.debug("Document %s for %s %s", path.name, parsed.resource, version)
        return ModelVersion(name=version, path=path), parsed.resource
