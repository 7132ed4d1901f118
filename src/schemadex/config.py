"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

SCHEMA_DIR_ENV = "SCHEMADEX_SCHEMA_DIR"
DEFAULT_ROOT_RESOURCE = "ServiceRoot"
DEFAULT_LINK_TEMPLATE = "http://redfish.dmtf.org/schemas/v1/{resource}.json"
DEFAULT_LINK_PREFIX = "/schemas/v1/"


def _get_default_schema_dir() -> Path | None:
    value = os.environ.get(SCHEMA_DIR_ENV, "").strip()
    return Path(value).expanduser() if value else None


@dataclass(slots=True)
class AppConfig:
    schema_dir: Path | None = None
    root_resource: str = DEFAULT_ROOT_RESOURCE
    link_template: str = DEFAULT_LINK_TEMPLATE
    link_prefix: str = DEFAULT_LINK_PREFIX

    def __post_init__(self) -> None:
        if self.schema_dir is None:
            self.schema_dir = _get_default_schema_dir()

    def resolve_schema_dir(self, base_dir: Path | None = None) -> Path | None:
        if self.schema_dir is None:
            return None
        if Path(self.schema_dir).is_absolute() or base_dir is None:
            return Path(self.schema_dir)
        return base_dir / self.schema_dir
