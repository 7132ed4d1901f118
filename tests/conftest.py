"""Shared fixtures: small schema directories on disk."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def write_schema(directory: Path, filename: str, document: dict) -> Path:
    path = directory / filename
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def outlet_document(description: str = "Power state of the outlet.") -> dict:
    return {
        "title": "#Outlet.v1_2_0.Outlet",
        "definitions": {
            "Outlet": {
                "type": "object",
                "properties": {
                    "PowerState": {
                        "description": description,
                        "longDescription": "This property shall contain the state of the outlet.",
                        "readonly": True,
                    },
                    "Name": {
                        "description": "The name of the outlet.",
                    },
                },
            },
            "Actions": {
                "type": "object",
                "properties": {
                    "Oem": {"description": "Vendor specific actions."},
                },
            },
        },
    }


@pytest.fixture
def schema_dir(tmp_path: Path) -> Path:
    """``Foo`` with a default and two versions plus an ``Outlet`` resource."""
    directory = tmp_path / "schemas"
    directory.mkdir()
    write_schema(directory, "Foo.json", {"title": "Foo default", "definitions": {}})
    write_schema(directory, "Foo.v1_0_0.json", {"title": "Foo v1.0.0", "definitions": {}})
    write_schema(directory, "Foo.v1_2_0.json", {"title": "Foo v1.2.0", "definitions": {}})
    write_schema(directory, "Outlet.json", {"title": "Outlet default"})
    write_schema(directory, "Outlet.v1_2_0.json", outlet_document())
    return directory


@pytest.fixture
def make_schema():
    """Return a helper writing ``document`` as JSON under a directory."""
    return write_schema
