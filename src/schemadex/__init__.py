"""Index, browse and search directories of versioned JSON schema documents."""

__version__ = "0.1.0"
