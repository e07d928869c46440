"""storagemeta - Hasura metadata for the storage service tables."""

__version__ = "0.1.0"
