"""crudgen — CRUD API boilerplate from typePayload declarations."""

__version__ = "0.1.0"
