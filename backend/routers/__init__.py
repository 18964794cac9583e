"""FastAPI routers for modular endpoint organization."""

from . import auth, entries, exports, generation, ingest, search

__all__ = [
    "auth",
    "entries",
    "exports",
    "generation",
    "ingest",
    "search",
]
