"""todostore: a tiny todo store kept sorted by id and persisted to JSON.

The package is split into a pure core (sorted index, id allocation, storage,
locking, service) and thin front-ends (FastAPI app, Typer CLI).
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.3.0"
