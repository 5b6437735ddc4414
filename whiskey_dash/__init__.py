"""whiskey_dash: a personal whiskey collection dashboard backend.

The FastAPI application lives in :mod:`whiskey_dash.api`; the grouping and
statistics modules import without it.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
