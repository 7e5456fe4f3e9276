"""DBSTRAP

Bootstraps a disposable PostgreSQL environment for local development: builds
a container image, starts a container from it, waits for the database to
settle, then applies initialization and seed SQL.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
