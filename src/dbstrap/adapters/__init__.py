"""Adapters (infrastructure) for DBSTRAP.

Provide concrete implementations of the application interfaces: the Docker
container runtime and the SQLAlchemy database client.

Dependency rule: may import `dbstrap.domain` and `dbstrap.interfaces`; the
domain must not import this package.
"""
