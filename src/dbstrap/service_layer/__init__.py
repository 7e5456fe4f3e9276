"""Service layer for DBSTRAP.

Implements the bootstrap use-case: resolving a requested step against the
observed runtime state and executing the resulting plan through the
container runtime and database interfaces.

Dependency rule: may import `dbstrap.domain` and `dbstrap.interfaces`, but not
`dbstrap.adapters` or `dbstrap.entrypoints`.
"""
