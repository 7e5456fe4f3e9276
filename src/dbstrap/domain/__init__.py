"""Domain layer for DBSTRAP.

Contains the rules of a bootstrap: the steps a caller can request, the actions
they expand to, the runtime state they are resolved against, and the shared
error taxonomy. This package is deliberately technology-agnostic.

Dependency rule: do not import from `dbstrap.adapters` or `dbstrap.entrypoints`.
"""
