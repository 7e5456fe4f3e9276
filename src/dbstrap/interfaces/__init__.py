"""Interfaces (application boundary) for DBSTRAP.

Defines framework-free application contracts: the container runtime and
database client capabilities the orchestrator consumes. Implementations live
in `dbstrap.adapters`.

Dependency rule: may import `dbstrap.domain` value objects only. It may be
imported by `dbstrap.service_layer`, `dbstrap.adapters`, and
`dbstrap.bootstrap`.
"""
