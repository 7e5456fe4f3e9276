"""Bootstrap (composition root) for DBSTRAP.

Assembles the application at runtime: reads configuration, loads the SQL
payloads, and wires the Docker runtime and SQLAlchemy database adapters into a
`BootstrapOrchestrator`.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `dbstrap.adapters`, `dbstrap.service_layer`,
  `dbstrap.interfaces`, `dbstrap.domain`, and `dbstrap.config`.
- Inner layers must not import `dbstrap.bootstrap`.

Public surface:
- Re-export composition factories from this module; keep wiring helpers internal.
- No business rules live here; this is assembly and lifecycle only.
"""

from .bootstrap import AppContainer, bootstrap, build_orchestrator

__all__ = ["AppContainer", "bootstrap", "build_orchestrator"]
