"""Entrypoints (inbound adapters) for DBSTRAP.

Expose the application to the outside world through the ``dbstrap`` CLI. Parse
inputs, call the composition root, and present results.

Dependency rule: may import `dbstrap.bootstrap` and `dbstrap.service_layer`;
avoid importing `dbstrap.adapters` directly.
"""
