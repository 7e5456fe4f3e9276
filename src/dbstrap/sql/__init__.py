"""Default SQL payloads applied by the ``init`` and ``seed`` steps."""
