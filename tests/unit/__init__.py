"""Unit tests.

Purpose
- Check the resolver, the orchestrator, settings and each adapter on its own.

Guidelines
- The container runtime, database and sleep are fakes (see tests.helpers.fakes).
- SQLite files under tmp_path are the only real I/O allowed here.
"""
