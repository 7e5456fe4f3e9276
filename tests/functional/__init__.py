"""Functional tests.

Purpose
- Follow a developer through the CLI as a black box: asking for help, then
  bootstrapping and reusing a real local database.

Guidelines
- Assert on exit codes, stderr notices and the resulting database, never on
  internal state.
- Tests needing Docker clean up every image and container they create.
"""
