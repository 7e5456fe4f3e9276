"""DBSTRAP test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Real interactions with external systems (SQLite files, Docker, PostgreSQL).
- e2e/          : The ``dbstrap`` CLI driven through Click's test runner, with fakes.
- functional/   : User stories through the CLI, against a real Docker daemon.
- fixtures/     : pytest plugins providing shared fixtures (no tests here).
- helpers/      : Shared fakes and utilities (no tests here).

General guidance
- Keep unit fast and deterministic (no network, no real sleeping); prefer fakes
  over mocks at the container runtime and database boundaries.
- Integration hits real dependencies and is skipped when they are unavailable.
- Property-based tests use hypothesis and are marked with @pytest.mark.property.
"""
