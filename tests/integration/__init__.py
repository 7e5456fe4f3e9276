"""Integration tests.

Purpose
- Run the SQLAlchemy client against real SQLite files and a Testcontainers
  PostgreSQL 16, and check the wiring done by the composition root.

Guidelines
- Docker-backed tests are skipped automatically when no daemon answers.
- PostgreSQL tests are also marked 'slow'.
"""
