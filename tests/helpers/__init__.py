"""Shared fakes and utilities for the DBSTRAP test suite (no tests here)."""
