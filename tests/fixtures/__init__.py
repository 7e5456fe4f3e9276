"""pytest plugins providing shared fixtures (no tests here)."""
