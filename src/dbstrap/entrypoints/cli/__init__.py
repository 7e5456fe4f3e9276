"""The ``dbstrap`` command-line interface."""
