"""Outer surfaces: the FastAPI service and the command line."""
