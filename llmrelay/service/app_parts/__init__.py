"""Shared pieces of the HTTP service."""
