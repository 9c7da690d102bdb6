"""Adapters: in-memory terminal executor."""
