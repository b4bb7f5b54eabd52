"""Shared helpers: typed errors, logging and size parsing."""
