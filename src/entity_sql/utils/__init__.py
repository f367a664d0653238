"""Shared utilities for entity-sql."""
