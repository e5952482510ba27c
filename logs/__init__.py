"""Operational helpers (metrics)."""
