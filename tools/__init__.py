"""Offline tools for scan results."""
