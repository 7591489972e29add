"""Interfaces layer - CLI and HTTP presentation."""
