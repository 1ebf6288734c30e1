"""Typer CLI inbound adapter."""
