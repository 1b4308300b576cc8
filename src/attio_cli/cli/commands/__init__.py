"""Typer sub-applications, one module per command group."""
