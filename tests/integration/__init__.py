"""Integration tests against a local HTTP server."""
