"""Shared fakes for attio-cli tests."""
