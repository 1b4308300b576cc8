"""Test suite for attio-cli."""
