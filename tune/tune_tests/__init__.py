"""Unit tests for the tune package."""
