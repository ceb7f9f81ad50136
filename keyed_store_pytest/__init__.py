"""Pytest fixtures for testing keyed stores."""
