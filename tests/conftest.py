"""Pytest configuration file for the tests."""

from __future__ import annotations

from keyed_store_pytest.fixtures import store_monitor

__all__ = ['store_monitor']
