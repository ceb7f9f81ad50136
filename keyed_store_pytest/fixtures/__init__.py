"""Utility fixtures for testing keyed stores."""

import pytest

pytest.register_assert_rewrite('keyed_store_pytest.fixtures.monitor')

from .monitor import StoreMonitor, store_monitor  # noqa: E402

__all__ = ('StoreMonitor', 'store_monitor')
