"""Monitor behavior of store for testing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

    from keyed_store.main import Store


class StoreMonitor:
    """Monitor the dispatches and notifications of a store for testing."""

    def __init__(self: StoreMonitor, mocker: MockerFixture) -> None:
        """Initialize the store monitor."""
        self.store: Store | None = None
        self._mocker = mocker
        self.notifications = mocker.MagicMock(name='notifications')
        self.dispatched_actions = mocker.MagicMock(name='dispatched_actions')

    def monitor(self: StoreMonitor, store: Store) -> None:
        """Set the store to monitor."""
        if self.store is not None:
            self.store.unsubscribe(self.notifications)
            self._mocker.stop(self.dispatched_actions)
        self.store = store
        self.dispatched_actions = self._mocker.spy(store, 'dispatch')
        self.store.subscribe(self.notifications)

    @property
    def states(self: StoreMonitor) -> list:
        """States observers were notified with, in order."""
        return [call.args[0] for call in self.notifications.call_args_list]


@pytest.fixture
def store_monitor(store: Store, mocker: MockerFixture) -> StoreMonitor:
    """Fixture recording what a store dispatched and whom it notified.

    Requires a `store` fixture providing the store under test.
    """
    monitor = StoreMonitor(mocker)

    monitor.monitor(store)

    return monitor
