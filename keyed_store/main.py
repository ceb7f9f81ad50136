"""Keyed store holding state, applying reducers by action type and notifying observers."""

from __future__ import annotations

import contextlib
import inspect
import weakref
from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, cast

from keyed_store.basic_types import (
    ActionBatch,
    DiagnosticSink,
    DispatchParameters,
    Observer,
    Reducer,
    ReducerTable,
    State,
    StoreOptions,
    SubscribeCleanup,
    action_type_of,
    as_batch,
    is_batch,
    supports_grouping,
)
from keyed_store.diagnostics import LoggerSink

if TYPE_CHECKING:
    from collections.abc import Mapping


class Store(Generic[State]):
    """Synchronous state container dispatching actions to reducers keyed by type."""

    def __init__(
        self: Store[State],
        initial_state: State,
        reducers: ReducerTable,
        options: StoreOptions | None = None,
    ) -> None:
        """Create a new store holding a shallow copy of `initial_state`."""
        self.store_options = options or StoreOptions()
        self._reducers = reducers
        self._state: State = self.store_options.shallow_copy(initial_state)
        self._observers: set[Observer[State] | weakref.ref[Observer[State]]] = set()
        self._diagnostics: DiagnosticSink = (
            self.store_options.diagnostics
            if self.store_options.diagnostics is not None
            else LoggerSink()
        )
        self._lock = RLock()

    @property
    def reducers(self: Store[State]) -> Mapping[Any, Reducer]:
        """Read-only view of the reducer table."""
        return MappingProxyType(self._reducers)

    @property
    def enable_logging(self: Store[State]) -> bool:
        """Whether dispatch traces and failures are sent to the diagnostic sink."""
        return self.store_options.enable_logging

    def get_state(self: Store[State], copy: bool = False) -> State:  # noqa: FBT001, FBT002
        """Return the live state, or an independent deep copy of it when `copy`."""
        if copy:
            return self.store_options.deep_copy(self._state)
        return self._state

    def _call_observers(self: Store[State], state: State) -> None:
        for observer_ in self._observers.copy():
            observer = observer_() if isinstance(observer_, weakref.ref) else observer_
            if observer is not None:
                observer(state)

    def dispatch(
        self: Store[State],
        action: DispatchParameters,
        silent: bool = False,  # noqa: FBT001, FBT002
        clone: bool = True,  # noqa: FBT001, FBT002
    ) -> None:
        """Dispatch an action, or a batch of actions, and notify observers.

        A batch is a `list`, an `ActionBatch`, or a plain `tuple` that carries no
        `type` of its own. Batches nested inside a batch are flattened, so the
        outermost batch notifies observers exactly once, with the final state.
        """
        with self._lock:
            if is_batch(action):
                self._dispatch_batch(as_batch(action), silent=silent, clone=clone)
            else:
                self._dispatch_action(action, silent=silent, clone=clone)

    def _dispatch_batch(
        self: Store[State],
        batch: ActionBatch,
        *,
        silent: bool,
        clone: bool,
    ) -> None:
        actions = batch.flatten()
        notified = False
        for index, action in enumerate(actions):
            has_more = index < len(actions) - 1
            notified = self._dispatch_action(
                action,
                silent=True if has_more else silent,
                clone=False if has_more else clone,
            )
        if not notified:
            self._call_observers(self._state)

    def _dispatch_action(
        self: Store[State],
        action: Any,  # noqa: ANN401
        *,
        silent: bool,
        clone: bool,
    ) -> bool:
        """Apply the reducer registered for `action`, return whether observers ran."""
        action_type = action_type_of(action)
        reducer = self._reducers.get(action_type) if action_type is not None else None
        if not callable(reducer):
            if self.enable_logging:
                self._diagnostics.trace(
                    'No reducer exists for action type "%s"',
                    action_type,
                )
                self._diagnostics.trace('%r', action)
            return False

        grouped = self.enable_logging and supports_grouping(self._diagnostics)
        if grouped:
            cast('Any', self._diagnostics).group(str(action_type))
            self._diagnostics.trace('%r', action)
        elif self.enable_logging:
            self._diagnostics.trace('action type: %s', action_type)
            self._diagnostics.trace('action: %r', action)

        try:
            new_state = reducer(self.get_state(clone), action, self.dispatch)
        except Exception as exception:  # noqa: BLE001
            if self.enable_logging:
                self._diagnostics.error(
                    'Error occurred while dispatching %s: %s, action: %r',
                    action_type,
                    exception,
                    action,
                    exc_info=exception,
                )
            return False
        else:
            self._state = new_state
        finally:
            if grouped:
                cast('Any', self._diagnostics).group_end()

        if silent:
            return False
        self._call_observers(self._state)
        return True

    def subscribe(
        self: Store[State],
        observer: Observer[State],
        *,
        keep_ref: bool = True,
    ) -> SubscribeCleanup[State]:
        """Subscribe to state changes, subscribing twice has no extra effect."""

        def unsubscribe(_: weakref.ref | None = None) -> None:
            with self._lock, contextlib.suppress(KeyError):
                self._observers.remove(observer_ref)

        with self._lock:
            if self._is_subscribed(observer):
                return SubscribeCleanup(
                    unsubscribe=lambda: self.unsubscribe(observer),
                    observer=observer,
                )

            observer_ref: Observer[State] | weakref.ref[Observer[State]]
            if keep_ref:
                observer_ref = observer
            elif inspect.ismethod(observer):
                observer_ref = weakref.WeakMethod(observer, unsubscribe)
            else:
                observer_ref = weakref.ref(observer, unsubscribe)

            self._observers.add(observer_ref)

        return SubscribeCleanup(unsubscribe=unsubscribe, observer=observer)

    def _is_subscribed(self: Store[State], observer: Observer[State]) -> bool:
        return any(
            (observer_() if isinstance(observer_, weakref.ref) else observer_)
            == observer
            for observer_ in self._observers.copy()
        )

    def unsubscribe(self: Store[State], observer: Observer[State]) -> None:
        """Unsubscribe `observer`, a no-op when it is not subscribed."""
        with self._lock:
            self._observers = {
                observer_
                for observer_ in self._observers.copy()
                if (observer_() if isinstance(observer_, weakref.ref) else observer_)
                != observer
            }

