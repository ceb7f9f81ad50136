# ruff: noqa: D100, D101, D102, D103, D107
from __future__ import annotations

import copy
from collections.abc import Callable, Hashable, Mapping, Sequence
from dataclasses import field
from typing import (
    Any,
    Generic,
    Protocol,
    TypeAlias,
    TypeGuard,
    runtime_checkable,
)

from immutable import Immutable
from typing_extensions import TypeVar


class BaseAction(Immutable):
    type: str


class ActionBatch(Immutable):
    actions: Sequence[Any]

    def flatten(self: ActionBatch) -> list[Any]:
        """Return the leaf actions of this batch, nested batches expanded in order."""
        result: list[Any] = []
        for item in self.actions:
            if is_batch(item):
                result.extend(as_batch(item).flatten())
            else:
                result.append(item)
        return result


# Type variables
State = TypeVar('State', infer_variance=True)

ActionType: TypeAlias = Hashable
Action: TypeAlias = 'BaseAction | Mapping[str, Any]'
DispatchParameters: TypeAlias = 'Action | ActionBatch | Sequence[Action]'
Observer: TypeAlias = Callable[[State], Any]


class Dispatch(Protocol):
    def __call__(
        self: Dispatch,
        action: DispatchParameters,
        silent: bool = False,  # noqa: FBT001, FBT002
        clone: bool = True,  # noqa: FBT001, FBT002
    ) -> None: ...


class Reducer(Protocol, Generic[State]):
    def __call__(
        self: Reducer,
        state: State,
        action: Any,  # noqa: ANN401
        dispatch: Dispatch,
    ) -> State: ...


ReducerTable: TypeAlias = Mapping[Any, Reducer]


def is_batch(action: object) -> TypeGuard[ActionBatch | Sequence[Any]]:
    """Tell batches from actions, a tuple carrying a `type` is an action."""
    if isinstance(action, ActionBatch | list):
        return True
    return isinstance(action, tuple) and action_type_of(action) is None


def as_batch(action: ActionBatch | Sequence[Any]) -> ActionBatch:
    if isinstance(action, ActionBatch):
        return action
    return ActionBatch(actions=tuple(action))


def action_type_of(action: object) -> ActionType | None:
    """Resolve the type of an action, `None` when it carries none."""
    if isinstance(action, Mapping):
        action_type = action.get('type')
    else:
        action_type = getattr(action, 'type', None)
    if action_type is None or not isinstance(action_type, Hashable):
        return None
    return action_type


@runtime_checkable
class DiagnosticSink(Protocol):
    def trace(self: DiagnosticSink, message: str, *args: object) -> None: ...

    def error(
        self: DiagnosticSink,
        message: str,
        *args: object,
        exc_info: BaseException | None = None,
    ) -> None: ...


def supports_grouping(sink: DiagnosticSink) -> bool:
    return callable(getattr(sink, 'group', None)) and callable(
        getattr(sink, 'group_end', None),
    )


class StoreOptions(Immutable):
    enable_logging: bool = False
    diagnostics: DiagnosticSink | None = None
    deep_copy: Callable[[Any], Any] = copy.deepcopy
    shallow_copy: Callable[[Any], Any] = copy.copy


class SubscribeCleanup(Immutable, Generic[State]):
    unsubscribe: Callable[[], None]
    observer: Observer[State] = field(repr=False)

    def __call__(self: SubscribeCleanup) -> None:
        self.unsubscribe()
