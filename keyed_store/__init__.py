"""Keyed store implementation for Python."""

from immutable import Immutable

from .basic_types import (
    Action,
    ActionBatch,
    BaseAction,
    DiagnosticSink,
    Dispatch,
    DispatchParameters,
    Observer,
    Reducer,
    ReducerTable,
    StoreOptions,
    SubscribeCleanup,
    action_type_of,
)
from .diagnostics import LoggerSink
from .main import Store

__all__ = (
    'Action',
    'ActionBatch',
    'BaseAction',
    'DiagnosticSink',
    'Dispatch',
    'DispatchParameters',
    'Immutable',
    'LoggerSink',
    'Observer',
    'Reducer',
    'ReducerTable',
    'Store',
    'StoreOptions',
    'SubscribeCleanup',
    'action_type_of',
)
