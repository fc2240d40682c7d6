"""Noema runtime: values, variable store and evaluator."""

from .environment import DEFAULT_MAX_VARIABLES, StoreCapacityError, VariableStore
from .evaluator import Evaluator
from .values import FALSE, NULL, TRUE, Value, ValueKind, render

__all__ = [
    "DEFAULT_MAX_VARIABLES",
    "StoreCapacityError",
    "VariableStore",
    "Evaluator",
    "FALSE",
    "NULL",
    "TRUE",
    "Value",
    "ValueKind",
    "render",
]
