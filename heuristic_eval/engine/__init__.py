"""
heuristic_eval.engine

Comparison primitives, evaluator functions, the type-keyed dispatcher and the
result aggregator. Nothing in this package performs I/O.
"""
from heuristic_eval.engine.evaluator import Evaluator, available_kinds, evaluate, get_evaluator
from heuristic_eval.engine.metrics import Metrics
from heuristic_eval.engine.schemas import (
    BatchSummary,
    EvalItem,
    EvalMetadata,
    EvalResult,
    EvaluationKind,
    ItemValidationError,
    UnknownEvaluationKind,
)

__all__ = [
    "BatchSummary",
    "EvalItem",
    "EvalMetadata",
    "EvalResult",
    "EvaluationKind",
    "Evaluator",
    "ItemValidationError",
    "Metrics",
    "UnknownEvaluationKind",
    "available_kinds",
    "evaluate",
    "get_evaluator",
]
