"""
heuristic_eval package

Deterministic, non-AI scoring of generated text against expected references.

Subpackages:
- engine: comparison primitives, evaluator functions, dispatcher, metrics
- loaders: JSON item source
- reporting: console, JSON, CSV and HTML output

Typical use:

    from heuristic_eval import evaluate, load_items
    results = evaluate(load_items("items.json"), "levenshtein")
"""
from heuristic_eval.engine import (
    EvalItem,
    EvalResult,
    EvaluationKind,
    Evaluator,
    ItemValidationError,
    Metrics,
    UnknownEvaluationKind,
    evaluate,
)
from heuristic_eval.loaders import load_items

__version__ = "0.1.0"

__all__ = [
    "EvalItem",
    "EvalResult",
    "EvaluationKind",
    "Evaluator",
    "ItemValidationError",
    "Metrics",
    "UnknownEvaluationKind",
    "evaluate",
    "load_items",
]
