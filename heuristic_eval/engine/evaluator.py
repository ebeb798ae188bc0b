import asyncio
import logging
from typing import Callable, Dict, List, Sequence, Union

from heuristic_eval.engine import evaluators
from heuristic_eval.engine.schemas import EvalItem, EvalResult, EvaluationKind, UnknownEvaluationKind

logger = logging.getLogger("heuristic_eval")

EvaluatorFn = Callable[[EvalItem], EvalResult]

EVALUATORS: Dict[EvaluationKind, EvaluatorFn] = {
    EvaluationKind.EXACT: evaluators.evaluate_exact_match,
    EvaluationKind.CASE_INSENSITIVE: evaluators.evaluate_case_insensitive_match,
    EvaluationKind.LEVENSHTEIN: evaluators.evaluate_levenshtein,
    EvaluationKind.NUMERIC: evaluators.evaluate_numeric_difference,
    EvaluationKind.JSON: evaluators.evaluate_json_diff,
    EvaluationKind.JACCARD: evaluators.evaluate_jaccard,
    EvaluationKind.CONTAINS: evaluators.evaluate_contains,
}


def resolve_kind(kind: Union[EvaluationKind, str]) -> EvaluationKind:
    """
    Resolve a kind selector (enum member or its string value).

    Raises:
        UnknownEvaluationKind: If the selector is not one of EvaluationKind.
    """
    if isinstance(kind, EvaluationKind):
        return kind
    try:
        return EvaluationKind(kind)
    except ValueError:
        raise UnknownEvaluationKind(kind) from None


def get_evaluator(kind: Union[EvaluationKind, str]) -> EvaluatorFn:
    return EVALUATORS[resolve_kind(kind)]


def available_kinds() -> List[str]:
    return [k.value for k in EVALUATORS]


class Evaluator:
    """
    Applies one heuristic evaluator to a batch of items.

    Results are returned 1:1 with the input items and in the same order. The
    kind is resolved before any item is touched, so an unknown kind never
    yields a partial batch.
    """

    def __init__(self, max_concurrent_evaluations: int = 5):
        if max_concurrent_evaluations < 1:
            raise ValueError("max_concurrent_evaluations must be at least 1")
        self.max_concurrent_evaluations = max_concurrent_evaluations

    def evaluate(self, items: Sequence[EvalItem], kind: Union[EvaluationKind, str]) -> List[EvalResult]:
        evaluate_item = get_evaluator(kind)
        logger.debug(f"Evaluating {len(items)} items with '{resolve_kind(kind).value}'")
        return [evaluate_item(item) for item in items]

    async def evaluate_async(
        self, items: Sequence[EvalItem], kind: Union[EvaluationKind, str]
    ) -> List[EvalResult]:
        """
        Concurrent variant of evaluate(). Each item runs in a worker thread,
        bounded by a semaphore; gather() keeps results in input order.
        """
        evaluate_item = get_evaluator(kind)
        semaphore = asyncio.Semaphore(self.max_concurrent_evaluations)

        async def _run(index: int, item: EvalItem) -> EvalResult:
            async with semaphore:
                logger.debug(f"Evaluating item {index} in worker thread")
                return await asyncio.to_thread(evaluate_item, item)

        tasks = [_run(i, item) for i, item in enumerate(items)]
        return list(await asyncio.gather(*tasks))


def evaluate(items: Sequence[EvalItem], kind: Union[EvaluationKind, str]) -> List[EvalResult]:
    """Sequentially evaluate items with the evaluator registered for kind."""
    return Evaluator().evaluate(items, kind)
