from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

DEFAULT_TOLERANCE = 0.01


class EvaluationKind(str, Enum):
    """Closed set of heuristic comparison kinds. One kind applies to a whole batch."""

    EXACT = "exact"
    CASE_INSENSITIVE = "case_insensitive"
    LEVENSHTEIN = "levenshtein"
    NUMERIC = "numeric"
    JSON = "json"
    JACCARD = "jaccard"
    CONTAINS = "contains"

    @classmethod
    def values(cls) -> List[str]:
        return [k.value for k in cls]


class UnknownEvaluationKind(ValueError):
    """Raised when a batch is dispatched with a kind outside EvaluationKind."""

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(
            f"Unknown evaluation type: {kind!r}. "
            f"Available types: {', '.join(EvaluationKind.values())}"
        )


class ItemValidationError(ValueError):
    """Raised by the item source when a record does not describe a valid EvalItem."""

    def __init__(self, message: str, index: Optional[int] = None):
        self.index = index
        if index is not None:
            message = f"Item {index}: {message}"
        super().__init__(message)


@dataclass(frozen=True)
class EvalItem:
    input: str
    output: str
    expected: str
    tolerance: Optional[float] = None

    @property
    def effective_tolerance(self) -> float:
        return DEFAULT_TOLERANCE if self.tolerance is None else self.tolerance


@dataclass(frozen=True)
class EvalMetadata:
    evaluation_type: str
    details: str
    matched: bool

    def to_dict(self) -> Dict[str, Any]:
        # camelCase key kept for compatibility with existing result artifacts
        return {
            "evaluationType": self.evaluation_type,
            "details": self.details,
            "matched": self.matched,
        }


@dataclass(frozen=True)
class EvalResult:
    name: str
    score: float
    metadata: EvalMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class BatchSummary:
    total: int
    mean_score: float
    passed: int

    @property
    def pass_rate(self) -> float:
        return (self.passed / self.total) * 100 if self.total else 0.0
