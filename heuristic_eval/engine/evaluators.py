"""
Evaluator functions: one per EvaluationKind.

Each wraps exactly one comparison primitive and shapes the outcome into an
EvalResult. They never raise on malformed item data; unparseable numbers or
JSON produce a zero-scored, unmatched result whose details name the problem.
"""
from heuristic_eval.engine import primitives
from heuristic_eval.engine.schemas import EvalItem, EvalMetadata, EvalResult, EvaluationKind

LEVENSHTEIN_THRESHOLD = 0.8
JACCARD_THRESHOLD = 0.5


def _result(name: str, kind: EvaluationKind, score: float, details: str, matched: bool) -> EvalResult:
    return EvalResult(
        name=name,
        score=primitives.clamp_score(score),
        metadata=EvalMetadata(evaluation_type=kind.value, details=details, matched=matched),
    )


def evaluate_exact_match(item: EvalItem) -> EvalResult:
    matched = primitives.exact_equal(item.output, item.expected)
    return _result(
        "Exact Match",
        EvaluationKind.EXACT,
        1.0 if matched else 0.0,
        "Exact match found" if matched else "No exact match",
        matched,
    )


def evaluate_case_insensitive_match(item: EvalItem) -> EvalResult:
    matched = primitives.case_insensitive_equal(item.output, item.expected)
    return _result(
        "Case Insensitive Match",
        EvaluationKind.CASE_INSENSITIVE,
        1.0 if matched else 0.0,
        "Match found (case-insensitive)" if matched else "No match found",
        matched,
    )


def evaluate_levenshtein(item: EvalItem) -> EvalResult:
    score, distance = primitives.levenshtein_similarity(item.output, item.expected)
    return _result(
        "Levenshtein Distance",
        EvaluationKind.LEVENSHTEIN,
        score,
        f"Edit distance: {distance}, Similarity: {score * 100:.2f}%",
        score > LEVENSHTEIN_THRESHOLD,
    )


def evaluate_numeric_difference(item: EvalItem) -> EvalResult:
    name = "Numeric Difference"
    output, output_error = primitives.parse_number(item.output)
    expected, expected_error = primitives.parse_number(item.expected)

    if output_error or expected_error:
        problems = []
        if output_error:
            problems.append(f"output is {output_error}")
        if expected_error:
            problems.append(f"expected is {expected_error}")
        return _result(
            name,
            EvaluationKind.NUMERIC,
            0.0,
            f"Invalid numeric values: {'; '.join(problems)}",
            False,
        )

    tolerance = item.effective_tolerance
    score, difference, matched = primitives.numeric_score(output, expected, tolerance)
    return _result(
        name,
        EvaluationKind.NUMERIC,
        score,
        f"Difference: {difference:.4f}, Tolerance: {tolerance}, Within tolerance: {str(matched).lower()}",
        matched,
    )


def evaluate_json_diff(item: EvalItem) -> EvalResult:
    name = "JSON Diff"
    output, output_error = primitives.parse_json(item.output)
    if output_error:
        return _result(name, EvaluationKind.JSON, 0.0, f"Invalid JSON in output: {output_error}", False)
    expected, expected_error = primitives.parse_json(item.expected)
    if expected_error:
        return _result(name, EvaluationKind.JSON, 0.0, f"Invalid JSON in expected: {expected_error}", False)

    differences = primitives.json_differences(output, expected)
    matched = not differences
    return _result(
        name,
        EvaluationKind.JSON,
        primitives.json_diff_score(len(differences)),
        "JSON structures match" if matched else f"Differences found: {', '.join(differences)}",
        matched,
    )


def evaluate_jaccard(item: EvalItem) -> EvalResult:
    score, intersection, union = primitives.jaccard_similarity(item.output, item.expected)
    return _result(
        "Jaccard Similarity",
        EvaluationKind.JACCARD,
        score,
        f"Jaccard index: {score * 100:.2f}%, Intersection: {intersection}, Union: {union}",
        score > JACCARD_THRESHOLD,
    )


def evaluate_contains(item: EvalItem) -> EvalResult:
    matched = primitives.contains_ignore_case(item.output, item.expected)
    return _result(
        "Contains",
        EvaluationKind.CONTAINS,
        1.0 if matched else 0.0,
        "Expected value found in output" if matched else "Expected value not found in output",
        matched,
    )
