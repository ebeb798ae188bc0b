"""
Comparison primitives used by the heuristic evaluators.

Every function here is pure: no I/O, no shared state. Parsing helpers return
(value, error) pairs instead of raising so callers can fail closed.
"""
import json
import math
from typing import Any, List, Optional, Set, Tuple

ROOT_PATH = "(root)"


def clamp_score(score: float) -> float:
    """Clamp a score into the closed interval [0, 1]."""
    if score < 0.0:
        return 0.0
    if score > 1.0:
        return 1.0
    return score


# --- Strings -----------------------------------------------------------------

def levenshtein_distance(str1: str, str2: str) -> int:
    """
    Classic dynamic-programming edit distance with unit insert/delete/substitute
    costs over a (len1 + 1) x (len2 + 1) table.
    """
    len1, len2 = len(str1), len(str2)
    dp = [[0] * (len2 + 1) for _ in range(len1 + 1)]

    for i in range(len1 + 1):
        dp[i][0] = i
    for j in range(len2 + 1):
        dp[0][j] = j

    for i in range(1, len1 + 1):
        for j in range(1, len2 + 1):
            if str1[i - 1] == str2[j - 1]:
                dp[i][j] = dp[i - 1][j - 1]
            else:
                dp[i][j] = min(
                    dp[i - 1][j] + 1,
                    dp[i][j - 1] + 1,
                    dp[i - 1][j - 1] + 1,
                )

    return dp[len1][len2]


def levenshtein_similarity(str1: str, str2: str) -> Tuple[float, int]:
    """
    Returns (similarity, distance). Similarity is 1 - distance / max_len,
    and 1.0 when both strings are empty.
    """
    distance = levenshtein_distance(str1, str2)
    max_len = max(len(str1), len(str2))
    if max_len == 0:
        return 1.0, distance
    return clamp_score(1 - distance / max_len), distance


def exact_equal(str1: str, str2: str) -> bool:
    return str1 == str2


def case_insensitive_equal(str1: str, str2: str) -> bool:
    return str1.casefold() == str2.casefold()


def contains_ignore_case(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


def token_set(text: str) -> Set[str]:
    return set(text.lower().split())


def jaccard_similarity(str1: str, str2: str) -> Tuple[float, int, int]:
    """
    Token-set Jaccard index over lower-cased whitespace tokens.

    Returns (score, intersection_size, union_size). Two empty token sets are
    considered identical (score 1.0).
    """
    tokens1 = token_set(str1)
    tokens2 = token_set(str2)
    intersection = tokens1 & tokens2
    union = tokens1 | tokens2
    if not union:
        return 1.0, 0, 0
    return len(intersection) / len(union), len(intersection), len(union)


# --- Numbers -----------------------------------------------------------------

def parse_number(text: str) -> Tuple[Optional[float], Optional[str]]:
    """Parse text as a finite float. Returns (value, None) or (None, error)."""
    try:
        value = float(text.strip())
    except (TypeError, ValueError, AttributeError):
        return None, f"not a number: {text!r}"
    if not math.isfinite(value):
        return None, f"not a finite number: {text!r}"
    return value, None


def numeric_score(output: float, expected: float, tolerance: float) -> Tuple[float, float, bool]:
    """
    Returns (score, difference, within_tolerance).

    Within tolerance scores 1.0. Outside it the score decays with the relative
    error against |expected|; an expected value of 0 has no relative scale and
    scores 0.0.
    """
    difference = abs(output - expected)
    matched = difference <= tolerance
    if matched:
        return 1.0, difference, True
    if expected == 0:
        return 0.0, difference, False
    return clamp_score(1 - difference / abs(expected)), difference, False


# --- JSON --------------------------------------------------------------------

def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def parse_json(text: str) -> Tuple[Any, Optional[str]]:
    """Parse strict JSON text. Returns (value, None) or (None, error)."""
    try:
        return json.loads(text, parse_constant=_reject_constant), None
    except (TypeError, ValueError) as e:
        return None, str(e)
    except RecursionError:
        return None, "JSON nesting too deep"


def json_kind(value: Any) -> str:
    """Tag a parsed JSON value: null, boolean, number, string, array or object."""
    if value is None:
        return "null"
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def _join_path(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def _render_path(path: str) -> str:
    return path or ROOT_PATH


def json_differences(output: Any, expected: Any, path: str = "") -> List[str]:
    """
    Compare two parsed JSON values depth-first.

    Returns one entry per structural difference, formatted as
    "<dot.path>: <reason>" where reason is one of type mismatch, null mismatch,
    value mismatch, missing in output or extra in output. Walks an explicit
    stack, so nesting depth is not bounded by the interpreter recursion limit.
    """
    differences: List[str] = []
    # entries are (output, expected, path, message); a message is emitted as-is
    stack: List[Tuple[Any, Any, str, Optional[str]]] = [(output, expected, path, None)]

    while stack:
        out_value, exp_value, current, message = stack.pop()
        if message is not None:
            differences.append(message)
            continue

        out_kind = json_kind(out_value)
        exp_kind = json_kind(exp_value)

        if out_kind != exp_kind:
            if out_kind == "null" or exp_kind == "null":
                differences.append(f"{_render_path(current)}: null mismatch")
            else:
                differences.append(f"{_render_path(current)}: type mismatch")
            continue

        if out_kind == "object":
            keys = list(out_value.keys()) + [k for k in exp_value.keys() if k not in out_value]
            stack.extend(reversed(_member_entries(out_value, exp_value, keys, current)))
        elif out_kind == "array":
            indices = list(range(max(len(out_value), len(exp_value))))
            members = _member_entries(dict(enumerate(out_value)), dict(enumerate(exp_value)), indices, current)
            stack.extend(reversed(members))
        elif out_kind != "null" and out_value != exp_value:
            differences.append(f"{_render_path(current)}: value mismatch")

    return differences


def _member_entries(
    output: dict, expected: dict, keys: List[Any], path: str
) -> List[Tuple[Any, Any, str, Optional[str]]]:
    entries: List[Tuple[Any, Any, str, Optional[str]]] = []
    for key in keys:
        new_path = _join_path(path, key)
        if key not in output:
            entries.append((None, None, new_path, f"{new_path}: missing in output"))
        elif key not in expected:
            entries.append((None, None, new_path, f"{new_path}: extra in output"))
        else:
            entries.append((output[key], expected[key], new_path, None))
    return entries


def json_diff_score(difference_count: int) -> float:
    """Linear decay of 0.1 per difference, floored at 0."""
    return clamp_score(1 - 0.1 * difference_count)
