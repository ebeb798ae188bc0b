import pytest

from heuristic_eval.engine import evaluators
from heuristic_eval.engine.schemas import EvalItem


def _item(output, expected, tolerance=None):
    return EvalItem(input="test", output=output, expected=expected, tolerance=tolerance)


# Exact / case-insensitive

def test_exact_match_identical():
    result = evaluators.evaluate_exact_match(_item("x", "x"))
    assert result.name == "Exact Match"
    assert result.score == 1
    assert result.metadata.matched is True
    assert result.metadata.evaluation_type == "exact"


def test_exact_match_is_case_sensitive():
    result = evaluators.evaluate_exact_match(_item("X", "x"))
    assert result.score == 0
    assert result.metadata.matched is False
    assert result.metadata.details == "No exact match"


def test_exact_match_empty_strings():
    assert evaluators.evaluate_exact_match(_item("", "")).metadata.matched is True


def test_case_insensitive_match():
    result = evaluators.evaluate_case_insensitive_match(_item("X", "x"))
    assert result.name == "Case Insensitive Match"
    assert result.score == 1
    assert result.metadata.matched is True

    miss = evaluators.evaluate_case_insensitive_match(_item("hello", "goodbye"))
    assert miss.score == 0
    assert miss.metadata.matched is False


# Levenshtein

@pytest.mark.parametrize("text", ["", "a", "hello", "William Shakespeare", "ünïcödé ✓"])
def test_levenshtein_identical_strings_score_one(text):
    result = evaluators.evaluate_levenshtein(_item(text, text))
    assert result.score == 1
    assert result.metadata.matched is True


def test_levenshtein_empty_vs_non_empty():
    result = evaluators.evaluate_levenshtein(_item("", "hello"))
    assert result.score == 0
    assert result.metadata.matched is False


def test_levenshtein_close_match():
    result = evaluators.evaluate_levenshtein(_item("William Shakespear", "William Shakespeare"))
    assert 0.9 < result.score < 1.0
    assert result.metadata.matched is True
    assert result.metadata.details == "Edit distance: 1, Similarity: 94.74%"


def test_levenshtein_completely_different():
    result = evaluators.evaluate_levenshtein(_item("abc", "xyz"))
    assert result.score == 0
    assert result.metadata.matched is False


def test_levenshtein_threshold_is_strict():
    # distance 1 over 5 characters: similarity exactly 0.8, not above it
    result = evaluators.evaluate_levenshtein(_item("hellx", "hello"))
    assert result.score == pytest.approx(0.8)
    assert result.metadata.matched is False


# Numeric

def test_numeric_within_tolerance():
    result = evaluators.evaluate_numeric_difference(_item("3.14", "3.14159", tolerance=0.01))
    assert result.name == "Numeric Difference"
    assert result.score == 1
    assert result.metadata.matched is True
    assert result.metadata.details == "Difference: 0.0016, Tolerance: 0.01, Within tolerance: true"


def test_numeric_outside_tolerance():
    result = evaluators.evaluate_numeric_difference(_item("3.14", "3.5", tolerance=0.01))
    assert result.metadata.matched is False
    assert 0 < result.score < 1


def test_numeric_default_tolerance():
    result = evaluators.evaluate_numeric_difference(_item("100.005", "100.0"))
    assert result.metadata.matched is True
    assert "Tolerance: 0.01" in result.metadata.details


def test_numeric_explicit_zero_tolerance():
    result = evaluators.evaluate_numeric_difference(_item("1.5", "1.5", tolerance=0))
    assert result.metadata.matched is True
    result = evaluators.evaluate_numeric_difference(_item("1.501", "1.5", tolerance=0))
    assert result.metadata.matched is False


def test_numeric_invalid_values_fail_closed():
    result = evaluators.evaluate_numeric_difference(_item("not a number", "3.14"))
    assert result.score == 0
    assert result.metadata.matched is False
    assert "Invalid numeric values" in result.metadata.details
    assert "output" in result.metadata.details


def test_numeric_invalid_expected_fail_closed():
    result = evaluators.evaluate_numeric_difference(_item("3.14", "pi"))
    assert result.score == 0
    assert "expected" in result.metadata.details


def test_numeric_zero_expected_outside_tolerance():
    result = evaluators.evaluate_numeric_difference(_item("5", "0"))
    assert result.score == 0
    assert result.metadata.matched is False


# JSON

def test_json_key_order_irrelevant():
    result = evaluators.evaluate_json_diff(_item('{"a":1,"b":2}', '{"b":2,"a":1}'))
    assert result.name == "JSON Diff"
    assert result.score == 1
    assert result.metadata.matched is True
    assert result.metadata.details == "JSON structures match"


def test_json_missing_key_mentions_path():
    result = evaluators.evaluate_json_diff(_item('{"name":"John"}', '{"name":"John","age":30}'))
    assert result.metadata.matched is False
    assert "age" in result.metadata.details
    assert result.metadata.details == "Differences found: age: missing in output"
    assert result.score == pytest.approx(0.9)


def test_json_extra_and_value_differences():
    result = evaluators.evaluate_json_diff(
        _item('{"name": "John", "age": 25, "city": "NYC"}', '{"name": "John", "age": 30}')
    )
    assert result.metadata.matched is False
    assert "age: value mismatch" in result.metadata.details
    assert "city: extra in output" in result.metadata.details
    assert result.score == pytest.approx(0.8)


def test_json_many_differences_floor_at_zero():
    output = "{" + ", ".join(f'"k{i}": {i}' for i in range(15)) + "}"
    result = evaluators.evaluate_json_diff(_item(output, "{}"))
    assert result.score == 0
    assert result.metadata.matched is False


def test_json_invalid_output_fail_closed():
    result = evaluators.evaluate_json_diff(_item("not json", '{"name": "John"}'))
    assert result.score == 0
    assert result.metadata.matched is False
    assert result.metadata.details.startswith("Invalid JSON in output")


def test_json_invalid_expected_fail_closed():
    result = evaluators.evaluate_json_diff(_item('{"name": "John"}', "{broken"))
    assert result.score == 0
    assert result.metadata.details.startswith("Invalid JSON in expected")


def _nested(depth, leaf):
    text = leaf
    for _ in range(depth):
        text = '{"a": ' + text + '}'
    return text


def test_json_deeply_nested_documents_are_compared():
    result = evaluators.evaluate_json_diff(_item(_nested(500, "1"), _nested(500, "2")))
    assert result.score == pytest.approx(0.9)
    assert result.metadata.matched is False
    assert result.metadata.details == "Differences found: " + ".".join(["a"] * 500) + ": value mismatch"


def test_json_nesting_beyond_parser_limit_fail_closed():
    deep = "[" * 100000 + "]" * 100000
    result = evaluators.evaluate_json_diff(_item(deep, "[]"))
    assert result.metadata.matched is False
    assert result.score < 1


# Jaccard

def test_jaccard_overlap():
    result = evaluators.evaluate_jaccard(
        _item("JavaScript TypeScript Python Ruby", "JavaScript Python Ruby PHP")
    )
    assert result.name == "Jaccard Similarity"
    assert result.score == 3 / 5
    assert result.metadata.matched is True
    assert result.metadata.details == "Jaccard index: 60.00%, Intersection: 3, Union: 5"


def test_jaccard_no_overlap():
    result = evaluators.evaluate_jaccard(_item("apple banana", "car truck"))
    assert result.score == 0
    assert result.metadata.matched is False


def test_jaccard_case_insensitive():
    result = evaluators.evaluate_jaccard(_item("APPLE BANANA", "apple banana"))
    assert result.score == 1
    assert result.metadata.matched is True


def test_jaccard_half_overlap_not_matched():
    # {a, b} vs {a, c}: 1/3
    result = evaluators.evaluate_jaccard(_item("a b", "a c"))
    assert result.score == pytest.approx(1 / 3)
    assert result.metadata.matched is False


# Contains

def test_contains_substring():
    result = evaluators.evaluate_contains(_item("The capital of France is Paris", "Paris"))
    assert result.name == "Contains"
    assert result.score == 1
    assert result.metadata.matched is True


def test_contains_case_insensitive():
    result = evaluators.evaluate_contains(_item("The capital is PARIS", "paris"))
    assert result.metadata.matched is True


def test_contains_absent():
    result = evaluators.evaluate_contains(_item("The capital of France is Lyon", "Paris"))
    assert result.score == 0
    assert result.metadata.matched is False


def test_contains_partial_word():
    assert evaluators.evaluate_contains(_item("Parisian culture", "Paris")).metadata.matched is True


def test_to_dict_uses_artifact_keys():
    result = evaluators.evaluate_exact_match(_item("US", "US"))
    assert result.to_dict() == {
        "name": "Exact Match",
        "score": 1.0,
        "metadata": {"evaluationType": "exact", "details": "Exact match found", "matched": True},
    }


def test_contains_lower_cases_without_full_folding():
    # "ß".lower() stays "ß", so it is not found in "STRASSE"
    assert evaluators.evaluate_contains(_item("STRASSE", "ß")).metadata.matched is False
    assert evaluators.evaluate_contains(_item("Die Straße", "STRASSE")).metadata.matched is False
    assert evaluators.evaluate_contains(_item("Die Straße", "STRAßE")).metadata.matched is True
