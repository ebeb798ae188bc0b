import json
import os
from typing import Any, Iterable, Iterator, List

from heuristic_eval.engine.schemas import EvalItem, ItemValidationError

REQUIRED_FIELDS = ("input", "output", "expected")


def _to_item(record: Any, index: int) -> EvalItem:
    if not isinstance(record, dict):
        raise ItemValidationError(f"expected an object, got {type(record).__name__}", index)

    for field_name in REQUIRED_FIELDS:
        if field_name not in record:
            raise ItemValidationError(f"missing required field '{field_name}'", index)
        if not isinstance(record[field_name], str):
            raise ItemValidationError(
                f"field '{field_name}' must be a string, got {type(record[field_name]).__name__}", index
            )

    tolerance = record.get("tolerance")
    if tolerance is not None:
        # bool is an int subclass but never a valid tolerance
        if isinstance(tolerance, bool) or not isinstance(tolerance, (int, float)):
            raise ItemValidationError(
                f"field 'tolerance' must be a number, got {type(tolerance).__name__}", index
            )
        tolerance = float(tolerance)

    return EvalItem(
        input=record["input"],
        output=record["output"],
        expected=record["expected"],
        tolerance=tolerance,
    )


def iter_items(records: Iterable[Any]) -> Iterator[EvalItem]:
    """
    Validates raw records and yields EvalItems in order.

    Raises:
        ItemValidationError: On the first record that is not a valid item.
    """
    for index, record in enumerate(records):
        yield _to_item(record, index)


def parse_items(data: Any) -> List[EvalItem]:
    if not isinstance(data, list):
        raise ItemValidationError(f"expected a JSON array of items, got {type(data).__name__}")
    return list(iter_items(data))


def load_items(file_path: str) -> List[EvalItem]:
    """
    Loads evaluation items from a JSON array file.

    Args:
        file_path (str): Path to a file holding a JSON array of objects with
                         input, output, expected and optional tolerance.

    Returns:
        list: EvalItems in file order.

    Raises:
        FileNotFoundError: If file_path is not a file.
        ItemValidationError: If the file is not UTF-8 JSON or holds an invalid item.
    """
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"Item file not found: {file_path}")
    with open(file_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
            raise ItemValidationError(f"Failed to parse {file_path} as JSON: {e}") from e
    return parse_items(data)
