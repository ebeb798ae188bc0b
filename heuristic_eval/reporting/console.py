import json
import logging
import os
from typing import List, Sequence

import pandas as pd
import typer

from heuristic_eval.engine.metrics import Metrics
from heuristic_eval.engine.schemas import EvalResult

logger = logging.getLogger("heuristic_eval")


def format_results(results: Sequence[EvalResult]) -> List[str]:
    """Per-item blocks followed by the average score and pass count."""
    lines = ["", "Heuristic Evaluation Results:", "============================", ""]
    for index, result in enumerate(results, start=1):
        lines.extend([
            f"Item {index}:",
            f"Type: {result.name}",
            f"Score: {result.score:.3f}",
            f"Matched: {'✓' if result.metadata.matched else '✗'}",
            f"Details: {result.metadata.details}",
            "----------------------------",
            "",
        ])

    summary = Metrics().summarize(results)
    lines.append(f"Average Score: {summary.mean_score:.3f}")
    lines.append(f"Passed: {summary.passed}/{summary.total} ({summary.pass_rate:.1f}%)")
    return lines


def print_results(results: Sequence[EvalResult]) -> None:
    for line in format_results(results):
        typer.echo(line)


def results_to_json(results: Sequence[EvalResult]) -> str:
    return json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False)


def write_results_json(results: Sequence[EvalResult], output_path: str) -> str:
    """Writes the result array verbatim as JSON. Returns the written path."""
    output_path = os.path.expanduser(output_path)
    parent = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(parent, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as fh:
        fh.write(results_to_json(results))
    logger.info(f"Results saved to {output_path}")
    return output_path


def export_results_csv(df: pd.DataFrame, output_path: str) -> str:
    parent = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(parent, exist_ok=True)
    df.to_csv(output_path, index=False)
    logger.info(f"Exported {len(df)} rows to {output_path}")
    return output_path
