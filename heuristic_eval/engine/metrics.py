from typing import Optional, Sequence

import numpy as np
import pandas as pd

from heuristic_eval.engine.schemas import BatchSummary, EvalItem, EvalResult

RESULT_COLUMNS = ['item_index', 'input', 'name', 'evaluation_type', 'score', 'matched', 'details']


class Metrics:
    def results_to_frame(
        self, results: Sequence[EvalResult], items: Optional[Sequence[EvalItem]] = None
    ) -> pd.DataFrame:
        """
        Flattens an ordered batch of results into one row per item.

        Args:
            results: Results in item order.
            items (optional): The evaluated items, used to carry `input` through
                              for reporting. Must be the same length as results.

        Returns:
            pd.DataFrame: Columns item_index, input, name, evaluation_type,
                          score, matched, details.
        """
        if items is not None and len(items) != len(results):
            raise ValueError(f"Got {len(results)} results for {len(items)} items.")

        rows = []
        for index, result in enumerate(results):
            rows.append({
                'item_index': index,
                'input': items[index].input if items is not None else None,
                'name': result.name,
                'evaluation_type': result.metadata.evaluation_type,
                'score': result.score,
                'matched': result.metadata.matched,
                'details': result.metadata.details,
            })
        return pd.DataFrame(rows, columns=RESULT_COLUMNS)

    def summarize(self, results: Sequence[EvalResult]) -> BatchSummary:
        """Mean score and pass count for a batch. An empty batch has mean 0.0."""
        if not results:
            return BatchSummary(total=0, mean_score=0.0, passed=0)
        scores = np.array([r.score for r in results], dtype=float)
        passed = sum(1 for r in results if r.metadata.matched)
        return BatchSummary(total=len(results), mean_score=float(scores.mean()), passed=passed)

    def calculate_kind_summary(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Aggregates result rows per evaluation type.

        Args:
            df (pd.DataFrame): Result rows with at least evaluation_type, score
                               and matched columns (as produced by
                               results_to_frame or loaded from the result store).

        Returns:
            pd.DataFrame: evaluation_type, count, mean_score, std_dev_score,
                          min_score, max_score, passed, pass_rate.
        """
        if df.empty:
            return pd.DataFrame()

        df = df.copy()
        # Ensure 'score' is numeric
        df['score'] = pd.to_numeric(df['score'], errors='coerce')
        df.dropna(subset=['score'], inplace=True)
        df['matched'] = df['matched'].astype(bool)

        summary = df.groupby('evaluation_type').agg(
            count=('score', 'size'),
            mean_score=('score', 'mean'),
            std_dev_score=('score', 'std'),
            min_score=('score', 'min'),
            max_score=('score', 'max'),
            passed=('matched', 'sum'),
        ).reset_index()

        # A single-item group has no sample deviation
        summary['std_dev_score'] = summary['std_dev_score'].fillna(0.0)
        summary['passed'] = summary['passed'].astype(int)
        summary['pass_rate'] = (summary['passed'] / summary['count']) * 100

        return summary[['evaluation_type', 'count', 'mean_score', 'std_dev_score',
                        'min_score', 'max_score', 'passed', 'pass_rate']]
