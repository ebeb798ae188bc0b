import logging
import os
import uuid
from datetime import datetime
from typing import Optional, Sequence

import pandas as pd
from sqlalchemy import create_engine, inspect, text

from heuristic_eval.engine.metrics import Metrics
from heuristic_eval.engine.schemas import EvalItem, EvalResult, EvaluationKind

logger = logging.getLogger("heuristic_eval")

RESULTS_TABLE = "heuristic_results"


class ResultStore:
    """SQLite-backed store of evaluation runs, one row per evaluated item."""

    def __init__(self, db_path: str, table_name: str = RESULTS_TABLE):
        self.db_path = db_path
        self.table_name = table_name
        parent = os.path.dirname(os.path.abspath(db_path))
        os.makedirs(parent, exist_ok=True)
        self.db_engine = create_engine(f'sqlite:///{db_path}')

    def _has_table(self) -> bool:
        return inspect(self.db_engine).has_table(self.table_name)

    def persist(
        self,
        results: Sequence[EvalResult],
        kind: EvaluationKind,
        source: str = "",
        items: Optional[Sequence[EvalItem]] = None,
    ) -> str:
        """Append a batch of results as a new run. Returns the run id."""
        run_id = uuid.uuid4().hex[:12]
        df = Metrics().results_to_frame(results, items)
        if df.empty:
            logger.info("No heuristic results to persist.")
            return run_id

        df.insert(0, 'run_id', run_id)
        df['kind'] = kind.value
        df['source'] = source
        df['timestamp'] = datetime.now()
        df.to_sql(self.table_name, self.db_engine, if_exists='append', index=False)
        logger.info(f"Persisted {len(df)} results for run {run_id} to SQLite table: {self.table_name}")
        return run_id

    def load(self, run_id: Optional[str] = None) -> pd.DataFrame:
        """Load stored rows, optionally for one run. Missing table yields an empty frame."""
        if not self._has_table():
            return pd.DataFrame()
        df = pd.read_sql_table(self.table_name, self.db_engine)
        if run_id is not None:
            df = df[df['run_id'] == run_id].reset_index(drop=True)
        if not df.empty:
            df['matched'] = df['matched'].astype(bool)
        return df

    def list_runs(self) -> pd.DataFrame:
        df = self.load()
        if df.empty:
            return pd.DataFrame()
        return df.groupby(['run_id', 'kind', 'source']).agg(
            items=('item_index', 'size'),
            mean_score=('score', 'mean'),
            passed=('matched', 'sum'),
            timestamp=('timestamp', 'min'),
        ).reset_index().sort_values('timestamp')

    def clear(self) -> None:
        """Clears all stored rows."""
        if not self._has_table():
            return
        with self.db_engine.connect() as connection:
            connection.execute(text(f"DELETE FROM {self.table_name}"))
            connection.commit()
        logger.info(f"Cleared table: {self.table_name}")
