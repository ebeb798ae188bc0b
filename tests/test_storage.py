import pytest

from heuristic_eval.engine.evaluator import evaluate
from heuristic_eval.engine.schemas import EvalItem, EvaluationKind
from heuristic_eval.storage import ResultStore


@pytest.fixture
def items():
    return [
        EvalItem(input="q1", output="Paris", expected="Paris"),
        EvalItem(input="q2", output="Lyon", expected="Paris"),
    ]


@pytest.fixture
def store(tmp_path):
    return ResultStore(str(tmp_path / "nested" / "results.db"))


def test_load_without_table_is_empty(store):
    assert store.load().empty
    assert store.list_runs().empty


def test_persist_and_load(store, items):
    results = evaluate(items, EvaluationKind.CONTAINS)
    run_id = store.persist(results, EvaluationKind.CONTAINS, source="items.json", items=items)

    df = store.load()
    assert len(df) == 2
    assert set(df['run_id']) == {run_id}
    assert df['input'].tolist() == ["q1", "q2"]
    assert df['matched'].tolist() == [True, False]
    assert df['score'].tolist() == [1.0, 0.0]
    assert df['kind'].unique().tolist() == ["contains"]
    assert "timestamp" in df.columns


def test_load_single_run(store, items):
    first = store.persist(evaluate(items, "exact"), EvaluationKind.EXACT, source="a.json", items=items)
    second = store.persist(evaluate(items, "contains"), EvaluationKind.CONTAINS, source="b.json", items=items)
    assert first != second

    df = store.load(second)
    assert len(df) == 2
    assert df['kind'].unique().tolist() == ["contains"]

    runs = store.list_runs()
    assert set(runs['run_id']) == {first, second}
    assert runs.set_index('run_id').loc[first, 'passed'] == 1


def test_persist_empty_batch_writes_nothing(store):
    store.persist([], EvaluationKind.EXACT)
    assert store.load().empty


def test_clear(store, items):
    store.persist(evaluate(items, "exact"), EvaluationKind.EXACT, items=items)
    store.clear()
    assert store.load().empty
