import asyncio
import logging
import os
from typing import Any, Dict, Optional

import typer
from sqlalchemy.exc import SQLAlchemyError

from heuristic_eval.config import configure_logging, load_config
from heuristic_eval.engine.evaluator import Evaluator, available_kinds, resolve_kind
from heuristic_eval.engine.metrics import Metrics
from heuristic_eval.engine.schemas import ItemValidationError, UnknownEvaluationKind
from heuristic_eval.loaders.item_loader import load_items
from heuristic_eval.reporting import export_results_csv, generate_html_report, print_results, write_results_json
from heuristic_eval.storage import ResultStore

app = typer.Typer(help="Score model outputs against expected references with heuristic evaluators.")
logger = logging.getLogger("heuristic_eval")


def _load_config_or_exit(config_path: Optional[str]) -> Dict[str, Any]:
    try:
        return load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _open_store(db: Optional[str], cfg: Dict[str, Any], must_exist: bool = True) -> ResultStore:
    db_path = db or cfg["storage"]["db_path"]
    if must_exist and not os.path.exists(db_path):
        typer.echo(f"Error: Database file not found at {db_path}. Please run 'run' first.", err=True)
        raise typer.Exit(code=1)
    return ResultStore(db_path)


@app.command()
def run(
    file: str = typer.Argument(..., help="Path to a JSON array of evaluation items."),
    kind: Optional[str] = typer.Option(None, "--type", "-t", help="Evaluation type (see the 'kinds' command)."),
    save: bool = typer.Option(False, "--save", "-p", help="Save the results as <file>-result.json."),
    out_dir: Optional[str] = typer.Option(None, help="Directory for the saved results JSON (default: exports.results_dir)."),
    db: Optional[str] = typer.Option(None, help="SQLite DB path (default: storage.db_path)."),
    no_persist: bool = typer.Option(False, "--no-persist", help="Do not store the run in the results DB."),
    html_report: bool = typer.Option(False, "--html", help="Write an HTML report for this run."),
    concurrent: bool = typer.Option(False, "--concurrent", help="Evaluate items concurrently."),
    progress: bool = typer.Option(False, "--progress", help="Show progress messages."),
    config: Optional[str] = typer.Option(None, help="Path to config.yaml."),
    log_level: Optional[str] = typer.Option(None, help="Logging level (default: logging.level)."),
):
    """
    Runs one heuristic evaluation over every item in FILE.
    """
    cfg = _load_config_or_exit(config)
    configure_logging(log_level or cfg["logging"]["level"])

    try:
        evaluation_kind = resolve_kind(kind or cfg["evaluation"]["default_kind"])
    except UnknownEvaluationKind as e:
        typer.echo(f"Error: {e}", err=True)
        typer.echo("\nAvailable evaluation types:", err=True)
        typer.echo(f"  Heuristic: {', '.join(available_kinds())}", err=True)
        raise typer.Exit(code=1)

    try:
        items = load_items(file)
    except (FileNotFoundError, ItemValidationError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not items:
        typer.echo(f"No evaluation items found in {file}.")
        return

    if progress:
        typer.echo(f"Starting {evaluation_kind.value} evaluation of {len(items)} items...")

    evaluator = Evaluator(max_concurrent_evaluations=int(cfg["evaluation"]["max_concurrent"]))
    if concurrent:
        results = asyncio.run(evaluator.evaluate_async(items, evaluation_kind))
    else:
        results = evaluator.evaluate(items, evaluation_kind)

    print_results(results)
    typer.echo("=====================================")

    if save:
        results_dir = out_dir or cfg["exports"]["results_dir"]
        filename = os.path.basename(file)
        output_path = os.path.join(os.path.expanduser(results_dir), f"{filename}-result.json")
        try:
            written = write_results_json(results, output_path)
            typer.echo(f"Results saved to {written}")
        except OSError as e:
            logger.error(f"Failed to save results to {output_path}: {e}")
            typer.echo(f"Saving results failed: {e}", err=True)

    run_id = None
    if cfg["storage"]["persist"] and not no_persist:
        try:
            store = _open_store(db, cfg, must_exist=False)
            run_id = store.persist(results, evaluation_kind, source=os.path.abspath(file), items=items)
            typer.echo(f"Stored run {run_id} in {store.db_path}")
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Error persisting heuristic results to SQLite: {e}")
            typer.echo(f"Persisting results failed: {e}", err=True)

    if html_report:
        df = Metrics().results_to_frame(results, items)
        if run_id is not None:
            df.insert(0, 'run_id', run_id)
        report_path = generate_html_report(df, cfg["exports"]["dir"])
        if report_path:
            typer.echo(f"Exported HTML report to: {report_path}")


@app.command()
def summary(
    db: Optional[str] = typer.Option(None, help="SQLite DB path (default: storage.db_path)."),
    run_id: Optional[str] = typer.Option(None, help="Only summarize this run."),
    config: Optional[str] = typer.Option(None, help="Path to config.yaml."),
):
    """
    Displays stored runs and a per-type summary of their results.
    """
    cfg = _load_config_or_exit(config)
    store = _open_store(db, cfg)

    df = store.load(run_id)
    if df.empty:
        typer.echo("No stored results found.")
        return

    if run_id is None:
        typer.echo("\n--- Stored Runs ---")
        typer.echo(store.list_runs().to_string(index=False))

    summary_df = Metrics().calculate_kind_summary(df)
    typer.echo("\n--- Summary by Evaluation Type ---")
    typer.echo(summary_df.to_string(index=False))


@app.command()
def export(
    out: str = typer.Option("heuristic_results.csv", help="Path to save the raw results CSV."),
    db: Optional[str] = typer.Option(None, help="SQLite DB path (default: storage.db_path)."),
    run_id: Optional[str] = typer.Option(None, help="Only export this run."),
    config: Optional[str] = typer.Option(None, help="Path to config.yaml."),
):
    """
    Exports raw stored results to a CSV file.
    """
    cfg = _load_config_or_exit(config)
    store = _open_store(db, cfg)

    df = store.load(run_id)
    if df.empty:
        typer.echo("No stored results found.")
        return
    export_results_csv(df, out)
    typer.echo(f"Raw results exported to {out}")


@app.command()
def report(
    out_dir: Optional[str] = typer.Option(None, help="Directory for the HTML report (default: exports.dir)."),
    db: Optional[str] = typer.Option(None, help="SQLite DB path (default: storage.db_path)."),
    run_id: Optional[str] = typer.Option(None, help="Only report this run."),
    config: Optional[str] = typer.Option(None, help="Path to config.yaml."),
):
    """
    Generates an HTML report from stored results.
    """
    cfg = _load_config_or_exit(config)
    store = _open_store(db, cfg)

    df = store.load(run_id)
    report_path = generate_html_report(df, out_dir or cfg["exports"]["dir"])
    if report_path is None:
        typer.echo("No stored results found.")
        return
    typer.echo(f"Exported HTML report to: {report_path}")


@app.command()
def clear(
    db: Optional[str] = typer.Option(None, help="SQLite DB path (default: storage.db_path)."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
    config: Optional[str] = typer.Option(None, help="Path to config.yaml."),
):
    """
    Deletes every stored result row.
    """
    cfg = _load_config_or_exit(config)
    store = _open_store(db, cfg)

    if not yes:
        typer.confirm(f"Delete all stored results in {store.db_path}?", abort=True)
    store.clear()
    typer.echo(f"Cleared table: {store.table_name}")


@app.command()
def kinds():
    """
    Lists the available evaluation types.
    """
    for kind in available_kinds():
        typer.echo(kind)


if __name__ == "__main__":
    app()
