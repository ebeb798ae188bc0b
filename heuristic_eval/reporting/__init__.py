"""
heuristic_eval.reporting

Renderers for evaluation results: console output, JSON artifacts, CSV exports
and a self-contained HTML report.
"""
from heuristic_eval.reporting.console import (
    export_results_csv,
    format_results,
    print_results,
    results_to_json,
    write_results_json,
)
from heuristic_eval.reporting.html_exporter import generate_html_report

__all__ = [
    "export_results_csv",
    "format_results",
    "generate_html_report",
    "print_results",
    "results_to_json",
    "write_results_json",
]
