import html
import logging
import os
from typing import Optional

import pandas as pd

from heuristic_eval.engine.metrics import Metrics

HIGH_SCORE = 0.8
MID_SCORE = 0.5


def score_class(score: float) -> str:
    if score >= HIGH_SCORE:
        return "score-high"
    if score >= MID_SCORE:
        return "score-mid"
    return "score-low"


def _badge(score: float) -> str:
    return f'<span class="score-badge {score_class(score)}">{score:.3f}</span>'


def generate_html_report(df: pd.DataFrame, output_dir: str, title: str = "Heuristic Evaluation Report") -> Optional[str]:
    """
    Generates a self-contained HTML report with CSS styling and color-coded scores.
    Includes a per-kind summary table and the per-item results.

    Returns the report path, or None when there are no rows to report.
    """
    logger = logging.getLogger("heuristic_eval")
    logger.info(f"[HTML_EXPORT_START] Generating HTML report for {len(df)} rows")

    if df.empty:
        logger.warning("[HTML_EXPORT_SKIPPED] No results to report")
        return None

    os.makedirs(output_dir, exist_ok=True)
    html_path = os.path.join(output_dir, "evaluation_report.html")

    css = """
    <style>
        body { font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; margin: 20px; background-color: #f4f4f9; }
        h2 { color: #333; border-bottom: 2px solid #ddd; padding-bottom: 10px; margin-top: 40px; }
        table { border-collapse: collapse; margin-bottom: 30px; background-color: white; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
        th, td { padding: 12px 15px; text-align: left; border-bottom: 1px solid #ddd; }
        th { background-color: #f8f9fa; font-weight: 600; color: #555; }
        tr:hover { background-color: #f1f1f1; }
        .score-badge { display: inline-block; padding: 4px 8px; border-radius: 4px; color: white; font-weight: bold; text-align: center; min-width: 20px; }
        .score-high { background-color: #28a745; }
        .score-mid { background-color: #ffc107; color: #333; }
        .score-low { background-color: #dc3545; }
        .matched-yes { color: #28a745; font-weight: bold; }
        .matched-no { color: #dc3545; font-weight: bold; }
        .footer { font-size: 0.8em; color: #777; margin-top: 20px; text-align: center; }
    </style>
    """

    html_parts = [
        '<!DOCTYPE html>',
        '<html>',
        f'<head><meta charset="UTF-8"><title>{html.escape(title)}</title>{css}</head>',
        '<body>',
        f'<h1>{html.escape(title)}</h1>',
    ]

    # --- Table 1: Summary per evaluation type ---
    summary_df = Metrics().calculate_kind_summary(df)
    html_parts.append('<h2>Summary by Evaluation Type</h2>')
    html_parts.append('<table>')
    html_parts.append('<thead><tr><th>Evaluation Type</th><th>Items</th><th>Mean Score</th>'
                      '<th>Std Dev</th><th>Min</th><th>Max</th><th>Passed</th><th>Pass Rate</th></tr></thead><tbody>')
    for row in summary_df.to_dict(orient='records'):
        html_parts.append(
            '<tr>'
            f'<td>{html.escape(str(row["evaluation_type"]))}</td>'
            f'<td>{row["count"]}</td>'
            f'<td>{_badge(row["mean_score"])}</td>'
            f'<td>{row["std_dev_score"]:.3f}</td>'
            f'<td>{row["min_score"]:.3f}</td>'
            f'<td>{row["max_score"]:.3f}</td>'
            f'<td>{row["passed"]}/{row["count"]}</td>'
            f'<td>{row["pass_rate"]:.1f}%</td>'
            '</tr>'
        )
    html_parts.append('</tbody></table>')

    # --- Table 2: Per-item results ---
    html_parts.append('<h2>Item Results</h2>')
    html_parts.append('<table>')
    columns = [c for c in ['run_id', 'item_index', 'input', 'name', 'score', 'matched', 'details'] if c in df.columns]
    html_parts.append('<thead><tr>')
    for c in columns:
        html_parts.append(f'<th>{html.escape(c)}</th>')
    html_parts.append('</tr></thead><tbody>')

    for record in df[columns].to_dict(orient='records'):
        html_parts.append('<tr>')
        for c in columns:
            cell = record[c]
            if c == 'score':
                html_parts.append(f'<td>{_badge(float(cell))}</td>')
            elif c == 'matched':
                cls, mark = ('matched-yes', '✓') if cell else ('matched-no', '✗')
                html_parts.append(f'<td class="{cls}">{mark}</td>')
            else:
                html_parts.append(f'<td>{html.escape("" if pd.isna(cell) else str(cell))}</td>')
        html_parts.append('</tr>')
    html_parts.append('</tbody></table>')

    html_parts.append('<div class="footer">Generated by heuristic-eval</div>')
    html_parts.append('</body></html>')

    with open(html_path, "w", encoding="utf-8") as f:
        f.write("\n".join(html_parts))

    logger.info(f"[HTML_EXPORT_SUCCESS] Report saved to {html_path}")
    return html_path
