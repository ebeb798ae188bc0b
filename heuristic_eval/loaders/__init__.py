"""Item sources that turn input files into validated EvalItems."""
from heuristic_eval.loaders.item_loader import iter_items, load_items, parse_items

__all__ = ["iter_items", "load_items", "parse_items"]
