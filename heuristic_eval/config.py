import copy
import logging
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

CONFIG_ENV_VAR = "HEURISTIC_EVAL_CONFIG"
DB_ENV_VAR = "HEURISTIC_EVAL_DB"

DEFAULT_CONFIG: Dict[str, Any] = {
    "evaluation": {
        "default_kind": "levenshtein",
        "max_concurrent": 5,
    },
    "storage": {
        "db_path": "heuristic_eval_results.db",
        "persist": True,
    },
    "exports": {
        "dir": "exports",
        "results_dir": os.path.join("~", "Downloads"),
    },
    "logging": {
        "level": "INFO",
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration, layering a YAML file over the built-in defaults.

    Precedence for the file: explicit config_path, then the HEURISTIC_EVAL_CONFIG
    environment variable (a .env file is honoured), then none. HEURISTIC_EVAL_DB
    overrides storage.db_path. An explicitly requested file that does not exist
    raises FileNotFoundError.
    """
    load_dotenv()
    path = config_path or os.getenv(CONFIG_ENV_VAR)

    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        if not os.path.exists(path):
            raise FileNotFoundError(f"heuristic-eval config not found at: {path}")
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level.")
        config = _merge(config, data)
        logging.getLogger("heuristic_eval").debug(f"Loaded config from {path}")

    db_override = os.getenv(DB_ENV_VAR)
    if db_override:
        config["storage"]["db_path"] = db_override

    return config


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
