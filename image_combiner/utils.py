import copy
import logging
import os
import re
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

DEFAULT_CONFIG = {
    "logging": {"level": "INFO", "file": ""},
    "paths": {"input_dir": "input", "output_dir": "output"},
    "batch": {"extensions": [".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff", ".webp"]},
}


def ensure_dirs(*paths):
    for p in paths:
        if p:
            Path(p).mkdir(parents=True, exist_ok=True)


def substitute_env_vars(text):
    """Substitute environment variables in text like ${VAR:default}"""
    if isinstance(text, str):
        def replace_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) else ""
            return os.getenv(var_name, default_value)
        return re.sub(r'\$\{([^:}]+):?([^}]*)\}', replace_var, text)
    return text


def _merge(base, override):
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path="config.yaml"):
    # Current directory first, then the repository root
    candidates = [path]
    if not os.path.isabs(path):
        parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        candidates.append(os.path.join(parent_dir, path))

    config = None
    for candidate in candidates:
        try:
            with open(candidate, "r") as f:
                config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded config from {candidate}")
            break
        except FileNotFoundError:
            continue
    if config is None:
        logger.debug(f"No {path} found, using built-in defaults")
        config = {}

    def process_config(obj):
        if isinstance(obj, dict):
            return {k: process_config(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [process_config(item) for item in obj]
        else:
            return substitute_env_vars(obj)

    return _merge(DEFAULT_CONFIG, process_config(config))


def configure_logging(cfg):
    log_cfg = cfg.get("logging", {})
    handlers = [logging.StreamHandler()]
    if log_cfg.get("file"):
        handlers.append(logging.FileHandler(log_cfg["file"]))
    logging.basicConfig(
        level=str(log_cfg.get("level") or "INFO").upper(),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def sorted_files(folder, exts=(".png", ".jpg", ".jpeg")):
    exts = tuple(e.lower() for e in exts)
    return sorted([f for f in os.listdir(folder) if f.lower().endswith(exts)])
