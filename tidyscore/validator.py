"""Two-level collection config validation: syntactic, semantic.

Syntactic = structure and types.
Semantic  = cross-field consistency and the filesystem the config
points at.
"""

from __future__ import annotations

import json
from pathlib import Path

VALID_SPLITS = {"file", "chapter"}


# ── Syntactic Validation ────────────────────────────────────────────

def validate_syntactic(config: dict) -> list[str]:
    """Check required fields and types.  Returns list of error strings."""
    errors: list[str] = []

    if not isinstance(config, dict):
        return ["Config must be a JSON object."]

    if not isinstance(config.get("name"), str) or not config["name"]:
        errors.append("'name' is required and must be a non-empty string.")
    if not isinstance(config.get("documents_dir"), str) or not config["documents_dir"]:
        errors.append("'documents_dir' is required and must be a non-empty string.")

    pattern = config.get("pattern")
    if pattern is not None and (not isinstance(pattern, str) or not pattern):
        errors.append("'pattern' must be a non-empty glob string if provided.")
    elif pattern is not None and Path(pattern).is_absolute():
        errors.append(f"'pattern' must be relative to 'documents_dir', got '{pattern}'.")

    split = config.get("split")
    if split is not None and split not in VALID_SPLITS:
        errors.append(f"'split' must be one of {sorted(VALID_SPLITS)}, got '{split}'.")

    # Tokenizer block
    tok = config.get("tokenizer")
    if tok is not None:
        if not isinstance(tok, dict):
            errors.append("'tokenizer' must be an object if provided.")
        else:
            for key in ("lowercase", "stop_words"):
                if key in tok and not isinstance(tok[key], bool):
                    errors.append(f"'tokenizer.{key}' must be a boolean.")
            extra = tok.get("extra_stop_words")
            if extra is not None and (
                not isinstance(extra, list) or not all(isinstance(w, str) for w in extra)
            ):
                errors.append("'tokenizer.extra_stop_words' must be a list of strings.")

    # Report block
    report = config.get("report")
    if report is not None:
        if not isinstance(report, dict):
            errors.append("'report' must be an object if provided.")
        else:
            top_n = report.get("top_n")
            if top_n is not None and (
                not isinstance(top_n, int) or isinstance(top_n, bool) or top_n < 1
            ):
                errors.append("'report.top_n' must be a positive integer.")
            mc = report.get("min_count")
            if mc is not None and (
                not isinstance(mc, int) or isinstance(mc, bool) or mc < 1
            ):
                errors.append("'report.min_count' must be an integer >= 1.")

    return errors


# ── Semantic Validation ─────────────────────────────────────────────

def validate_semantic(config: dict, base_dir: Path) -> list[str]:
    """Check that the config describes a corpus that can be scored."""
    errors: list[str] = []

    documents_dir = Path(config["documents_dir"])
    if not documents_dir.is_absolute():
        documents_dir = base_dir / documents_dir

    if not documents_dir.is_dir():
        errors.append(f"'documents_dir' does not exist or is not a directory: {documents_dir}")
        return errors

    pattern = config.get("pattern", "*.txt")
    if not any(documents_dir.rglob(pattern)):
        errors.append(
            f"No files under '{documents_dir}' match pattern '{pattern}'. "
            "An empty corpus cannot be scored."
        )

    tok = config.get("tokenizer", {})
    if tok.get("extra_stop_words") and tok.get("lowercase") is False:
        errors.append(
            "'tokenizer.extra_stop_words' are matched lowercased but "
            "'tokenizer.lowercase' is false. Enable lowercasing or drop the "
            "extra stop words."
        )

    return errors


# ── Top-level validate ──────────────────────────────────────────────

def validate_config(config_path: str) -> tuple[bool, list[str]]:
    """Run syntactic + semantic validation on a collection file.

    Returns (passed, errors).
    """
    path = Path(config_path)
    try:
        config = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        return False, [f"Invalid JSON: {e}"]
    except FileNotFoundError:
        return False, [f"Config file not found: {config_path}"]

    syn_errors = validate_syntactic(config)
    if syn_errors:
        return False, syn_errors

    sem_errors = validate_semantic(config, path.parent)
    if sem_errors:
        return False, sem_errors

    return True, []
