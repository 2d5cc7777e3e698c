"""
Content loader for Maia.

Loads learn lines and translation tables from YAML files bundled under
maia/data/.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from maia.config import LEARN_LINES_DIR, TRANSLATIONS_DIR
from maia.schemas import LearnLine

logger = logging.getLogger(__name__)


def _read_yaml(file_path: Path) -> Any:
    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_learn_lines_file(file_path: Path) -> list[LearnLine]:
    """
    Load learn lines from one YAML file.

    The file holds either a list of learn lines or a mapping with a
    `learn_lines` list.

    Raises:
        ValueError: If the file does not match the learn line schema
        yaml.YAMLError: If YAML parsing fails
    """
    data = _read_yaml(file_path)
    if isinstance(data, dict):
        data = data.get("learn_lines", [])
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"{file_path}: expected a list of learn lines")

    try:
        return [LearnLine.model_validate(item) for item in data]
    except ValidationError as e:
        raise ValueError(f"{file_path}: invalid learn line: {e}") from e


def load_learn_lines(directory: Path | None = None) -> list[LearnLine]:
    """
    Load every learn line under a directory, files in name order.

    Args:
        directory: Directory of *.yaml files (default: bundled content)

    Raises:
        FileNotFoundError: If the directory doesn't exist
    """
    dir_path = directory or LEARN_LINES_DIR
    if not dir_path.exists():
        raise FileNotFoundError(f"Learn line directory not found: {dir_path}")

    lines: list[LearnLine] = []
    for file_path in sorted(dir_path.glob("*.yaml")):
        loaded = load_learn_lines_file(file_path)
        logger.debug(f"Loaded {len(loaded)} learn lines from {file_path.name}")
        lines.extend(loaded)
    return lines


def load_translations(directory: Path | None = None) -> dict[str, dict]:
    """
    Load translation tables, one <language>.yaml file per language.

    Returns:
        Mapping of language code to nested translation dict
    """
    dir_path = directory or TRANSLATIONS_DIR
    if not dir_path.exists():
        return {}
    tables = {}
    for file_path in sorted(dir_path.glob("*.yaml")):
        table = _read_yaml(file_path) or {}
        if not isinstance(table, dict):
            raise ValueError(f"{file_path}: expected a mapping of translation keys")
        tables[file_path.stem] = table
    return tables
