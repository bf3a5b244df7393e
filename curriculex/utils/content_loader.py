"""
Content loader utility for curriculex.

Loads curriculum content from YAML or JSON files and validates it into the
Curriculum schema.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from curriculex.config import DEFAULT_CONTENT_PATH
from curriculex.schemas import Curriculum, Module


logger = logging.getLogger(__name__)

CONTENT_SUFFIXES = (".yaml", ".yml", ".json")


def _read_document(file_path: Path) -> Any:
    if file_path.suffix not in CONTENT_SUFFIXES:
        raise ValueError(f"Unsupported content file type: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        if file_path.suffix == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def load_curriculum(
    path: Path | str | None = None,
    connector_ids: Optional[frozenset[str]] = None,
) -> Curriculum:
    """
    Load a whole curriculum from one content file.

    Args:
        path: .yaml/.yml/.json file with a top-level ``modules`` list
            (default: data/curriculum.yaml)
        connector_ids: Connector set to use when the file does not declare one

    Returns:
        Validated Curriculum

    Raises:
        FileNotFoundError: If the content file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If content does not match the schema
        CurriculumIntegrityError: If identifiers break the ordinal convention
    """
    file_path = Path(path) if path else DEFAULT_CONTENT_PATH

    if not file_path.exists():
        raise FileNotFoundError(f"Curriculum file not found: {file_path}")

    data = _read_document(file_path) or {}
    if not isinstance(data, dict) or "modules" not in data:
        raise ValueError(f"Curriculum file has no top-level 'modules' list: {file_path}")

    if connector_ids is not None and "connectorIds" not in data and "connector_ids" not in data:
        data["connector_ids"] = connector_ids

    curriculum = Curriculum.model_validate(data)
    logger.info(f"Loaded {len(curriculum.modules)} modules from {file_path}")
    return curriculum


def load_curriculum_dir(
    directory: Path | str,
    connector_ids: Optional[frozenset[str]] = None,
) -> Curriculum:
    """
    Load a curriculum stored as one module per file.

    Files are read in filename order; module order in the result follows
    that order, while ordinals still come from module ids.

    Args:
        directory: Directory holding module1.yaml, module2.yaml, ...
        connector_ids: Connector set for the assembled curriculum

    Returns:
        Validated Curriculum

    Raises:
        FileNotFoundError: If the directory doesn't exist
    """
    dir_path = Path(directory)
    if not dir_path.is_dir():
        raise FileNotFoundError(f"Curriculum directory not found: {dir_path}")

    modules = []
    for file_path in sorted(dir_path.iterdir()):
        if file_path.suffix not in CONTENT_SUFFIXES:
            continue
        modules.append(Module.model_validate(_read_document(file_path)))

    kwargs = {"modules": modules}
    if connector_ids is not None:
        kwargs["connector_ids"] = connector_ids
    curriculum = Curriculum(**kwargs)
    logger.info(f"Loaded {len(modules)} module files from {dir_path}")
    return curriculum


def get_available_curricula(directory: Path | str | None = None) -> list[str]:
    """
    List all loadable content files in a directory.

    Args:
        directory: Optional content directory (default: data/)

    Returns:
        Sorted file names without extension
    """
    dir_path = Path(directory) if directory else DEFAULT_CONTENT_PATH.parent
    if not dir_path.exists():
        return []
    return sorted(p.stem for p in dir_path.iterdir() if p.suffix in CONTENT_SUFFIXES)
