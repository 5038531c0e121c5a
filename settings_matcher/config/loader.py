"""Reading and writing the JSON files the matcher works with."""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Union

from settings_matcher.config.models import (
    MatcherConfig,
    MatchResult,
    Record,
    records_from_list
)
from settings_matcher.core.errors import ConfigError, StorageError

logger = logging.getLogger(__name__)

CONFIG_FILE = Path('settings.json')
RECORDS_FILE = Path('products.json')
OUTPUT_FILE = Path('output.json')

PathLike = Union[str, Path]


def _write_json(data: Any, path: Path, what: str) -> None:
    try:
        serialized = json.dumps(data, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise StorageError(f"Serialize {what} file: {e}", path) from e

    try:
        path.write_text(serialized, encoding='utf-8')
    except OSError as e:
        raise StorageError(f"Write {what} file: {e}", path) from e


def _read_json(path: Path, what: str) -> Any:
    try:
        contents = path.read_text(encoding='utf-8')
    except OSError as e:
        raise StorageError(f"Read {what} file: {e}", path) from e

    try:
        return json.loads(contents)
    except json.JSONDecodeError as e:
        raise StorageError(f"Deserialize {what} file: {e}", path) from e


def init_config(path: PathLike = CONFIG_FILE) -> MatcherConfig:
    """
    Load the matcher configuration, creating a default one if it is missing.

    Args:
        path: Location of the settings file

    Returns:
        MatcherConfig: Validated configuration

    Raises:
        StorageError: If the file cannot be created, read or parsed as JSON
        ConfigError: If the contents are not a valid configuration; the
            message names the file
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"Creating default settings file: {path}")
        _write_json(MatcherConfig().to_dict(), path, 'settings')

    data = _read_json(path, 'settings')
    try:
        return MatcherConfig.from_dict(data)
    except ConfigError as e:
        raise ConfigError(f"{e} ({path})") from e


def init_records(path: PathLike = RECORDS_FILE) -> List[Record]:
    """
    Load the record collection, creating an empty one if it is missing.

    Args:
        path: Location of the records file

    Returns:
        List[Record]: Records in file order

    Raises:
        StorageError: If the file cannot be created, read or parsed
        ConfigError: If a record is malformed or an id repeats
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"Creating empty products file: {path}")
        _write_json([], path, 'products')

    data = _read_json(path, 'products')
    try:
        return records_from_list(data)
    except ConfigError as e:
        raise ConfigError(f"{e} ({path})") from e


def write_output(results: Iterable[MatchResult], path: PathLike = OUTPUT_FILE) -> Path:
    """Overwrite the output file with the accepted matches."""
    path = Path(path)
    _write_json([result.to_dict() for result in results], path, 'output')
    logger.info(f"Output written to: {path}")
    return path
