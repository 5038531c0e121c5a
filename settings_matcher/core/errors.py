"""Error types raised by the settings matching system."""

from pathlib import Path
from typing import Optional, Union


class SettingsMatcherError(Exception):
    """Base class for every error the matcher reports to its caller."""


class ConfigError(SettingsMatcherError):
    """Invalid configuration or input that prevents matching from starting."""


class EmptyResultError(SettingsMatcherError):
    """Matching finished without accepting a single pair."""


class StorageError(SettingsMatcherError):
    """Reading or writing one of the JSON files failed."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{message} ({self.path})"
        super().__init__(message)


class MetricEvaluationError(SettingsMatcherError):
    """
    A single metric could not be computed for one pair of names.

    Recovered inside the matcher: the metric is skipped for that pair.
    """

    def __init__(self, metric, left: str, right: str, reason: str):
        self.metric = metric
        self.left = left
        self.right = right
        self.reason = reason
        super().__init__(f"{metric} failed for {left!r} -> {right!r}: {reason}")
