"""
Settings Matcher
================

Batch matching of products without settings against products that already
carry settings, by comparing their names with configurable string metrics.

Key Features:
- Nine string metrics from Hamming to Sørensen-Dice, each with a threshold
- Ordered metric list where the first passing metric accepts a pair
- Parallel evaluation of the full unsettled x settled cross-product
- Per-evaluation audit logging to time-rotated log files
"""

from settings_matcher.core.errors import (
    SettingsMatcherError,
    ConfigError,
    EmptyResultError,
    MetricEvaluationError,
    StorageError
)
from settings_matcher.config.models import (
    MetricKind,
    MetricSpec,
    MatcherConfig,
    Record,
    MatchResult
)
from settings_matcher.core.matcher import SettingsMatcher, partition_records

__version__ = "1.0.0"
