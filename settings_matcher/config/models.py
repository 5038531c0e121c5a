"""Configuration and record models for the settings matching system."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Tuple, Union

from settings_matcher.core.errors import ConfigError

Threshold = Union[int, float]


class MetricKind(str, Enum):
    """String metrics available for name comparison.

    The value is the tag used in the JSON configuration file.
    """
    HAMMING = "Hamming"
    LEVENSHTEIN = "Levenshtein"
    NORMALIZED_LEVENSHTEIN = "NormalizedLevenshtein"
    OPTIMAL_ALIGNMENT = "OsaDistance"
    DAMERAU_LEVENSHTEIN = "DamerauLevenshtein"
    NORMALIZED_DAMERAU_LEVENSHTEIN = "NormalizedDamerauLevenshtein"
    JARO = "Jaro"
    JARO_WINKLER = "JaroWinkler"
    SORENSEN_DICE = "SorensenDice"

    @property
    def integral(self) -> bool:
        """Whether thresholds for this metric are whole edit counts."""
        return self in _INTEGRAL_KINDS

    @classmethod
    def from_tag(cls, tag: str) -> 'MetricKind':
        if tag in _TAG_ALIASES:
            return _TAG_ALIASES[tag]
        try:
            return cls(tag)
        except ValueError:
            raise ConfigError(f"Unknown similarity type: {tag!r}") from None


_INTEGRAL_KINDS = frozenset({
    MetricKind.HAMMING,
    MetricKind.LEVENSHTEIN,
    MetricKind.OPTIMAL_ALIGNMENT,
    MetricKind.DAMERAU_LEVENSHTEIN,
})

_TAG_ALIASES = {'OptimalAlignment': MetricKind.OPTIMAL_ALIGNMENT}


@dataclass(frozen=True)
class MetricSpec:
    """A metric paired with the value it has to exceed to accept a pair."""
    kind: MetricKind
    threshold: Threshold

    def __post_init__(self):
        """Validate the threshold against the metric's threshold type."""
        if not isinstance(self.kind, MetricKind):
            object.__setattr__(self, 'kind', MetricKind.from_tag(self.kind))

        threshold = self.threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ConfigError(
                f"{self.kind.value} threshold must be a number, got {threshold!r}"
            )

        if self.kind.integral:
            if not isinstance(threshold, int) or threshold < 0:
                raise ConfigError(
                    f"{self.kind.value} threshold must be a non-negative integer, "
                    f"got {threshold!r}"
                )
        else:
            object.__setattr__(self, 'threshold', float(threshold))

    def passes(self, value: Threshold) -> bool:
        """Strict acceptance rule shared by every metric."""
        return self.threshold < value

    def __str__(self) -> str:
        return f"{self.kind.value}({self.threshold})"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MetricSpec':
        """Build from the externally tagged form, e.g. ``{"Jaro": 0.9}``."""
        if not isinstance(data, dict) or len(data) != 1:
            raise ConfigError(
                f"Similarity type must be a single-key object, got {data!r}"
            )
        (tag, threshold), = data.items()
        return cls(MetricKind.from_tag(tag), threshold)

    def to_dict(self) -> Dict[str, Threshold]:
        return {self.kind.value: self.threshold}


def default_metrics() -> Tuple[MetricSpec, ...]:
    """Built-in metric list written to a freshly created config file."""
    return (
        MetricSpec(MetricKind.HAMMING, 100),
        MetricSpec(MetricKind.LEVENSHTEIN, 5),
        MetricSpec(MetricKind.NORMALIZED_LEVENSHTEIN, 0.9),
        MetricSpec(MetricKind.OPTIMAL_ALIGNMENT, 100),
        MetricSpec(MetricKind.DAMERAU_LEVENSHTEIN, 100),
        MetricSpec(MetricKind.NORMALIZED_DAMERAU_LEVENSHTEIN, 0.9),
        MetricSpec(MetricKind.JARO, 0.9),
        MetricSpec(MetricKind.JARO_WINKLER, 0.9),
        MetricSpec(MetricKind.SORENSEN_DICE, 0.9),
    )


@dataclass(frozen=True)
class MatcherConfig:
    """Run configuration: degree of parallelism and ordered metric list.

    A worker count of 0 lets the matcher size its pool to the CPU count.
    """
    worker_count: int = 2
    metrics: Tuple[MetricSpec, ...] = field(default_factory=default_metrics)

    def __post_init__(self):
        """Normalise metrics to a tuple and validate both fields."""
        object.__setattr__(self, 'metrics', tuple(self.metrics))

        if not self.metrics:
            raise ConfigError("Similarity types settings not found.")
        if isinstance(self.worker_count, bool) or not isinstance(self.worker_count, int) \
                or self.worker_count < 0:
            raise ConfigError(
                f"num_threads must be a non-negative integer, got {self.worker_count!r}"
            )

    def with_worker_count(self, worker_count: int) -> 'MatcherConfig':
        return replace(self, worker_count=worker_count)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatcherConfig':
        if not isinstance(data, dict):
            raise ConfigError(f"Settings must be an object, got {type(data).__name__}")
        try:
            worker_count = data['num_threads']
            raw_metrics = data['similarities_types']
        except KeyError as e:
            raise ConfigError(f"Missing settings field: {e.args[0]}") from None

        if not isinstance(raw_metrics, list):
            raise ConfigError("similarities_types must be a list")

        return cls(
            worker_count=worker_count,
            metrics=tuple(MetricSpec.from_dict(item) for item in raw_metrics)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'num_threads': self.worker_count,
            'similarities_types': [metric.to_dict() for metric in self.metrics]
        }


@dataclass(frozen=True, eq=False)
class Record:
    """A named record; settled when it carries at least one setting."""
    identifier: str
    name: str
    settings: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'settings', tuple(self.settings))

    @property
    def is_settled(self) -> bool:
        return bool(self.settings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(self.identifier)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Record':
        if not isinstance(data, dict):
            raise ConfigError(f"Record must be an object, got {data!r}")
        try:
            identifier = data['id']
            name = data['name']
            settings = data['settings_id']
        except KeyError as e:
            raise ConfigError(f"Record is missing field: {e.args[0]}") from None

        if not isinstance(identifier, str) or not isinstance(name, str):
            raise ConfigError(f"Record id and name must be strings: {data!r}")
        if not isinstance(settings, list) or not all(isinstance(s, str) for s in settings):
            raise ConfigError(f"Record settings_id must be a list of strings: {data!r}")

        return cls(identifier=identifier, name=name, settings=tuple(settings))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.identifier,
            'name': self.name,
            'settings_id': list(self.settings)
        }


@dataclass(frozen=True)
class MatchResult:
    """An unsettled record's identity carrying a settled record's settings."""
    identifier: str
    name: str
    settings: Tuple[str, ...]

    @classmethod
    def from_pair(cls, unsettled: Record, settled: Record) -> 'MatchResult':
        return cls(
            identifier=unsettled.identifier,
            name=unsettled.name,
            settings=settled.settings
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.identifier,
            'name': self.name,
            'settings_id': list(self.settings)
        }


def records_from_list(data: List[Any]) -> List[Record]:
    """Parse a record list, rejecting duplicate identifiers."""
    if not isinstance(data, list):
        raise ConfigError(f"Records must be a list, got {type(data).__name__}")

    records = [Record.from_dict(item) for item in data]
    seen = set()
    for record in records:
        if record.identifier in seen:
            raise ConfigError(f"Duplicate record id: {record.identifier!r}")
        seen.add(record.identifier)
    return records
