"""String similarity functions keyed by metric kind."""

from collections import Counter
from functools import partial
from typing import Callable, Dict, Optional, Union

import Levenshtein
from rapidfuzz.distance import DamerauLevenshtein, Hamming, OSA
from rapidfuzz.distance import Levenshtein as RapidLevenshtein

from settings_matcher.config.models import MetricKind, MetricSpec
from settings_matcher.core.errors import MetricEvaluationError

MetricValue = Union[int, float]
MetricFunction = Callable[[str, str], MetricValue]


def _bigrams(text: str) -> Counter:
    compact = ''.join(text.split())
    return Counter(compact[i:i + 2] for i in range(len(compact) - 1))


def sorensen_dice(s1: str, s2: str) -> float:
    """
    Sørensen-Dice coefficient over character bigrams.

    Whitespace is ignored. Identical strings score 1.0; a string too short
    to hold a bigram scores 0.0 against anything else.

    Args:
        s1: First string
        s2: Second string

    Returns:
        float: Similarity between 0 and 1
    """
    left = ''.join(s1.split())
    right = ''.join(s2.split())

    if left == right:
        return 1.0
    if len(left) < 2 or len(right) < 2:
        return 0.0

    left_bigrams = _bigrams(left)
    right_bigrams = _bigrams(right)
    overlap = sum((left_bigrams & right_bigrams).values())

    return 2.0 * overlap / (len(left) + len(right) - 2)


METRIC_FUNCTIONS: Dict[MetricKind, MetricFunction] = {
    MetricKind.HAMMING: partial(Hamming.distance, pad=False),
    MetricKind.LEVENSHTEIN: Levenshtein.distance,
    MetricKind.NORMALIZED_LEVENSHTEIN: RapidLevenshtein.normalized_similarity,
    MetricKind.OPTIMAL_ALIGNMENT: OSA.distance,
    MetricKind.DAMERAU_LEVENSHTEIN: DamerauLevenshtein.distance,
    MetricKind.NORMALIZED_DAMERAU_LEVENSHTEIN: DamerauLevenshtein.normalized_similarity,
    MetricKind.JARO: Levenshtein.jaro,
    MetricKind.JARO_WINKLER: Levenshtein.jaro_winkler,
    MetricKind.SORENSEN_DICE: sorensen_dice,
}


class StringValidator:
    """Computes configured metrics over pairs of names."""

    def __init__(self, functions: Optional[Dict[MetricKind, MetricFunction]] = None):
        self.functions = functions if functions is not None else METRIC_FUNCTIONS

    def compute(self, metric: MetricSpec, left: str, right: str) -> MetricValue:
        """
        Compute a metric's raw value for two names.

        Args:
            metric: Metric to compute
            left: Name of the unsettled record
            right: Name of the settled record

        Returns:
            The distance or similarity reported by the metric function

        Raises:
            MetricEvaluationError: If the metric rejects the inputs
        """
        function = self.functions[metric.kind]
        try:
            return function(left, right)
        except (ValueError, TypeError) as e:
            raise MetricEvaluationError(metric, left, right, str(e)) from e
