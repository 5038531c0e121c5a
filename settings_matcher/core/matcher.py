"""Main settings matching implementation."""

from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple
from multiprocessing import cpu_count
import logging
import time

from settings_matcher.config.models import MatcherConfig, MatchResult, Record
from settings_matcher.core.errors import (
    ConfigError,
    EmptyResultError,
    MetricEvaluationError
)
from settings_matcher.core.validator import StringValidator

logger = logging.getLogger(__name__)


def partition_records(records: Iterable[Record]) -> Tuple[List[Record], List[Record]]:
    """
    Split records into unsettled and settled subsets.

    Args:
        records: Full record collection

    Returns:
        Tuple[List[Record], List[Record]]: Unsettled records, settled records

    Raises:
        ConfigError: If either subset is empty
    """
    records = list(records)
    if not records:
        raise ConfigError("Products not found.")

    unsettled = [record for record in records if not record.is_settled]
    if not unsettled:
        raise ConfigError("Products without settings not found.")

    settled = [record for record in records if record.is_settled]
    if not settled:
        raise ConfigError("Products with settings not found.")

    return unsettled, settled


class SettingsMatcher:
    """
    Assigns settled records' settings to unsettled records with similar names.

    Each pair is checked against the configured metrics in order and accepted
    under the first metric whose value exceeds its threshold.
    """

    def __init__(
        self,
        config: MatcherConfig,
        validator: Optional[StringValidator] = None
    ):
        """
        Initialize the settings matcher.

        Args:
            config: Worker count (0 for CPU count) and ordered metric list
            validator: Metric evaluator (defaults to the library-backed one)
        """
        self.config = config
        self.metrics = config.metrics
        self.worker_count = config.worker_count if config.worker_count > 0 else cpu_count()
        self.validator = validator or StringValidator()

    def evaluate_pair(self, unsettled: Record, settled: Record) -> Optional[MatchResult]:
        """
        Decide whether two records name the same entity.

        Args:
            unsettled: Record looking for settings
            settled: Record offering its settings

        Returns:
            Optional[MatchResult]: Result under the first passing metric, or None
        """
        for metric in self.metrics:
            try:
                value = self.validator.compute(metric, unsettled.name, settled.name)
            except MetricEvaluationError as e:
                logger.info(
                    f"Product [{unsettled.name!r}] -> [{settled.name!r}]: "
                    f"{metric} (Error: {e.reason})"
                )
                continue

            logger.info(
                f"Product [{unsettled.name!r}] -> [{settled.name!r}]: "
                f"{metric} (Result: {value!r})"
            )

            if metric.passes(value):
                return MatchResult.from_pair(unsettled, settled)

        return None

    def _process_chunk(
        self,
        chunk: Sequence[Record],
        settled: Sequence[Record]
    ) -> List[MatchResult]:
        """Evaluate every pair in one block of the cross product."""
        results = []
        for unsettled in chunk:
            for candidate in settled:
                result = self.evaluate_pair(unsettled, candidate)
                if result is not None:
                    results.append(result)
        return results

    def _slices(self, records: Sequence[Record]) -> List[List[Record]]:
        count = min(self.worker_count, len(records))
        return [list(records[i::count]) for i in range(count)]

    def _work_units(
        self,
        unsettled: Sequence[Record],
        settled: Sequence[Record]
    ) -> List[Tuple[List[Record], List[Record]]]:
        """Split the cross product into blocks of unsettled and settled slices."""
        return [
            (unsettled_slice, settled_slice)
            for unsettled_slice in self._slices(unsettled)
            for settled_slice in self._slices(settled)
        ]

    def match_all(
        self,
        unsettled: Iterable[Record],
        settled: Iterable[Record],
        executor: Optional[Executor] = None
    ) -> List[MatchResult]:
        """
        Match every unsettled record against every settled record.

        Args:
            unsettled: Records without settings
            settled: Records with settings
            executor: Pool to run on; a thread pool sized to the configured
                worker count is created for the call when omitted

        Returns:
            List[MatchResult]: Accepted pairs in no particular order

        Raises:
            ConfigError: If either side is empty
            EmptyResultError: If no pair was accepted
        """
        unsettled = list(unsettled)
        settled = list(settled)
        if not unsettled:
            raise ConfigError("Products without settings not found.")
        if not settled:
            raise ConfigError("Products with settings not found.")

        start_time = time.time()
        logger.info(f"Products: {len(settled)} / {len(unsettled)}")

        if executor is None:
            with ThreadPoolExecutor(max_workers=self.worker_count) as pool:
                results = self._run(pool, unsettled, settled)
        else:
            results = self._run(executor, unsettled, settled)

        logger.info(
            f"Matching completed in {time.time() - start_time:.2f} seconds: "
            f"{len(results)} matches from {len(unsettled) * len(settled)} pairs"
        )

        if not results:
            raise EmptyResultError("Calculated products empty.")

        return results

    def _run(
        self,
        executor: Executor,
        unsettled: List[Record],
        settled: List[Record]
    ) -> List[MatchResult]:
        futures = [
            executor.submit(self._process_chunk, chunk, settled_slice)
            for chunk, settled_slice in self._work_units(unsettled, settled)
        ]
        return [result for future in futures for result in future.result()]

    def match_records(
        self,
        records: Iterable[Record],
        executor: Optional[Executor] = None
    ) -> List[MatchResult]:
        """Partition a mixed record collection and match the two sides."""
        unsettled, settled = partition_records(records)
        return self.match_all(unsettled, settled, executor=executor)
