"""Example usage of the settings matching system with JSON files."""

import logging
from pathlib import Path
from typing import List, Optional

from settings_matcher.config.loader import init_config, init_records, write_output
from settings_matcher.config.models import (
    MatcherConfig,
    MatchResult,
    MetricKind,
    MetricSpec
)
from settings_matcher.core import matcher


def create_strict_matcher(worker_count: int = 4) -> matcher.SettingsMatcher:
    """
    Create a matcher that only trusts normalized similarity scores.

    Args:
        worker_count: Number of worker threads

    Returns:
        SettingsMatcher: Configured matcher instance
    """
    config = MatcherConfig(
        worker_count=worker_count,
        metrics=[
            MetricSpec(MetricKind.JARO_WINKLER, 0.95),
            MetricSpec(MetricKind.NORMALIZED_DAMERAU_LEVENSHTEIN, 0.9),
            MetricSpec(MetricKind.SORENSEN_DICE, 0.85),
        ]
    )
    return matcher.SettingsMatcher(config)


def match_json_files(
    records_file: Path,
    config_file: Optional[Path] = None,
    output_file: Optional[Path] = None
) -> List[MatchResult]:
    """
    Match products from a JSON file and optionally save the results.

    Args:
        records_file: Path to products file
        config_file: Optional settings file; the strict matcher is used if omitted
        output_file: Optional path for output JSON file

    Returns:
        List[MatchResult]: Accepted matches
    """
    try:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(levelname)s - %(message)s'
        )

        if config_file:
            settings_matcher = matcher.SettingsMatcher(init_config(config_file))
        else:
            settings_matcher = create_strict_matcher()

        logging.info(f"Reading products file: {records_file}")
        records = init_records(records_file)

        results = settings_matcher.match_records(records)

        matched_ids = {result.identifier for result in results}
        logging.info("\nMatching Statistics:")
        logging.info(f"Total products: {len(records)}")
        logging.info(f"Matches: {len(results)}")
        logging.info(f"Products that received settings: {len(matched_ids)}")

        if output_file:
            logging.info(f"\nSaving results to: {output_file}")
            write_output(results, output_file)

        return results

    except Exception as e:
        logging.error(f"An error occurred: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    results = match_json_files(
        records_file=Path('data/products.json'),
        output_file=Path('data/output.json')
    )
