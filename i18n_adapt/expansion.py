"""
Text expansion analysis.

Translations are often longer than their English sources (German and
Russian commonly run 30% longer), which can overflow buttons and labels
sized for English. This module compares lengths so the operator can see
which strings put layouts at risk.
"""

from __future__ import annotations

from typing import Sequence

from i18n_adapt.models import ExpansionEntry, ExpansionReport

# Flag translations more than 50% longer than the source
CRITICAL_FACTOR = 1.5

# Very short sources (e.g. "OK") expand wildly without mattering
MIN_SOURCE_LENGTH = 5


def analyze_expansion(
    sources: Sequence[str],
    translations: Sequence[str],
    language: str,
    threshold: float = CRITICAL_FACTOR,
    min_length: int = MIN_SOURCE_LENGTH,
) -> ExpansionReport:
    """Compare source and translated lengths pairwise.

    Pairs with a missing or empty translation are skipped. The overall
    factor is total translated length over total source length, rounded to
    two decimals.
    """
    report = ExpansionReport(language=language)

    for index, source in enumerate(sources):
        translated = translations[index] if index < len(translations) else None
        if not translated or not source:
            continue

        factor = len(translated) / len(source)
        report.total_source_length += len(source)
        report.total_translated_length += len(translated)

        if factor > threshold and len(source) > min_length:
            report.critical.append(
                ExpansionEntry(source=source, translated=translated, factor=round(factor, 2))
            )

    if report.total_source_length > 0:
        report.expansion_factor = round(
            report.total_translated_length / report.total_source_length, 2
        )

    return report
