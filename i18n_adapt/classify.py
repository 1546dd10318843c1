"""
Namespace classification of extracted phrases.

Each phrase is filed under exactly one Namespace by walking an ordered rule
list top to bottom; the first matching rule wins. The order is part of the
product behaviour: "Submit Error" lands in ``errors`` because the error rule
comes before the forms rule.

Namespace membership is not stable across releases if the rule list
changes, nor across runs if the phrase text changes. Callers that depend on
a fixed categorization must pin the rules they pass in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from i18n_adapt.models import Namespace


@dataclass(frozen=True)
class NamespaceRule:
    """One classification rule.

    A rule matches when the lower-cased phrase contains any of ``keywords``,
    or, for a length rule, when the phrase is shorter than ``max_length``.
    """
    namespace: Namespace
    keywords: tuple[str, ...] = ()
    max_length: Optional[int] = None

    def matches(self, phrase: str) -> bool:
        if self.keywords:
            lowered = phrase.lower()
            if any(keyword in lowered for keyword in self.keywords):
                return True
        if self.max_length is not None and len(phrase) < self.max_length:
            return True
        return False


DEFAULT_RULES: tuple[NamespaceRule, ...] = (
    NamespaceRule(Namespace.ERRORS, keywords=("error", "fail", "invalid")),
    NamespaceRule(Namespace.NAVIGATION, keywords=("home", "about", "contact")),
    NamespaceRule(Namespace.FORMS, keywords=("submit", "cancel", "save")),
    NamespaceRule(Namespace.MESSAGES, keywords=("loading", "success", "warning")),
    NamespaceRule(Namespace.COMMON, max_length=20),
)


class NamespaceClassifier:
    """Assigns phrases to namespaces using an ordered rule list.

    Usage:
        classifier = NamespaceClassifier()
        classifier.classify("Invalid email")   # Namespace.ERRORS
    """

    def __init__(
        self,
        rules: Sequence[NamespaceRule] = DEFAULT_RULES,
        fallback: Namespace = Namespace.COMPONENTS,
    ):
        self.rules = tuple(rules)
        self.fallback = fallback

    def classify(self, phrase: str) -> Namespace:
        for rule in self.rules:
            if rule.matches(phrase):
                return rule.namespace
        return self.fallback

    def bucket(self, phrases: Iterable[str]) -> dict[Namespace, list[str]]:
        """Group unique phrases by namespace.

        Every namespace is present in the result, in enumeration order, and
        phrases inside a bucket are sorted so the grouping does not depend
        on the iteration order of the input.
        """
        buckets: dict[Namespace, list[str]] = {ns: [] for ns in Namespace}
        for phrase in sorted(set(phrases)):
            buckets[self.classify(phrase)].append(phrase)
        return buckets


_default = NamespaceClassifier()


def classify(phrase: str) -> Namespace:
    """Classify with the default rule list."""
    return _default.classify(phrase)
