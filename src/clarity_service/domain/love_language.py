"""Love-language discovery from the onboarding quiz."""
from __future__ import annotations

from collections.abc import Iterable

from clarity_service.domain.value_objects.enums import LoveLanguage

DISCOVERY_CATEGORIES: tuple[LoveLanguage, ...] = (
    LoveLanguage.WORDS_OF_AFFIRMATION,
    LoveLanguage.QUALITY_TIME,
    LoveLanguage.ACTS_OF_SERVICE,
    LoveLanguage.PHYSICAL_TOUCH,
    LoveLanguage.GIFTS,
)

DISCOVERY_QUESTION_COUNT = 3


def determine_love_language(answers: Iterable[str]) -> LoveLanguage:
    """Return the most frequent category among ``answers``.

    Answers outside the five categories are ignored. Ties go to the category
    that comes first in ``DISCOVERY_CATEGORIES``; with no matching answer the
    result is words of affirmation.
    """
    counts = dict.fromkeys(DISCOVERY_CATEGORIES, 0)
    for answer in answers:
        if answer in counts:
            counts[LoveLanguage(answer)] += 1

    dominant = LoveLanguage.WORDS_OF_AFFIRMATION
    max_count = 0
    for language, count in counts.items():
        if count > max_count:
            max_count = count
            dominant = language
    return dominant
