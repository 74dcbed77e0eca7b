"""
Tag helpers

Canonical slug form for every tag the engine compares, plus the light
keyword theme extraction used on free-text answers (no NLP).
"""

import re
from typing import Iterable, List, Tuple

from .constants import (
    THEME_KEYWORDS,
    SUBJECT_THEMES,
    STYLE_TAGS,
    HANDS_ON_TAGS,
)

_NON_WORD = re.compile(r"[^a-z0-9]+")
_TOKEN = re.compile(r"[a-z0-9]+")


def slugify(value: str) -> str:
    """'Computer Science' -> 'computer_science', '2-Year College' -> '2_year_college'."""
    return _NON_WORD.sub("_", str(value).strip().lower()).strip("_")


def canonical_tags(values: Iterable) -> Tuple[str, ...]:
    """Slug, drop empties, de-duplicate and sort so tag sets compare deterministically."""
    return tuple(sorted({slugify(v) for v in values if v is not None and slugify(v)}))


def tokenize(text: str) -> List[str]:
    if not text:
        return []
    return _TOKEN.findall(text.lower())


def extract_themes(*texts: str) -> Tuple[str, ...]:
    """
    Map free-text answers onto interest themes via THEME_KEYWORDS.

    A keyword matches a token exactly or with a trailing plural 's'
    ("patients" matches "patient").
    """
    tokens = set()
    for text in texts:
        for token in tokenize(text):
            tokens.add(token)
            if len(token) > 3 and token.endswith("s"):
                tokens.add(token[:-1])

    themes = [
        theme for theme, keywords in THEME_KEYWORDS.items()
        if any(keyword in tokens for keyword in keywords)
    ]
    return tuple(sorted(themes))


def profile_free_text(profile) -> Tuple[str, ...]:
    return (
        profile.free_text_interests,
        profile.free_text_experience,
        profile.free_text_impact,
        profile.free_text_inspiration,
        profile.personal_traits_other,
    )


def profile_interest_tags(profile) -> frozenset:
    """
    Everything the student signalled about what they like and who they are.

    Union of traits, subject strengths and the themes those subjects imply,
    free-text themes, the problem-solving style and a strong hands-on
    preference.
    """
    tags = set(profile.personal_traits)
    tags.update(profile.subjects_strengths)
    for subject in profile.subjects_strengths:
        tags.update(SUBJECT_THEMES.get(subject, []))
    tags.update(extract_themes(*profile_free_text(profile)))
    tags.update(STYLE_TAGS.get(profile.problem_solving_style, []))
    tags.update(HANDS_ON_TAGS.get(profile.hands_on_preference, []))
    return frozenset(tags)
