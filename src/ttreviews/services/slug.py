"""URL slug helpers for published catalog entries."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def generate_slug(name: str) -> str:
    """Lowercase, collapse every run of non-alphanumerics to ``-``, trim dashes."""
    return _NON_ALNUM.sub("-", name.lower()).strip("-")


def unique_slug(base_slug: str, taken: set[str]) -> str:
    """Return ``base_slug`` or the first free ``base_slug-N`` (N >= 2)."""
    if base_slug not in taken:
        return base_slug
    n = 2
    while f"{base_slug}-{n}" in taken:
        n += 1
    return f"{base_slug}-{n}"
