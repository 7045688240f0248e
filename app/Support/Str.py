from __future__ import annotations

import re
from typing import Dict, Pattern


class Str:
    """Laravel-style string helper class."""

    # Cache for compiled swap patterns
    _patterns: Dict[str, Pattern[str]] = {}

    @staticmethod
    def lower(value: str) -> str:
        """Convert the given string to lower-case."""
        return value.lower()

    @staticmethod
    def upper(value: str) -> str:
        """Convert the given string to upper-case."""
        return value.upper()

    @staticmethod
    def title(value: str) -> str:
        """Convert the given string to title case."""
        return value.title()

    @staticmethod
    def ucfirst(string: str) -> str:
        """Make a string's first character uppercase."""
        if not string:
            return string
        return string[0].upper() + string[1:]

    @staticmethod
    def swap(subject: str, map_dict: Dict[str, str]) -> str:
        """
        Swap keywords in a string with other keywords in a single pass, so
        replacement text is never searched again.
        """
        if not map_dict:
            return subject

        # Longest keyword first so overlapping keywords resolve like strtr()
        keys = sorted(map_dict, key=len, reverse=True)
        cache_key = '\0'.join(keys)
        pattern = Str._patterns.get(cache_key)
        if pattern is None:
            pattern = re.compile('|'.join(re.escape(key) for key in keys))
            Str._patterns[cache_key] = pattern

        return pattern.sub(lambda match: map_dict[match.group(0)], subject)
