from __future__ import annotations

from typing import List, Optional, Sequence

from app.Support.Str import Str


class NameCase:
    """
    Properly cases personal names.

    Based on the approach described at
    http://www.media-division.com/correct-name-capitalization-in-php/
    (Liviu Niculescu, MIT License).
    """

    default_delimiters: List[str] = [
        ' ', '-', "O'", "O’", "L'", "L’", "D'", "D’", 'St.', 'Mc', 'Mac', '(', '"', '*', '.'
    ]

    default_force_lowercase: List[str] = [
        'the', 'van', 'den', 'von', 'und', 'der', 'de', 'da', 'of', 'and', "l'", "l’", "d'", "d’"
    ]

    default_force_uppercase: List[str] = [
        'II', 'III', 'IV', 'VI', 'VII', 'VIII', 'IX'
    ]

    @classmethod
    def format(
        cls,
        name: str,
        delimiters: Optional[Sequence[str]] = None,
        force_lowercase: Optional[Sequence[str]] = None,
        force_uppercase: Optional[Sequence[str]] = None,
    ) -> str:
        """
        Return a properly cased version of ``name``.

        Example: "MCLEOD" becomes "McLeod".

        The name is lowercased, then split on each delimiter in turn. Words in
        ``force_uppercase`` are uppercased, words not in ``force_lowercase``
        get their first letter capitalized, and a delimiter that is itself a
        forced-lowercase word is lowercased when the pieces are rejoined.
        """
        result = Str.lower(name)

        delimiters = cls.default_delimiters if delimiters is None else delimiters

        lowercase = cls.default_force_lowercase if force_lowercase is None else force_lowercase
        lowercase = [Str.lower(word) for word in lowercase]

        uppercase = cls.default_force_uppercase if force_uppercase is None else force_uppercase
        uppercase = [Str.upper(word) for word in uppercase]

        for delimiter in delimiters:
            words = []
            for word in result.split(delimiter):
                if Str.upper(word) in uppercase:
                    word = Str.upper(word)
                elif word not in lowercase:
                    word = Str.ucfirst(word)
                words.append(word)

            if Str.lower(delimiter) in lowercase:
                delimiter = Str.lower(delimiter)

            result = delimiter.join(words)

        return result
