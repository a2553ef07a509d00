"""
Gazetteer - Country reference data and free-text resolution.

Read-only reference data plus the resolver that interprets guesses.
No dependency on the game engine.
"""

from .countries import COUNTRY_ENTRIES, COUNTRIES_BY_ISO, country_codes, display_name
from .aliases import ALIASES
from .resolver import ResolvedCountry, normalize, resolve, check_gazetteer

__all__ = [
    "COUNTRY_ENTRIES",
    "COUNTRIES_BY_ISO",
    "ALIASES",
    "ResolvedCountry",
    "country_codes",
    "display_name",
    "normalize",
    "resolve",
    "check_gazetteer",
]
