"""
Country Resolver - Maps free-text guesses to canonical countries.

Resolution is exact-match on the normalized form:
1. Normalize the input
2. Look up the alias table
3. Look up the normalized canonical display names
No fuzzy or partial matching.
"""

from __future__ import annotations
from dataclasses import dataclass
import re
import threading

from .aliases import ALIASES
from .countries import COUNTRY_ENTRIES, COUNTRIES_BY_ISO

_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[.,;:'\-()]")


@dataclass(frozen=True)
class ResolvedCountry:
    """A guess resolved to its canonical identity."""
    iso_code: str
    display_name: str


def normalize(text) -> str:
    """
    Normalize user input for matching.

    Trims, lowercases, collapses whitespace and strips common
    punctuation, so "  U.S.A. " and "usa" compare equal.
    Non-string input normalizes to "".
    """
    if not isinstance(text, str):
        return ""
    s = _WHITESPACE.sub(" ", text.strip().lower())
    s = _PUNCTUATION.sub("", s)
    return _WHITESPACE.sub(" ", s).strip()


_ALIAS_TABLE: dict[str, str] = {
    normalize(alias): iso for alias, iso in ALIASES.items()
}

_name_table_lock = threading.Lock()
_normalized_name_to_iso: dict[str, str] | None = None


def _name_table() -> dict[str, str]:
    """Normalized display name -> code, built once on first use."""
    global _normalized_name_to_iso
    if _normalized_name_to_iso is None:
        with _name_table_lock:
            if _normalized_name_to_iso is None:
                table: dict[str, str] = {}
                for iso, name in COUNTRY_ENTRIES:
                    key = normalize(name)
                    if key and key not in table:
                        table[key] = iso
                _normalized_name_to_iso = table
    return _normalized_name_to_iso


def _lookup(iso_code: str | None) -> ResolvedCountry | None:
    if not iso_code:
        return None
    name = COUNTRIES_BY_ISO.get(iso_code)
    if not name:
        return None
    return ResolvedCountry(iso_code=iso_code, display_name=name)


def resolve(text) -> ResolvedCountry | None:
    """
    Resolve user input to a canonical country.

    Returns None when the input matches neither an alias nor a
    canonical display name.
    """
    normalized = normalize(text)
    if not normalized:
        return None

    resolved = _lookup(_ALIAS_TABLE.get(normalized))
    if resolved:
        return resolved

    return _lookup(_name_table().get(normalized))


def check_gazetteer() -> list[str]:
    """
    Sanity-check the reference data.

    Returns a list of failure messages; empty when everything holds.
    """
    failures: list[str] = []

    for alias, iso in ALIASES.items():
        if iso not in COUNTRIES_BY_ISO:
            failures.append(f"alias {alias!r} points at unknown code {iso}")

    if len(COUNTRIES_BY_ISO) <= 150:
        failures.append(f"gazetteer too small: {len(COUNTRIES_BY_ISO)} entries")

    expectations = [
        ("USA", "US", "United States of America"),
        ("usa", "US", "United States of America"),
        ("U.S.A.", "US", "United States of America"),
        ("United States", "US", "United States of America"),
        ("UK", "GB", "United Kingdom"),
        ("Czech Republic", "CZ", "Czechia"),
        ("South Korea", "KR", "South Korea"),
    ]
    for text, iso, name in expectations:
        resolved = resolve(text)
        if resolved != ResolvedCountry(iso_code=iso, display_name=name):
            failures.append(f"resolve({text!r}) -> {resolved}, expected {iso} {name!r}")

    for text in ("", "Not a country"):
        if resolve(text) is not None:
            failures.append(f"resolve({text!r}) should be unresolved")

    for iso, name in COUNTRY_ENTRIES:
        resolved = resolve(name)
        if resolved is None or resolved.iso_code != iso:
            failures.append(f"display name {name!r} does not resolve to {iso}")

    return failures
