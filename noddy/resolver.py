"""Matching free-text app names against the registry."""

import logging
from typing import Mapping, NamedTuple

from noddy.errors import AppNotFound, InvalidInput
from noddy.models import AppRegistry
from noddy.registry import normalize_app_name


logger = logging.getLogger(__name__)

MIN_SUBSTRING_QUERY_LENGTH = 4
PREFIX_SCORE = 2000
SUBSTRING_SCORE = 1000

SHELL_METACHARACTERS = set("&|><;\"'")


class Match(NamedTuple):
    key: str
    path: str
    score: int


def find_best_match(
    query: str,
    apps: Mapping[str, str],
    min_substring_length: int = MIN_SUBSTRING_QUERY_LENGTH
) -> Match | None:
    """
    Fuzzy-match a normalized query against registry keys.
    
    Prefix matches score 2000 + key length; substring matches (only for
    queries of at least ``min_substring_length`` characters) score
    1000 + key length. Keys are scanned in registry insertion order and
    ties keep the first key seen.
    """
    best: Match | None = None
    for key, path in apps.items():
        if key.startswith(query):
            score = PREFIX_SCORE + len(key)
        elif len(query) >= min_substring_length and query in key:
            score = SUBSTRING_SCORE + len(key)
        else:
            continue
        if best is None or score > best.score:
            best = Match(key, path, score)
    return best


def resolve(
    query: str,
    registry: AppRegistry,
    min_substring_length: int = MIN_SUBSTRING_QUERY_LENGTH
) -> str:
    """
    Resolve a free-text app name to an executable path.
    
    Exact normalized-key lookups win outright; otherwise the best prefix or
    substring match is used.
    
    Raises:
        AppNotFound: If nothing in the registry matches
    """
    normalized = normalize_app_name(query)
    
    path = registry.apps.get(normalized)
    if path is not None:
        logger.info("Resolved '%s' (exact match): %s", query, path)
        return path
    
    # An empty key prefixes everything; treat symbol-only queries as no match
    if normalized:
        match = find_best_match(normalized, registry.apps, min_substring_length)
        if match is not None:
            logger.info("Resolved '%s' (fuzzy match '%s'): %s", query, match.key, match.path)
            return match.path
    
    raise AppNotFound(f"Unknown app: {query}")


def sanitize_native_name(name: str) -> str:
    """
    Validate a bare app name before it is handed to the OS shell.
    
    Only ASCII letters, digits and spaces are accepted.
    
    Raises:
        InvalidInput: If the name is empty or contains other characters
    """
    trimmed = name.strip()
    if not trimmed:
        raise InvalidInput("Empty app name")
    if any(c in SHELL_METACHARACTERS for c in trimmed):
        raise InvalidInput("Invalid characters in app name")
    if not all((c.isascii() and c.isalnum()) or c == " " for c in trimmed):
        raise InvalidInput("Invalid characters in app name")
    return trimmed
