"""Fuzzy path matching for quick open.

Scoring is a single greedy left-to-right pass: each query character binds to
the first matching target character at or after the cursor. This is not an
optimal subsequence alignment; ``score("ab", "aXbXab")`` binds to positions
0 and 2, never 4 and 5. Existing rankings depend on it, so keep it greedy.

Per matched character:

====================================================  =====
base                                                  +1
directly follows the previous match                   +4
preceded by ``/``, ``.``, ``-`` or ``_``              +3
uppercase after a non-uppercase char (camelCase)      +2
first character of the target                         +5
====================================================  =====

Every unmatched target character scanned after the first match costs 1, so
wide gaps cost more than narrow ones.
"""

from __future__ import annotations

from collections.abc import Iterable
from operator import attrgetter

from fileseek.config.constants import MAX_SEARCH_RESULTS
from fileseek.search.models import MatchResult, filename_of

_BASE_SCORE = 1
_CONSECUTIVE_BONUS = 4
_BOUNDARY_BONUS = 3
_CAMEL_CASE_BONUS = 2
_START_BONUS = 5
_GAP_PENALTY = 1
_LENGTH_PENALTY_DIVISOR = 10

_WORD_BOUNDARIES = frozenset("/.-_")

_Scored = tuple[int, tuple[int, ...]]


def _fold(query: str) -> tuple[str, ...]:
    # Per character, the same way target characters are compared, so a
    # character whose lowercase form is longer still matches one position
    return tuple(char.lower() for char in query)


def _score(query: tuple[str, ...], target: str) -> _Scored | None:
    """Score a folded query against ``target``."""
    if len(target) < len(query):
        return None

    total = 0
    indices: list[int] = []
    prev_match = -2  # so position 0 never counts as consecutive
    qi = 0

    for ti, char in enumerate(target):
        if qi == len(query):
            break
        if char.lower() == query[qi]:
            gain = _BASE_SCORE
            if ti == prev_match + 1:
                gain += _CONSECUTIVE_BONUS
            if ti > 0:
                before = target[ti - 1]
                if before in _WORD_BOUNDARIES:
                    gain += _BOUNDARY_BONUS
                if char.isupper() and not before.isupper():
                    gain += _CAMEL_CASE_BONUS
            else:
                gain += _START_BONUS
            total += gain
            indices.append(ti)
            prev_match = ti
            qi += 1
        elif qi > 0:
            total -= _GAP_PENALTY

    if qi < len(query):
        return None
    return total, tuple(indices)


def score(query: str, target: str) -> MatchResult | None:
    """Score ``query`` against a single target string.

    Matching ignores case; the camelCase bonus looks at the target's original
    casing only. Returns None when some query character cannot be matched or
    the query is empty.
    """
    needle = _fold(query)
    if not needle:
        return None
    scored = _score(needle, target)
    if scored is None:
        return None
    return MatchResult(path=target, score=scored[0], matched_indices=scored[1])


def rank(
    query: str,
    candidates: Iterable[str],
    max_results: int = MAX_SEARCH_RESULTS,
) -> list[MatchResult]:
    """Rank candidate paths against ``query``, best first.

    Each path is scored twice, on its filename and on the whole path, and the
    better score wins (ties go to the filename). Filename indices are shifted
    so they always point into the full path. ``len(path) // 10`` is then
    subtracted so shallow paths win among equals.

    Order among equal scores is unspecified.
    """
    needle = _fold(query)
    if not needle or max_results <= 0:
        return []

    results: list[MatchResult] = []
    for path in candidates:
        filename = filename_of(path)
        by_name = _score(needle, filename)
        by_path = by_name if filename == path else _score(needle, path)

        if by_name is not None and (by_path is None or by_name[0] >= by_path[0]):
            offset = len(path) - len(filename)
            best = (by_name[0], tuple(i + offset for i in by_name[1]))
        elif by_path is not None:
            best = by_path
        else:
            continue

        results.append(
            MatchResult(
                path=path,
                score=best[0] - len(path) // _LENGTH_PENALTY_DIVISOR,
                matched_indices=best[1],
            )
        )

    results.sort(key=attrgetter("score"), reverse=True)
    return results[:max_results]
