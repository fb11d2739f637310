"""Match file paths recorded in different forms.

Snapshots usually key files by the path the tool was given (often relative to
the project), while tool results carry absolute paths. Lookups try a fixed
sequence of matchers, most precise first. The basename matcher can pick the
wrong file when two directories hold files with the same name; that is a
known limitation.
"""

import os
from typing import Callable, Iterable, Mapping, TypeVar

T = TypeVar("T")

Matcher = Callable[[str, str], bool]


def normalize(path: str) -> str:
    return os.path.normpath(path) if path else path


def basename(path: str) -> str:
    return os.path.basename(normalize(path))


def exact_match(candidate: str, target: str) -> bool:
    return candidate == target


def normalized_match(candidate: str, target: str) -> bool:
    return normalize(candidate) == normalize(target)


def basename_match(candidate: str, target: str) -> bool:
    return basename(candidate) == basename(target)


MATCHERS: tuple[Matcher, ...] = (exact_match, normalized_match, basename_match)


def resolve(
    mapping: Mapping[str, T],
    targets: Iterable[str],
    matchers: Iterable[Matcher] = MATCHERS,
) -> T | None:
    """Find the value whose key matches one of targets.

    Each matcher is tried against every target before the next, less
    precise, matcher is used.
    """
    targets = [t for t in targets if t]
    for matcher in matchers:
        for target in targets:
            for key, value in mapping.items():
                if matcher(key, target):
                    return value
    return None


def normalize_keys(mapping: Mapping[str, T]) -> dict[str, T]:
    """Re-key a mapping by normalized path.

    When several keys normalize to the same path, a key that was already in
    normal form wins; otherwise the first one seen does.
    """
    result: dict[str, T] = {}
    for key, value in mapping.items():
        norm = normalize(key)
        if norm not in result or key == norm:
            result[norm] = value
    return result
