"""
Misspelling suggestions for unknown task names.

distance() is the classic Levenshtein edit distance: insertions, deletions
and substitutions each cost 1, comparison is case-sensitive and there is no
discount for transpositions.
"""
from .utils import Unset, coalesce

THRESHOLD = 4


def distance(s, t, /):
    """edit distance between s and t, computed row by row."""
    if len(s) < len(t):
        s, t = t, s
    previous = list(range(len(t) + 1))
    for i, a in enumerate(s, 1):
        current = [i]
        for j, b in enumerate(t, 1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (a != b),
            ))
        previous = current
    return previous[-1]


def _shorten(name, prefix):
    if prefix and name.startswith(prefix + "."):
        return name[len(prefix) + 1:]
    return name


def suggestions(task, tasks, /, prefix=Unset, threshold=THRESHOLD):
    """
    names from tasks closest to task.

    each name is compared without its namespace prefix. all names sharing the
    minimum distance are returned in sorted order, provided that minimum does
    not exceed threshold; otherwise the result is empty.
    """
    distances = {
        name: distance(name, task)
        for name in map(lambda name: _shorten(name, coalesce(prefix, "")), tasks)
    }
    if not distances:
        return []
    closest = min(distances.values())
    if closest > threshold:
        return []
    return sorted(name for name, value in distances.items() if value == closest)


__all__ = (
    "THRESHOLD",
    "distance",
    "suggestions",
)
