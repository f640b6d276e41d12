"""
Completion candidate finalization.

Candidates offered to a shell are either "complete" (suffixed with a space so
the shell moves on to the next word) or "continuing" (a directory ending in a
path separator, left as-is so the user can keep typing the path).
"""
import os
import shlex


def finalize(candidates, /):
    """
    turn raw candidate values into shell completion words.

    - values needing shell quoting are quoted (e.g., "two words" -> "'two words'").
    - values ending in a path separator are kept unchanged.
    - every other value gets a trailing space.
    - order is preserved.
    """
    separators = tuple(filter(None, (os.sep, os.altsep)))
    words = []
    for candidate in candidates:
        candidate = str(candidate)
        if candidate.endswith(separators):
            words.append(candidate)
        else:
            words.append(shlex.quote(candidate) + " ")
    return words


__all__ = (
    "finalize",
)
