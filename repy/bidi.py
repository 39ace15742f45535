"""
Basic tooling for bidirectional (Hebrew + numbers) text.

REPY stores Hebrew in visual order: the characters appear in the order they
are drawn on a left-to-right screen. To get the logical (reading) order back
we reverse the text. Two flavors exist:

- plain_reverse / flip: reverse everything. Good enough for fields that a
  regex already isolated (names, words).
- reverse: reverse everything EXCEPT runs of numbers such as '3.14' or
  '1970-01-02', which keep their left-to-right digit order.

This is not the Unicode bidi algorithm; it only covers what REPY needs.
"""

from __future__ import annotations

import unicodedata
from typing import List


# Separators that stay inside a number run when followed by more digits
NEUTRAL_CHARS = "-./"

MIRRORED_CHARS = {"(": ")", ")": "("}


def plain_reverse(s: str) -> str:
    """
    Reverse a string character by character.
    """
    return s[::-1]


def flip(s: str) -> str:
    """
    Strip surrounding whitespace, then reverse.
    """
    return plain_reverse(s.strip())


def _is_number(ch: str) -> bool:
    return unicodedata.category(ch).startswith("N")


def reverse(s: str) -> str:
    """
    Reverse a visual-Hebrew string into logical order, keeping number runs
    (digits with embedded '-', '.', '/') in their original order.

        reverse("3.14 יאפ") == "פאי 3.14"
    """
    chars = list(s)

    main: List[str] = []
    number_run: List[str] = []

    in_run = False
    for i, ch in enumerate(chars):
        was_in_run = in_run

        if _is_number(ch):
            in_run = True
        elif ch in NEUTRAL_CHARS:
            # A neutral only continues a run that has more digits ahead
            in_run = in_run and any(_is_number(c) for c in chars[i + 1 :])
        else:
            in_run = False

        if was_in_run and not in_run:
            # Reversed here so that the final reversal restores it
            main.extend(reversed(number_run))
            number_run = []

        if in_run:
            number_run.append(ch)
        else:
            main.append(MIRRORED_CHARS.get(ch, ch))

    main.extend(reversed(number_run))
    return "".join(reversed(main))
