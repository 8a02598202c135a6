"""Identifier generation for sections and items."""

import time
from typing import Iterable

_last_issued = 0


def new_id(existing: Iterable[str] = ()) -> str:
    """
    Issue a fresh identifier.

    Ids are millisecond wall-clock stamps, strictly increasing within the
    process even when several are issued in the same millisecond, and bumped
    past any id already present in the target container.

    Args:
        existing: Ids already used in the container the new entry joins

    Returns:
        Decimal string id
    """
    global _last_issued

    taken = set(existing)
    candidate = max(int(time.time() * 1000), _last_issued + 1)
    while str(candidate) in taken:
        candidate += 1

    _last_issued = candidate
    return str(candidate)
