from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import Guest


def filter_guests(guests: list[Guest], query: str | None) -> list[Guest]:
    """Keep guests whose name or catch phrase contains ``query``, ignoring case.

    The query is matched as typed, surrounding spaces included; only an empty
    query keeps everyone. A linear scan is fine at carnival scale.
    """
    if not query:
        return list(guests)
    needle = query.lower()
    return [g for g in guests if needle in g.name.lower() or needle in g.catch_phrase.lower()]
