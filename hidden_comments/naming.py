from __future__ import annotations

from typing import Collection

from .constants import MAX_SEQUENCE
from .errors import NamingExhaustedError


def candidate_name(host_file_name: str, prefix: str, sequence: int) -> str:
    return f"{prefix}{sequence}-{host_file_name}"


def next_name(
    host_file_name: str,
    prefix: str,
    existing_names: Collection[str],
    *,
    bound: int = MAX_SEQUENCE,
) -> str:
    """
    Return the comment file name with the smallest free sequence number.

    Candidates are `<prefix><n>-<host>` for n = 1..bound; raises
    NamingExhaustedError when every candidate is taken.
    """
    taken = existing_names if isinstance(existing_names, (set, frozenset)) else set(existing_names)
    for sequence in range(1, bound + 1):
        name = candidate_name(host_file_name, prefix, sequence)
        if name not in taken:
            return name
    raise NamingExhaustedError(host_file_name, prefix, bound)


__all__ = [
    "candidate_name",
    "next_name",
]
