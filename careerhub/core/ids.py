"""Client-side identifier generation.

New content rows, uploaded assets and locally stored rows get their ids from an
injected generator so tests can swap in a deterministic one.
"""

import itertools
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def __call__(self) -> str: ...


def uuid4_ids() -> str:
    """Default generator: random UUID v4 as a string."""
    return str(uuid.uuid4())


class SequentialIds:
    """Deterministic generator yielding ``<prefix>-1``, ``<prefix>-2``, ..."""

    def __init__(self, prefix: str = "id") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"
