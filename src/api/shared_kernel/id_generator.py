"""Unique identifier generation shared across bounded contexts.

Record identifiers are opaque strings made of a short kind prefix and a
ULID (e.g. ``tm_01HN3XQ7K2XYZ123456789ABCD``). Generation is behind a
protocol so that callers can inject a deterministic generator in tests.

This is part of the Shared Kernel - changes here affect multiple contexts.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ulid import ULID


@runtime_checkable
class IdGenerator(Protocol):
    """Produces collision-resistant identifiers for new records."""

    def new_id(self, prefix: str) -> str:
        """Return a fresh identifier for a record of the given kind.

        Args:
            prefix: Short record kind (e.g. "tm", "ws"). Must be non-empty.

        Returns:
            A unique identifier of the form ``{prefix}_{unique_part}``
        """
        ...


class UlidIdGenerator:
    """Default IdGenerator backed by ULIDs.

    ULIDs sort by creation time and carry 80 bits of randomness per
    millisecond, which makes collisions between concurrent requests
    negligible without any coordination.
    """

    def new_id(self, prefix: str) -> str:
        """Return ``{prefix}_{ULID}``.

        Raises:
            ValueError: If prefix is empty or whitespace-only
        """
        prefix_stripped = prefix.strip() if prefix else ""
        if not prefix_stripped:
            raise ValueError("prefix must not be empty or whitespace-only")

        return f"{prefix_stripped}_{ULID()}"
