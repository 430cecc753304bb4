"""
Identifier validation and representation reconciliation.

Records in the store carry their identifiers either as BSON ObjectIds
(canonical) or as the plain 24-character strings they were written with
(raw), depending on which client inserted them. Reads always use the
canonical form. Mutations keyed by identifiers walk a fixed, ordered list of
representation combinations and stop at the first one that matches.

Dependencies: bson (pymongo)
System role: Identifier shape validation and mutation filter resolution
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Sequence, TypeVar

from bson import ObjectId

from mflix_api.core.exceptions import InvalidIdentifierError

logger = logging.getLogger(__name__)

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

T = TypeVar("T")


class Representation(str, Enum):
    """How an identifier value is written into a filter."""

    CANONICAL = "canonical"
    RAW = "raw"


@dataclass(frozen=True)
class Identifier:
    """
    External identifier with its canonical form.

    Attributes:
        raw: Value exactly as received
        canonical: Lowercase 24-hex form, None when raw is not convertible
    """

    raw: str
    canonical: str | None

    @property
    def is_valid(self) -> bool:
        return self.canonical is not None

    def as_object_id(self) -> ObjectId:
        if self.canonical is None:
            raise InvalidIdentifierError(self.raw)
        return ObjectId(self.canonical)

    def represent(self, representation: Representation) -> ObjectId | str:
        """Value to place in a filter for the given representation."""
        if representation is Representation.CANONICAL:
            return self.as_object_id()
        return self.raw

    def __str__(self) -> str:
        return self.canonical or self.raw


def canonicalize(raw: Any) -> Identifier:
    """
    Compute the canonical form of a raw identifier. Never touches the store.

    Args:
        raw: Incoming identifier (str or ObjectId)

    Returns:
        Identifier: canonical is None when raw does not have the hex shape
    """
    if isinstance(raw, ObjectId):
        return Identifier(raw=str(raw), canonical=str(raw))
    if isinstance(raw, str) and OBJECT_ID_PATTERN.match(raw):
        return Identifier(raw=raw, canonical=raw.lower())
    return Identifier(raw="" if raw is None else str(raw), canonical=None)


def validate(raw: Any, field: str = "id") -> Identifier:
    """
    Validate an external identifier.

    Args:
        raw: Incoming identifier
        field: Parameter name reported on failure

    Returns:
        Identifier: Identifier with a canonical form

    Raises:
        InvalidIdentifierError: raw is not a 24-hex-character string
    """
    identifier = canonicalize(raw)
    if not identifier.is_valid:
        raise InvalidIdentifierError(raw, field)
    return identifier


# Order matters: the first entry is the direct canonical match.
TWO_FIELD_RESOLUTION_ORDER: tuple[tuple[Representation, Representation], ...] = (
    (Representation.CANONICAL, Representation.CANONICAL),
    (Representation.RAW, Representation.RAW),
    (Representation.CANONICAL, Representation.RAW),
    (Representation.RAW, Representation.CANONICAL),
)

SINGLE_FIELD_RESOLUTION_ORDER: tuple[tuple[Representation], ...] = (
    (Representation.CANONICAL,),
    (Representation.RAW,),
)


@dataclass(frozen=True)
class Resolution(Generic[T]):
    """
    Outcome of a successful resolution.

    Attributes:
        representations: Combination that matched
        filter: Filter built for that combination
        outcome: Value returned by the mutation attempt
    """

    representations: tuple[Representation, ...]
    filter: dict
    outcome: T


def build_filter(
    keys: Sequence[tuple[str, Identifier]],
    representations: Sequence[Representation],
) -> dict:
    """Build an equality filter writing each key in its representation."""
    return {
        field: identifier.represent(representation)
        for (field, identifier), representation in zip(keys, representations)
    }


def _default_count(outcome: Any) -> int:
    return int(outcome)


class IdentifierResolver:
    """Retries a mutation across identifier representations."""

    async def resolve_for_mutation(
        self,
        raw_a: Any,
        field_a: str,
        raw_b: Any,
        field_b: str,
        attempt: Callable[[dict], Awaitable[T]],
        count: Callable[[T], int] = _default_count,
    ) -> Resolution[T] | None:
        """
        Run a two-key mutation until one representation pair matches.

        Args:
            raw_a: First identifier (e.g. the comment's own id)
            field_a: Document field for raw_a (e.g. "_id")
            raw_b: Second identifier (e.g. the parent movie id)
            field_b: Document field for raw_b (e.g. "movie_id")
            attempt: Coroutine running the mutation for a filter
            count: Extracts the matched-record count from attempt's result

        Returns:
            Resolution | None: First matching combination, None if none matched

        Raises:
            InvalidIdentifierError: Either identifier is malformed
        """
        keys = [
            (field_a, validate(raw_a, field_a)),
            (field_b, validate(raw_b, field_b)),
        ]
        return await self._resolve(keys, TWO_FIELD_RESOLUTION_ORDER, attempt, count)

    async def resolve_single_for_update(
        self,
        raw: Any,
        field: str,
        attempt: Callable[[dict], Awaitable[T]],
        count: Callable[[T], int] = _default_count,
    ) -> Resolution[T] | None:
        """
        Run a single-key update, falling back from canonical to raw.

        Deletes by a single key never use this; they match canonically only.
        """
        keys = [(field, validate(raw, field))]
        return await self._resolve(keys, SINGLE_FIELD_RESOLUTION_ORDER, attempt, count)

    async def _resolve(
        self,
        keys: Sequence[tuple[str, Identifier]],
        order: Sequence[tuple[Representation, ...]],
        attempt: Callable[[dict], Awaitable[T]],
        count: Callable[[T], int],
    ) -> Resolution[T] | None:
        for position, representations in enumerate(order):
            filter_ = build_filter(keys, representations)
            outcome = await attempt(filter_)
            if count(outcome) > 0:
                if position > 0:
                    logger.warning(
                        "Identifier matched through fallback representation",
                        extra={
                            "fields": [field for field, _ in keys],
                            "representations": [r.value for r in representations],
                        },
                    )
                return Resolution(
                    representations=tuple(representations),
                    filter=filter_,
                    outcome=outcome,
                )
        logger.info(
            "No identifier representation matched",
            extra={"fields": [field for field, _ in keys], "attempts": len(order)},
        )
        return None


identifier_resolver = IdentifierResolver()
