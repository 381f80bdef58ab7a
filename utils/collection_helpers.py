"""
Collection helpers (utils/collection_helpers.py).

Stateless contracts over plain Python collections:
- single-element extraction with cardinality checks
- set coercion
- ordered mapping (plain and indexed)
- multimap insertion
- pre-sized placeholder lists
"""

from collections.abc import Set as AbstractSet
from typing import Any, Callable, Collection, Dict, Hashable, Iterable, List, Optional, TypeVar

from utils import reason_codes
from utils.errors import InvalidStateError

T = TypeVar('T')
S = TypeVar('S')


def get_any(collection: Collection[T]) -> T:
    """
    Return an arbitrary element of a non-empty collection.

    Raises:
        InvalidStateError: If the collection is empty.
    """
    for element in collection:
        return element
    raise InvalidStateError("Expected at least 1 element, found 0.", reason_codes.E_EMPTY)


def get_single(collection: Collection[T]) -> T:
    """
    Validate that there is exactly one element in the collection and return it.

    Raises:
        InvalidStateError: If the collection does not hold exactly one element.
    """
    size = len(collection)
    if size != 1:
        raise InvalidStateError(
            f"Expected exactly 1 element, found {size}.",
            reason_codes.E_NOT_SINGLE
        )
    return get_any(collection)


def get_single_or_null(collection: Collection[T]) -> Optional[T]:
    """
    Validate that there is at most one element in the collection.

    Returns:
        The element, or None if the collection is empty.

    Raises:
        InvalidStateError: If the collection holds more than one element.
    """
    size = len(collection)
    if size > 1:
        raise InvalidStateError(
            f"Expected 0 or 1 elements, found {size}.",
            reason_codes.E_TOO_MANY
        )
    return None if size == 0 else get_any(collection)


def as_set(collection: Iterable[T]) -> AbstractSet:
    """Return the collection itself if it already is a set, otherwise a new set of its elements."""
    if isinstance(collection, AbstractSet):
        return collection
    return set(collection)


def put(multimap: Dict[Hashable, List[T]], key: Hashable, value: T) -> Dict[Hashable, List[T]]:
    """
    Append value to the bucket of key, creating an empty bucket first if needed.

    Insertion order within a bucket is preserved; existing entries are never
    removed. The multimap is mutated in place and returned for chaining.
    """
    bucket = multimap.get(key)
    if bucket is None:
        bucket = []
        multimap[key] = bucket
    bucket.append(value)
    return multimap


def map_list(items: Iterable[S], fn: Callable[[S], T]) -> List[T]:
    """Return a new list with fn applied to each element, left to right."""
    return [fn(element) for element in items]


def map_indexed(items: Iterable[S], fn: Callable[[int, S], T]) -> List[T]:
    """Return a new list with fn(index, element) applied to each element, left to right."""
    return [fn(i, element) for i, element in enumerate(items)]


def create_null_filled_list(k: int) -> List[Any]:
    """
    Create a list of length k with every slot set to None.

    Slots can then be assigned by index in any order without resizing.
    """
    if k < 0:
        raise ValueError(f"List size must be >= 0, got {k}")
    return [None] * k
