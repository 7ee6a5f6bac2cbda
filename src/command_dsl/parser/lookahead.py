"""
lookahead.py

PURPOSE: Single-item lookahead over a fallible "compute next" operation.
DEPENDENCIES: None (pure Python)

ARCHITECTURE NOTES:
Subclasses implement _compute_next(), returning the next item or
self._end_of_data() when nothing is left. The base class buffers at most
one item so callers can peek() before deciding whether to next().

States:
    NOT_READY -> READY -> NOT_READY ... -> DONE
Any exception raised by _compute_next() moves the iterator to FAILED,
and every later query raises IteratorFailedError.
"""

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Generic, TypeVar

T = TypeVar("T")


class IteratorFailedError(RuntimeError):
    """The iterator was queried again after a computation failed."""


class NoSuchElementError(LookupError):
    """next() or peek() was called with no item left."""


class LookaheadComputeError(RuntimeError):
    """Wraps an exception raised while computing the next item."""


class _State(Enum):
    READY = auto()  # Item computed, not yet returned
    NOT_READY = auto()  # Nothing buffered
    DONE = auto()  # End of data reached
    FAILED = auto()  # Computation raised; iterator is unusable


class LookaheadIterator(ABC, Generic[T]):
    """
    Lazy, finite, non-restartable sequence with one item of lookahead.

    Only has_next(), next() and peek() are part of the contract. The
    Python iterator protocol is provided on top of them.
    """

    def __init__(self) -> None:
        self._state = _State.NOT_READY
        self._next: T | None = None

    @abstractmethod
    def _compute_next(self) -> T | None:
        """Compute the next item, or return self._end_of_data()."""

    def _end_of_data(self) -> None:
        """Signal that no more items will be produced."""
        self._state = _State.DONE
        return None

    def _wrap_failure(self, exc: Exception) -> Exception:
        """Build the exception reported when _compute_next() raises."""
        return LookaheadComputeError("Exception whilst computing next value")

    def has_next(self) -> bool:
        if self._state is _State.FAILED:
            raise IteratorFailedError("Iterator used after a failed computation")
        if self._state is _State.DONE:
            return False
        if self._state is _State.READY:
            return True
        return self._try_to_compute_next()

    def _try_to_compute_next(self) -> bool:
        # Pessimistic until the computation returns
        self._state = _State.FAILED
        try:
            self._next = self._compute_next()
        except Exception as exc:
            failure = self._wrap_failure(exc)
            if failure is exc:
                raise
            raise failure from exc

        if self._state is not _State.DONE:
            self._state = _State.READY
            return True
        return False

    def next(self) -> T:
        """Return the buffered item and advance."""
        if not self.has_next():
            raise NoSuchElementError("No more items")
        self._state = _State.NOT_READY
        result = self._next
        self._next = None
        return result  # type: ignore[return-value]

    def peek(self) -> T:
        """Return the buffered item without advancing."""
        if not self.has_next():
            raise NoSuchElementError("No more items")
        return self._next  # type: ignore[return-value]

    def __iter__(self) -> "LookaheadIterator[T]":
        return self

    def __next__(self) -> T:
        if not self.has_next():
            raise StopIteration
        return self.next()
