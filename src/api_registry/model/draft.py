"""Shared lifecycle of mutable definition drafts."""

from api_registry.errors import DraftConsumedError


class Draft:
    """A mutable definition that is published exactly once.

    Once the owning controller is finalized, every setter and every further
    finalization attempt raises DraftConsumedError.
    """

    _consumed = False

    def _check_open(self) -> None:
        if self._consumed:
            raise DraftConsumedError(f"{self} has already been published and can no longer be changed")

    def _consume(self) -> None:
        self._check_open()
        self._consumed = True

    def _discard(self) -> None:
        self._consumed = True
