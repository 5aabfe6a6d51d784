"""Ordered repository writes with undo on failure.

A payment touches several collections (payments, invoices, ledger). Each
write is paired with an undo action; when a later write raises
``PersistenceError`` the completed writes are undone in reverse order and
the original error is re-raised.
"""

from collections.abc import Callable

from unctico_billing.domain.errors import PersistenceError


class CompensatingWrites:
    """Run writes in order and undo the completed ones on failure."""

    def __init__(self, logger) -> None:
        self._logger = logger
        self._undo_steps: list[tuple[str, Callable[[], None]]] = []

    def run(
        self,
        label: str,
        write: Callable[[], None],
        undo: Callable[[], None],
    ) -> None:
        """Execute ``write`` and remember ``undo`` for rollback.

        Raises:
            PersistenceError: Re-raised after completed writes are undone.
        """
        try:
            write()
        except PersistenceError as exc:
            self._logger.error(f"Failed to persist {label}: {exc}")
            self.rollback()
            raise
        self._undo_steps.append((label, undo))

    def rollback(self) -> None:
        while self._undo_steps:
            label, undo = self._undo_steps.pop()
            try:
                undo()
            except PersistenceError as exc:
                self._logger.critical(
                    f"Could not undo {label}; storage may be inconsistent: "
                    f"{exc}"
                )


__all__ = ["CompensatingWrites"]
