"""Abstract unit of work for the command store."""

from __future__ import annotations

from abc import ABC, abstractmethod


class UnitOfWork(ABC):

    @abstractmethod
    def commit(self) -> None:
        """Atomically persist every change staged since the last commit.

        Raises ConstraintViolationError if a unique index is violated;
        nothing is persisted in that case.
        """
