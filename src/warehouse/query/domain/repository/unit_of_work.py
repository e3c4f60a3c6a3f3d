"""Abstract unit of work for the replica store."""

from __future__ import annotations

from abc import ABC, abstractmethod


class UnitOfWork(ABC):

    @abstractmethod
    def commit(self) -> None:
        """Atomically persist every staged change, or raise and persist nothing."""
