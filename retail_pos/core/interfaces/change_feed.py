"""Change notification interface for read-side caches."""

from abc import ABC, abstractmethod
from collections.abc import Callable

ChangeListener = Callable[[str, int], None]


class IChangeFeed(ABC):
    """Monotonic data version plus subscriber callbacks.

    Readers either poll `version` or subscribe to be told when it moves.
    """

    @property
    @abstractmethod
    def version(self) -> int:
        pass

    @abstractmethod
    def notify(self, topic: str) -> int:
        """Record a change to `topic` and return the new version."""
        pass

    @abstractmethod
    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a listener; returns a function that unsubscribes it."""
        pass
