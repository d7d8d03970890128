"""In-process data version counter used to invalidate read-side caches."""

from collections.abc import Callable

from retail_pos.config import get_logger
from retail_pos.core.interfaces.change_feed import ChangeListener, IChangeFeed

logger = get_logger(__name__)

# Topics bumped by write paths
TOPIC_INVOICES = "invoices"
TOPIC_PRODUCTS = "products"
TOPIC_EXPENSES = "expenses"


class DataChangeFeed(IChangeFeed):
    """
    Monotonic version counter with synchronous listeners.

    Write paths call `notify` after their transaction commits. Dashboards
    key their caches on `version`, so a bump is enough to invalidate them.
    """

    def __init__(self) -> None:
        self._version = 0
        self._listeners: list[ChangeListener] = []

    @property
    def version(self) -> int:
        return self._version

    def notify(self, topic: str) -> int:
        self._version += 1
        logger.debug("data_changed", topic=topic, version=self._version)
        for listener in list(self._listeners):
            try:
                listener(topic, self._version)
            except Exception as e:
                # The write has already committed; a listener cannot undo it.
                logger.warning(
                    "change_listener_failed",
                    topic=topic,
                    listener=getattr(listener, "__name__", repr(listener)),
                    error=str(e),
                )
        return self._version

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


# Global change feed
_feed: DataChangeFeed | None = None


def get_change_feed() -> DataChangeFeed:
    """Get or create the process-wide change feed."""
    global _feed
    if _feed is None:
        _feed = DataChangeFeed()
    return _feed


def reset_change_feed() -> None:
    """Reset the change feed (for testing)."""
    global _feed
    _feed = None
