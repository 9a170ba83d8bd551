"""
Change Notification

The Note Store and the Quadrant Registry announce every mutation to
their listeners. The Persistence Gateway is the main listener: it
subscribes once and rewrites the matching blob on every change.

Listeners run synchronously, in subscription order, after the mutation
has been applied. An exception raised by a listener propagates to the
caller of the mutation.
"""

from typing import Callable


class Observable:
    """Mixin holding a list of change listeners."""

    def __init__(self):
        self._listeners: list[Callable] = []

    def subscribe(self, listener: Callable) -> Callable[[], None]:
        """
        Register a listener called with this object after each change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
