"""
Single-slot broadcast cell used to push data source changes to observers.
"""

from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

Observer = Callable[[T], None]

# Marks a subject that has never been given a value. None is a real value.
_NO_VALUE = object()


class Subject(Generic[T]):
    """
    Holds the latest value of type T and fans it out to observers.

    - ``subscribe`` replays the current value (if any) to the new observer
      before returning.
    - ``set_value`` stores the value, then calls every observer synchronously
      in subscription order.

    Observers run on the caller's stack. An observer must not call
    ``set_value`` on the same subject while it is being notified.
    """

    def __init__(self) -> None:
        self._value = _NO_VALUE
        self._observers: List[Observer] = []

    @property
    def has_value(self) -> bool:
        return self._value is not _NO_VALUE

    def get_value(self) -> T:
        """
        Return the current value.

        Raises:
            LookupError: If no value has been set yet.
        """
        if self._value is _NO_VALUE:
            raise LookupError("Subject has no value yet.")
        return self._value  # type: ignore[return-value]

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register ``observer`` and replay the current value to it.

        Returns:
            Callable[[], None]: Removes this one registration when called.
            Calling it more than once is harmless.
        """
        self._observers.append(observer)
        subscribed = True
        if self._value is not _NO_VALUE:
            observer(self._value)

        def unsubscribe() -> None:
            nonlocal subscribed
            if subscribed:
                subscribed = False
                self._observers.remove(observer)

        return unsubscribe

    def set_value(self, value: T) -> None:
        self._value = value
        # Snapshot so an observer can unsubscribe itself mid-delivery.
        for observer in tuple(self._observers):
            observer(value)

    @property
    def observer_count(self) -> int:
        return len(self._observers)
