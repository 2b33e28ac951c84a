# bus.py
import logging
from abc import ABC, abstractmethod
from enum import Enum

from events import Event

logger = logging.getLogger(__name__)


class Subscriber(ABC):
    """Anything that wants events delivered to it by the bus."""

    @abstractmethod
    def handle(self, event):
        ...


class MessageBus:
    """Synchronous in-process publish/subscribe dispatcher.

    The registry maps a category to the subscribers registered for it.
    Subscribers are tracked by reference identity, so registering the same
    object twice keeps a single entry while two equal-looking objects stay
    distinct. Delivery order among subscribers of one category is not part
    of the contract.
    """

    def __init__(self):
        self.subs = {}

    def subscribe(self, topic, subscriber):
        _check_topic(topic)
        _check_subscriber(subscriber)
        self.subs.setdefault(_key(topic), {})[id(subscriber)] = subscriber

    def unsubscribe(self, topic, subscriber):
        _check_topic(topic)
        registered = self.subs.get(_key(topic))
        if registered is None or registered.pop(id(subscriber), None) is None:
            logger.debug("unsubscribe(%s, %r): nothing registered", _key(topic), subscriber)

    def publish(self, event):
        if not isinstance(event, Event) or getattr(type(event), "category", None) is None:
            raise TypeError(f"cannot publish {type(event).__name__}, expected an Event")
        # copy: handlers may (un)subscribe or publish again while we iterate
        handlers = list(self.subs.get(_key(event.category), {}).values())
        for h in handlers:
            h.handle(event)

    def subscribers(self, topic):
        return tuple(self.subs.get(_key(topic), {}).values())

    def categories(self):
        return list(self.subs)

    def has_category(self, topic):
        return _key(topic) in self.subs


def _key(topic):
    # EventType members and their plain string values share one registry slot
    return topic.value if isinstance(topic, Enum) else topic


def _check_topic(topic):
    if not isinstance(topic, str) or not topic.strip():
        raise ValueError("topic must be a non-empty string")


def _check_subscriber(subscriber):
    if not callable(getattr(subscriber, "handle", None)):
        raise TypeError(f"{subscriber!r} has no handle(event) method")
