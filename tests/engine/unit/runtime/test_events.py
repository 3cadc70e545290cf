from __future__ import annotations

from dataclasses import dataclass

from fleetyard.engine.api.events import Subscription, create_event_bus
from fleetyard.engine.runtime.events import EventBus


@dataclass(frozen=True, slots=True)
class BaseEvent:
    name: str


@dataclass(frozen=True, slots=True)
class DerivedEvent(BaseEvent):
    code: int


def test_event_bus_publish_invokes_subscribers() -> None:
    bus = EventBus()
    seen: list[str] = []
    bus.subscribe(BaseEvent, lambda event: seen.append(event.name))

    invoked = bus.publish(BaseEvent(name="hello"))

    assert invoked == 1
    assert seen == ["hello"]


def test_event_bus_supports_polymorphic_subscription() -> None:
    bus = EventBus()
    seen: list[str] = []
    bus.subscribe(BaseEvent, lambda event: seen.append(event.name))

    invoked = bus.publish(DerivedEvent(name="child", code=42))

    assert invoked == 1
    assert seen == ["child"]


def test_event_bus_ignores_unrelated_event_types() -> None:
    bus = EventBus()
    seen: list[str] = []
    bus.subscribe(DerivedEvent, lambda event: seen.append(event.name))

    assert bus.publish(BaseEvent(name="base")) == 0
    assert seen == []


def test_event_bus_unsubscribe_stops_dispatch() -> None:
    bus = EventBus()
    seen: list[str] = []
    subscription = bus.subscribe(BaseEvent, lambda event: seen.append(event.name))
    bus.unsubscribe(subscription)

    invoked = bus.publish(BaseEvent(name="ignored"))

    assert invoked == 0
    assert seen == []
    assert bus.subscriber_count() == 0


def test_event_bus_dispatches_in_subscription_order() -> None:
    bus = create_event_bus()
    order: list[int] = []
    tokens = [bus.subscribe(BaseEvent, lambda event, index=index: order.append(index)) for index in range(3)]
    bus.publish(BaseEvent(name="x"))
    assert order == [0, 1, 2]
    assert all(isinstance(token, Subscription) for token in tokens)
    assert len({token.id for token in tokens}) == 3


def test_unsubscribe_during_publish_does_not_skip_current_round() -> None:
    bus = EventBus()
    seen: list[str] = []
    second: list[Subscription] = []
    bus.subscribe(BaseEvent, lambda event: bus.unsubscribe(second[0]))
    second.append(bus.subscribe(BaseEvent, lambda event: seen.append(event.name)))

    assert bus.publish(BaseEvent(name="first")) == 2
    assert bus.publish(BaseEvent(name="second")) == 1
    assert seen == ["first"]


def test_unsubscribe_unknown_token_is_noop() -> None:
    bus = EventBus()
    bus.unsubscribe(Subscription(99))
    assert bus.subscriber_count() == 0
