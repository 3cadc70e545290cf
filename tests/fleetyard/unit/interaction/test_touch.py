from fleetyard.engine.api.input_events import TouchPoint
from fleetyard.game.core.models import Cell
from fleetyard.game.interaction.events import TouchEventKind
from fleetyard.game.interaction.gestures import SwipeDirection
from fleetyard.game.interaction.touch import TouchInteractionManager


def _tap(touch: TouchInteractionManager, clock, cell: Cell, hold_ms: float = 80):
    touch.handle_touch_start(cell, TouchPoint(60, 60))
    clock.advance(hold_ms)
    return touch.handle_touch_end(cell, TouchPoint(61, 60))


def test_touch_end_on_start_cell_is_tap(clock) -> None:
    touch = TouchInteractionManager(time_source=clock)
    event = _tap(touch, clock, Cell(1, 1))
    assert event.kind is TouchEventKind.TAP
    assert event.cell == Cell(1, 1)
    assert touch.active_gesture is None


def test_second_quick_tap_is_double_tap(clock) -> None:
    touch = TouchInteractionManager(time_source=clock)
    _tap(touch, clock, Cell(1, 1))
    clock.advance(100)
    assert _tap(touch, clock, Cell(1, 1)).kind is TouchEventKind.DOUBLE_TAP


def test_held_tap_is_long_press(clock) -> None:
    touch = TouchInteractionManager(time_source=clock)
    assert _tap(touch, clock, Cell(1, 1), hold_ms=600).kind is TouchEventKind.LONG_PRESS


def test_fast_long_move_to_other_cell_is_swipe(clock) -> None:
    touch = TouchInteractionManager(time_source=clock)
    touch.handle_touch_start(Cell(1, 1), TouchPoint(60, 60))
    clock.advance(120)
    event = touch.handle_touch_end(Cell(4, 1), TouchPoint(180, 62))
    assert event.kind is TouchEventKind.SWIPE
    assert event.direction is SwipeDirection.RIGHT
    assert event.start_cell == Cell(1, 1)


def test_drag_emits_start_moves_and_end(clock) -> None:
    touch = TouchInteractionManager(time_source=clock)
    touch.handle_touch_start(Cell(1, 1), TouchPoint(60, 60))
    clock.advance(50)
    assert touch.handle_touch_move(Cell(1, 1), TouchPoint(64, 60)) is None
    start = touch.handle_touch_move(Cell(1, 1), TouchPoint(75, 60))
    move = touch.handle_touch_move(Cell(2, 1), TouchPoint(95, 60))
    clock.advance(400)
    end = touch.handle_touch_end(Cell(3, 1), TouchPoint(130, 60))
    assert start.kind is TouchEventKind.DRAG_START
    assert start.cell == Cell(1, 1)
    assert move.kind is TouchEventKind.DRAG_MOVE
    assert move.cell == Cell(2, 1)
    assert end.kind is TouchEventKind.DRAG_END
    assert end.cell == Cell(3, 1)
    assert end.start_cell == Cell(1, 1)


def test_fast_release_after_drag_started_still_ends_drag(clock) -> None:
    touch = TouchInteractionManager(time_source=clock)
    touch.handle_touch_start(Cell(1, 1), TouchPoint(60, 60))
    touch.handle_touch_move(Cell(2, 1), TouchPoint(90, 60))
    clock.advance(100)
    assert touch.handle_touch_end(Cell(4, 1), TouchPoint(180, 60)).kind is TouchEventKind.DRAG_END


def test_drag_released_on_start_cell_ends_drag_not_tap(clock) -> None:
    touch = TouchInteractionManager(time_source=clock)
    touch.handle_touch_start(Cell(2, 0), TouchPoint(100, 20))
    start = touch.handle_touch_move(Cell(2, 0), TouchPoint(115, 20))
    clock.advance(80)
    end = touch.handle_touch_end(Cell(2, 0), TouchPoint(115, 20))
    assert start.kind is TouchEventKind.DRAG_START
    assert end.kind is TouchEventKind.DRAG_END
    assert end.cell == Cell(2, 0)
    assert end.start_cell == Cell(2, 0)
    clock.advance(50)
    assert _tap(touch, clock, Cell(2, 0)).kind is TouchEventKind.TAP


def test_touch_end_without_start_emits_nothing(clock) -> None:
    touch = TouchInteractionManager(time_source=clock)
    assert touch.handle_touch_end(Cell(0, 0), TouchPoint(0, 0)) is None
    assert touch.handle_touch_move(Cell(0, 0), TouchPoint(50, 0)) is None


def test_gesture_is_consumed_once(clock) -> None:
    touch = TouchInteractionManager(time_source=clock)
    _tap(touch, clock, Cell(2, 2))
    assert touch.handle_touch_end(Cell(2, 2), TouchPoint(100, 100)) is None
