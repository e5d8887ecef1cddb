"""
Tests for loop.py - timing, input handling and rendering cadence.
"""

import pytest

from termsnake.errors import FrontendError
from termsnake.game import Direction, Phase, Position
from termsnake.loop import GameLoop, Key

from conftest import make_state


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now


class ScriptedKeys:
    """Returns scripted keys, letting the fake clock run for each wait."""

    def __init__(self, clock, script):
        self.clock = clock
        self.script = list(script)
        self.timeouts = []

    def poll_key(self, timeout_ms):
        self.timeouts.append(timeout_ms)
        self.clock.now += timeout_ms
        if not self.script:
            return Key.QUIT
        return self.script.pop(0)


class RecordingRenderer:
    def __init__(self):
        self.frames = []

    def render(self, snapshot):
        self.frames.append(snapshot)


def make_loop(script, state=None, poll_ms=50):
    clock = FakeClock()
    state = state or make_state([(2, 2), (1, 2), (0, 2)], width=10, height=10, food=(9, 9))
    keys = ScriptedKeys(clock, script)
    renderer = RecordingRenderer()
    loop = GameLoop(state, keys, renderer, clock=clock, poll_ms=poll_ms)
    return loop, keys, renderer


class TestTiming:
    """Tests for tick pacing."""

    def test_no_tick_before_interval(self):
        """Three 50ms polls are not enough for a 200ms tick."""
        loop, _, _ = make_loop([None] * 3)
        loop.running = True
        for _ in range(3):
            loop.iterate()
        assert loop.state.head == Position(2, 2)

    def test_tick_when_interval_elapsed(self):
        """The fourth 50ms poll reaches the 200ms boundary."""
        loop, _, _ = make_loop([None] * 4)
        loop.running = True
        for _ in range(4):
            loop.iterate()
        assert loop.state.head == Position(3, 2)

    def test_poll_never_waits_past_next_tick(self):
        """The poll timeout shrinks as the tick boundary approaches."""
        loop, keys, _ = make_loop([None] * 5, poll_ms=90)
        loop.running = True
        for _ in range(3):
            loop.iterate()
        assert keys.timeouts == [90, 90, 20]

    def test_interval_follows_difficulty(self):
        """After eating, the next tick comes sooner."""
        state = make_state([(2, 2), (1, 2), (0, 2)], width=10, height=10, food=(3, 2))
        loop, _, _ = make_loop([None] * 10, state=state, poll_ms=1000)
        loop.running = True
        loop.iterate()  # waits 200ms, eats
        assert state.score == 1
        loop.iterate()
        assert loop.clock.now - 1000 == 200 + 195


class TestInput:
    """Tests for key handling."""

    def test_direction_key_is_queued(self):
        """Movement keys queue a direction for the next tick."""
        loop, _, _ = make_loop([Key.DOWN])
        loop.running = True
        loop.iterate()
        assert loop.state.pending is Direction.DOWN
        assert loop.state.head == Position(2, 2)

    def test_quit_stops_immediately(self):
        """Quit ends the loop without ticking or drawing again."""
        loop, _, renderer = make_loop([Key.QUIT])
        assert loop.run() == 0
        assert loop.state.head == Position(2, 2)
        assert len(renderer.frames) == 1

    def test_confirm_ignored_while_playing(self):
        """Confirm only means something on the game-over screen."""
        loop, _, _ = make_loop([Key.CONFIRM])
        loop.running = True
        loop.iterate()
        assert loop.running is True

    def test_restart_ignored_while_playing(self):
        """A restart key mid-game does nothing."""
        loop, _, _ = make_loop([Key.RESTART, None, None, None])
        loop.running = True
        for _ in range(4):
            loop.iterate()
        assert loop.state.head == Position(3, 2)


class TestGameOver:
    """Tests for the game-over screen."""

    def dead_state(self):
        state = make_state([(0, 2), (1, 2), (2, 2)], direction=Direction.LEFT, width=10, height=10, food=(9, 9))
        state.advance_tick()
        assert state.phase is Phase.GAME_OVER
        return state

    def test_confirm_ends_session(self):
        """Acknowledging game over stops the loop."""
        loop, _, _ = make_loop([None, Key.CONFIRM, None], state=self.dead_state())
        assert loop.run() == 0
        assert loop.running is False

    def test_movement_keys_ignored(self):
        """Steering after game over does not touch the state."""
        state = self.dead_state()
        loop, _, _ = make_loop([Key.UP], state=state)
        loop.running = True
        loop.iterate()
        assert state.pending is None
        assert state.phase is Phase.GAME_OVER

    def test_restart(self):
        """R starts a new game and resets the tick timer."""
        state = self.dead_state()
        loop, _, renderer = make_loop([Key.RESTART], state=state)
        loop.running = True
        loop.iterate()
        assert state.phase is Phase.PLAYING
        assert state.head == Position(5, 5)
        assert renderer.frames[-1].phase is Phase.PLAYING


class TestRendering:
    """Tests for render cadence."""

    def test_renders_every_iteration(self):
        """A frame is drawn on every pass, tick or not."""
        loop, _, renderer = make_loop([None] * 6)
        loop.run()
        # initial frame plus one per non-quit iteration
        assert len(renderer.frames) == 7

    def test_frames_reflect_ticks(self):
        """The frame after a tick shows the moved snake."""
        loop, _, renderer = make_loop([None] * 4)
        loop.run()
        heads = [frame.snake[0] for frame in renderer.frames]
        assert heads[0] == Position(2, 2)
        assert heads[-1] == Position(3, 2)

    def test_frontend_errors_propagate(self):
        """A failing renderer stops the loop with its error."""

        class BrokenRenderer:
            def render(self, snapshot):
                raise FrontendError("screen went away")

        clock = FakeClock()
        state = make_state([(2, 2), (1, 2), (0, 2)])
        loop = GameLoop(state, ScriptedKeys(clock, []), BrokenRenderer(), clock=clock)
        with pytest.raises(FrontendError):
            loop.run()
