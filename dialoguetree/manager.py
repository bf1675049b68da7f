"""Settings, a minimal game world and the manager that spawns the controller."""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from .controller import DialogueController
from .types import DialogueError

log = logging.getLogger("dialoguetree")


@dataclass
class DialogueSettings:
    """Project-wide dialogue settings."""

    dialogue_controller_type: type[DialogueController] | None = DialogueController


@dataclass(eq=False)
class TimerHandle:
    """A pending timer; cancel it to stop the callback from running."""

    due: float
    callback: Callable[[], Any]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class World:
    """Holds actors and runs timers against a simulated clock."""

    def __init__(self) -> None:
        self.actors: list[Any] = []
        self.time = 0.0
        self.dialogue_manager: DialogueManager | None = None
        self._timers: list[tuple[float, int, TimerHandle]] = []
        self._sequence = itertools.count()

    def add_actor(self, actor: Any) -> Any:
        self.actors.append(actor)
        return actor

    def destroy_actor(self, actor: Any) -> None:
        self.actors = [existing for existing in self.actors if existing is not actor]

    def actors_of_type(self, cls: type) -> list[Any]:
        return [actor for actor in self.actors if isinstance(actor, cls)]

    def set_timer(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        """Run ``callback`` once, ``delay`` seconds from now."""
        if delay < 0:
            raise ValueError("timer delay must not be negative")
        handle = TimerHandle(self.time + delay, callback)
        heapq.heappush(self._timers, (handle.due, next(self._sequence), handle))
        return handle

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in order."""
        if seconds < 0:
            raise ValueError("cannot advance time backwards")
        target = self.time + seconds
        while self._timers and self._timers[0][0] <= target:
            due, _, handle = heapq.heappop(self._timers)
            if handle.cancelled:
                continue
            self.time = max(self.time, due)
            handle.fired = True
            handle.callback()
        self.time = target


class DialogueManager:
    """Ensures each world has exactly one dialogue controller."""

    def __init__(self, settings: DialogueSettings | None = None) -> None:
        self.settings = settings if settings is not None else DialogueSettings()
        self.current_controller: DialogueController | None = None

    def on_world_begin_play(self, world: World) -> DialogueController:
        """Replace any placed controllers with a freshly spawned one."""
        for old in world.actors_of_type(DialogueController):
            log.warning(
                "Removing existing dialogue controller from world. Dialogue "
                "controllers placed manually will not be used."
            )
            world.destroy_actor(old)

        world.dialogue_manager = self
        controller_type = self.settings.dialogue_controller_type
        self.current_controller = None
        if controller_type is not None:
            self.current_controller = world.add_actor(controller_type())
        if self.current_controller is None:
            raise DialogueError(
                "Failed to spawn dialogue controller. Please specify a "
                "dialogue controller type in the settings."
            )
        return self.current_controller