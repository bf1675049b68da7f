import pytest

from dialoguetree.controller import DialogueController
from dialoguetree.manager import DialogueManager, DialogueSettings, World
from dialoguetree.speaker import SpeakerComponent
from dialoguetree.types import DialogueError


class CustomController(DialogueController):
    pass


def test_actors_add_destroy_and_filter():
    world = World()
    controller = world.add_actor(DialogueController())
    other = world.add_actor(object())
    assert world.actors_of_type(DialogueController) == [controller]
    world.destroy_actor(controller)
    assert world.actors == [other]


def test_timers_fire_in_order():
    world = World()
    fired = []
    world.set_timer(2.0, lambda: fired.append("late"))
    world.set_timer(1.0, lambda: fired.append("early"))
    world.advance(0.5)
    assert fired == []
    world.advance(2.0)
    assert fired == ["early", "late"]
    assert world.time == pytest.approx(2.5)


def test_cancelled_timer_does_not_fire():
    world = World()
    fired = []
    handle = world.set_timer(1.0, lambda: fired.append(True))
    handle.cancel()
    world.advance(5.0)
    assert fired == []
    assert handle.active is False


def test_timer_scheduled_from_callback_fires_when_due():
    world = World()
    fired = []

    def first():
        fired.append("first")
        world.set_timer(0.5, lambda: fired.append("second"))

    world.set_timer(1.0, first)
    world.advance(2.0)
    assert fired == ["first", "second"]
    assert world.time == pytest.approx(2.0)


def test_negative_values_rejected():
    world = World()
    with pytest.raises(ValueError):
        world.set_timer(-1.0, lambda: None)
    with pytest.raises(ValueError):
        world.advance(-1.0)


def test_begin_play_replaces_existing_controllers():
    world = World()
    placed = world.add_actor(DialogueController())
    manager = DialogueManager()
    controller = manager.on_world_begin_play(world)
    assert world.actors_of_type(DialogueController) == [controller]
    assert controller is not placed
    assert manager.current_controller is controller
    assert world.dialogue_manager is manager


def test_configured_controller_type_is_spawned():
    world = World()
    manager = DialogueManager(DialogueSettings(dialogue_controller_type=CustomController))
    controller = manager.on_world_begin_play(world)
    assert type(controller) is CustomController


def test_missing_controller_type_raises():
    world = World()
    manager = DialogueManager(DialogueSettings(dialogue_controller_type=None))
    with pytest.raises(DialogueError):
        manager.on_world_begin_play(world)
    assert manager.current_controller is None


def test_speaker_finds_spawned_controller():
    world = World()
    controller = DialogueManager().on_world_begin_play(world)
    speaker = SpeakerComponent("NPC")
    speaker.begin_play(world)
    assert speaker.controller is controller