"""The speaker component attached to actors taking part in dialogue."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .types import DialogueError, Signal

log = logging.getLogger("dialoguetree")


@dataclass
class SpeakerActorEntry:
    """A speaker component paired with the actor that owns it."""

    speaker_component: Any
    actor: Any


class SpeakerComponent:
    """A participant in dialogues, with audio playback and behaviour flags."""

    def __init__(
        self,
        dialogue_name: str = "",
        display_name: str = "",
        owner: Any = None,
        owned_dialogue: Any = None,
    ) -> None:
        self._dialogue_name = dialogue_name
        self._display_name = display_name
        self.owner = owner
        self.owned_dialogue = owned_dialogue
        self.behavior_flags: set[str] = set()
        self.controller: Any = None
        self.world: Any = None
        self.sound: Any = None
        self.is_playing = False
        self.on_behavior_flags_changed = Signal()
        self.on_audio_finished = Signal()

    @property
    def display_name(self) -> str:
        return self._display_name

    @display_name.setter
    def display_name(self, value: str) -> None:
        # Empty names are ignored, keeping the previous value.
        if value:
            self._display_name = value

    @property
    def dialogue_name(self) -> str:
        return self._dialogue_name

    @dialogue_name.setter
    def dialogue_name(self, value: str) -> None:
        if value:
            self._dialogue_name = value

    def begin_play(self, world: Any) -> None:
        """Attach to ``world`` and pick up its active dialogue controller."""
        manager = getattr(world, "dialogue_manager", None)
        if manager is None:
            raise DialogueError("world has no dialogue manager")
        self.world = world
        self.controller = manager.current_controller
        if self.controller is None:
            raise DialogueError(
                "speaker component failed to find an active dialogue controller"
            )

    def _in_current_dialogue(self) -> bool:
        return self.controller is not None and self.controller.speaker_in_current_dialogue(self)

    def end_current_dialogue(self) -> None:
        if self._in_current_dialogue():
            self.controller.end_dialogue()

    def try_skip_speech(self) -> None:
        if self._in_current_dialogue():
            self.controller.skip()

    def set_behavior_flags(self, flags: Iterable[str]) -> None:
        self.behavior_flags = set(flags)
        self.on_behavior_flags_changed.emit(frozenset(self.behavior_flags))

    def clear_behavior_flags(self) -> None:
        self.behavior_flags.clear()
        self.on_behavior_flags_changed.emit(frozenset())

    def start_owned_dialogue_with_names(self, speakers: Mapping[str, SpeakerComponent]) -> None:
        if self.owned_dialogue is not None:
            self.start_dialogue_with_names(self.owned_dialogue, speakers)

    def start_owned_dialogue(self, speakers: Iterable[SpeakerComponent]) -> None:
        if self.owned_dialogue is not None:
            self.start_dialogue(self.owned_dialogue, speakers)

    def _can_start(self, dialogue: Any) -> bool:
        if dialogue is None:
            log.warning("Speaker: no valid dialogue found to start")
            return False
        if self.controller is None:
            raise DialogueError(
                "speaker could not start dialogue because the dialogue controller was invalid"
            )
        return True

    def start_dialogue_with_names(
        self, dialogue: Any, speakers: Mapping[str, SpeakerComponent]
    ) -> None:
        if self._can_start(dialogue):
            self.controller.start_dialogue_with_names(dialogue, dict(speakers))

    def start_dialogue(self, dialogue: Any, speakers: Iterable[SpeakerComponent]) -> None:
        """Start ``dialogue`` with ``speakers``, always including this speaker."""
        if not self._can_start(dialogue):
            return
        participants = list(speakers)
        if not any(speaker is self for speaker in participants):
            participants.append(self)
        self.controller.start_dialogue(dialogue, participants)

    def to_speaker_actor_entry(self) -> SpeakerActorEntry:
        return SpeakerActorEntry(speaker_component=self, actor=self.owner)

    def set_sound(self, sound: Any) -> None:
        self.sound = sound

    def play(self) -> None:
        self.is_playing = self.sound is not None

    def stop(self) -> None:
        self.is_playing = False

    def finish_audio(self) -> None:
        """Signal that the current sound played to its end."""
        if self.is_playing:
            self.is_playing = False
            self.on_audio_finished.emit()