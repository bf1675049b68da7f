"""The controller that runs dialogues and keeps records of visited nodes."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .types import DialogueError, DialogueOption, Signal, SpeechDetails

log = logging.getLogger("dialoguetree")


@dataclass
class NodeVisits:
    """The visited node indices of one dialogue."""

    dialogue_name: str
    visited_node_indices: set[int] = field(default_factory=set)


@dataclass
class DialogueRecords:
    """Visit records for all dialogues, keyed by dialogue name."""

    records: dict[str, NodeVisits] = field(default_factory=dict)


class DialogueController:
    """Runs the current dialogue and presents it.

    The display methods are hooks: subclasses override them to drive a real
    user interface. The defaults keep track of what would be shown.
    """

    def __init__(self) -> None:
        self.current_dialogue: Any = None
        self.records = DialogueRecords()
        self.on_dialogue_started = Signal()
        self.on_dialogue_ended = Signal()
        self.on_dialogue_speech_displayed = Signal()
        self.display_open = False
        self.displayed_speech: tuple[SpeechDetails, Any] | None = None
        self.displayed_options: list[SpeechDetails] = []
        self.missing_speakers: list[str] = []

    @property
    def speakers(self) -> dict[str, Any]:
        if self.current_dialogue is None:
            return {}
        return dict(self.current_dialogue.speakers)

    def select_option(self, index: int) -> None:
        if self.current_dialogue is None:
            raise DialogueError("no dialogue is running")
        self.current_dialogue.select_option(index)

    def start_dialogue_with_names(self, dialogue: Any, speakers: Mapping[str, Any]) -> None:
        if dialogue is None:
            raise DialogueError("could not start dialogue: provided dialogue is missing")
        if not self.can_open_display():
            return
        self.current_dialogue = dialogue
        self.open_display()
        dialogue.open_dialogue(self, dict(speakers))
        self.on_dialogue_started.emit()

    def start_dialogue(self, dialogue: Any, speakers: Iterable[Any]) -> None:
        """Start ``dialogue`` with speakers keyed by their dialogue names."""
        participants = list(speakers)
        if not participants:
            log.warning("No speakers provided on dialogue start.")
            return
        named: dict[str, Any] = {}
        for speaker in participants:
            if speaker is None:
                raise DialogueError("could not start dialogue: invalid speaker provided")
            if not speaker.dialogue_name:
                raise DialogueError(
                    "could not start dialogue: a provided speaker has no dialogue name"
                )
            if speaker.dialogue_name in named:
                raise DialogueError(
                    "could not start dialogue: multiple speakers share a dialogue name"
                )
            named[speaker.dialogue_name] = speaker
        self.start_dialogue_with_names(dialogue, named)

    def end_dialogue(self) -> None:
        self.close_display()
        self.on_dialogue_ended.emit()
        dialogue = self.current_dialogue
        if dialogue is None:
            return
        for speaker in dialogue.speakers.values():
            if speaker is not None:
                speaker.stop()
                speaker.clear_behavior_flags()
        dialogue.clear_controller()
        self.current_dialogue = None

    def skip(self) -> None:
        if self.current_dialogue is not None:
            self.current_dialogue.skip()

    def clear_node_visits(self) -> None:
        if self.current_dialogue is not None:
            self.clear_all_node_visits_for_dialogue(self.current_dialogue)

    def set_speaker(self, name: str, speaker: Any) -> None:
        if self.current_dialogue is not None and speaker is not None:
            self.current_dialogue.set_speaker(name, speaker)

    def export_records(self) -> DialogueRecords:
        return copy.deepcopy(self.records)

    def clear_records(self) -> None:
        self.records.records.clear()

    def import_records(self, records: DialogueRecords) -> None:
        self.records = copy.deepcopy(records)

    def speaker_in_current_dialogue(self, speaker: Any) -> bool:
        if self.current_dialogue is None:
            return False
        return any(value is speaker for value in self.current_dialogue.speakers.values())

    def mark_node_visited(self, dialogue: Any, index: int) -> None:
        if dialogue is None or not dialogue.name:
            return
        record = self.records.records.setdefault(dialogue.name, NodeVisits(dialogue.name))
        record.visited_node_indices.add(index)

    def _record_for(self, dialogue: Any) -> NodeVisits | None:
        if dialogue is None:
            return None
        return self.records.records.get(dialogue.name)

    def mark_node_unvisited(self, dialogue: Any, index: int) -> None:
        record = self._record_for(dialogue)
        if record is not None:
            record.visited_node_indices.discard(index)

    def clear_all_node_visits_for_dialogue(self, dialogue: Any) -> None:
        record = self._record_for(dialogue)
        if record is not None:
            record.visited_node_indices.clear()

    def was_node_visited(self, dialogue: Any, index: int) -> bool:
        record = self._record_for(dialogue)
        return record is not None and index in record.visited_node_indices

    def can_open_display(self) -> bool:
        return True

    def open_display(self) -> None:
        self.display_open = True

    def close_display(self) -> None:
        self.display_open = False
        self.displayed_speech = None
        self.displayed_options = []

    def display_speech(self, details: SpeechDetails, speaker: Any) -> None:
        self.displayed_speech = (details, speaker)

    def display_options(self, options: Iterable[SpeechDetails | DialogueOption]) -> None:
        self.displayed_options = [
            option.details if isinstance(option, DialogueOption) else option
            for option in options
        ]

    def handle_missing_speaker(self, name: str) -> None:
        self.missing_speakers.append(name)