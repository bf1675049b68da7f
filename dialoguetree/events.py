"""Events played by event nodes as a dialogue passes through them."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .sockets import NodeSocket, SpeakerSocket
from .speaker import SpeakerActorEntry
from .types import DialogueError, Signal

log = logging.getLogger("dialoguetree")

_MISSING_SPEAKER = (
    "Failed to play event because the target speaker component was not "
    "supplied. Verify that the dialogue name property matches the speaker's "
    "role in the dialogue."
)


class DialogueEventBase:
    """Something that happens when a dialogue reaches an event node."""

    def __init__(self, dialogue: Any = None) -> None:
        self.dialogue = dialogue

    def play_event(self) -> None:
        """Carry out the event; the plain base event has no effect."""

    def has_all_requirements(self) -> bool:
        return True

    def graph_description(self) -> str:
        return ""

    def set_dialogue(self, dialogue: Any) -> None:
        """Attach the event to ``dialogue``; ``None`` is ignored."""
        if dialogue is not None:
            self.dialogue = dialogue


class DialogueEvent(DialogueEventBase):
    """An event acting on one speaker and, optionally, further speakers.

    Subclasses override :meth:`on_play_event`; by default it emits
    :attr:`played` with the resolved speaker entries.
    """

    def __init__(
        self,
        speaker: SpeakerSocket | None = None,
        additional_speakers: Iterable[SpeakerSocket] = (),
        dialogue: Any = None,
    ) -> None:
        super().__init__(dialogue)
        self.speaker = speaker
        self.additional_speakers: list[SpeakerSocket] = list(additional_speakers)
        self.played = Signal()

    def play_event(self) -> None:
        if self.dialogue is None or self.speaker is None:
            raise DialogueError("event needs both a dialogue and a speaker to play")
        component = self.speaker.get_speaker_component(self.dialogue)
        if component is None:
            log.warning(_MISSING_SPEAKER)
            return
        others: list[SpeakerActorEntry] = []
        for socket in self.additional_speakers:
            other = socket.get_speaker_component(self.dialogue)
            if other is None:
                log.warning(_MISSING_SPEAKER)
                return
            others.append(other.to_speaker_actor_entry())
        self.on_play_event(component.to_speaker_actor_entry(), others)

    def on_play_event(self, target: SpeakerActorEntry, others: list[SpeakerActorEntry]) -> None:
        self.played.emit(target, others)

    def has_all_requirements(self) -> bool:
        return self.speaker is not None and self.is_valid_event()

    def is_valid_event(self) -> bool:
        return True

    def graph_description(self) -> str:
        return type(self).__name__


class ResetAllNodeVisits(DialogueEventBase):
    """Marks every node of the dialogue as not yet visited."""

    def play_event(self) -> None:
        if self.dialogue is not None:
            self.dialogue.clear_all_node_visits()

    def graph_description(self) -> str:
        return "Mark all nodes unvisited"


class ResetNodeVisits(DialogueEventBase):
    """Marks one node of the dialogue as not yet visited."""

    def __init__(self, target_node: NodeSocket | None = None, dialogue: Any = None) -> None:
        super().__init__(dialogue)
        self.target_node = target_node

    def play_event(self) -> None:
        target = self.target_node
        if self.dialogue is not None and target is not None and target.dialogue_node is not None:
            self.dialogue.mark_node_visited(target.dialogue_node, False)

    def has_all_requirements(self) -> bool:
        return self.target_node is not None and self.target_node.graph_node is not None

    def graph_description(self) -> str:
        if not self.has_all_requirements():
            return "Invalid Event"
        return f"Mark {self.target_node.display_id} unvisited"