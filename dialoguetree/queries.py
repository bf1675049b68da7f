"""Queries: questions a dialogue condition asks about the running dialogue."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .sockets import NodeSocket, SpeakerSocket
from .speaker import SpeakerActorEntry
from .types import DialogueError

log = logging.getLogger("dialoguetree")

_MISSING_SPEAKER = (
    "Query failed to execute because the specified speaker component was not "
    "found. Verify that the dialogue name property matches the speaker's role "
    "in the dialogue."
)


class DialogueQuery:
    """A question about a dialogue, answered by :meth:`execute`."""

    def __init__(self, dialogue: Any = None) -> None:
        self._dialogue = dialogue

    @property
    def dialogue(self) -> Any:
        """The dialogue being queried; raises if none has been attached."""
        if self._dialogue is None:
            raise DialogueError("query is not attached to a dialogue")
        return self._dialogue

    @dialogue.setter
    def dialogue(self, value: Any) -> None:
        if value is None:
            raise ValueError("query dialogue must not be None")
        self._dialogue = value

    def execute(self) -> Any:
        raise DialogueError("Should not use abstract query directly")

    def graph_description(self) -> str:
        return type(self).__name__

    def is_valid(self) -> bool:
        return True


class DialogueQueryBool(DialogueQuery):
    """A query answering true or false."""

    default: Any = False

    def execute(self) -> bool:
        raise DialogueError("Should not use abstract bool query directly")


class DialogueQueryFloat(DialogueQuery):
    """A query answering with a real number."""

    default: Any = 0.0

    def execute(self) -> float:
        raise DialogueError("Should not be using abstract float query directly")


class DialogueQueryInt(DialogueQuery):
    """A query answering with a whole number."""

    default: Any = 0

    def execute(self) -> int:
        raise DialogueError("Should not be using abstract int dialogue query directly")


class NodeVisitedQuery(DialogueQueryBool):
    """Asks whether a given node of the dialogue has been visited."""

    def __init__(self, target_node: NodeSocket | None = None, dialogue: Any = None) -> None:
        super().__init__(dialogue)
        self.target_node = target_node

    def execute(self) -> bool:
        if self.target_node is None:
            raise DialogueError("node visited query has no target node")
        node = self.target_node.dialogue_node
        if node is None:
            log.error("Closing dialogue: attempted to execute a node visited query on a missing node")
            self.dialogue.end_dialogue()
            return False
        return self.dialogue.was_node_visited(node)

    def graph_description(self) -> str:
        if self.target_node is None:
            return "Invalid Node"
        return f"{self.target_node.display_id} was visited"

    def is_valid(self) -> bool:
        return self.target_node is not None and self.target_node.graph_node is not None


class SpeakerFoundQuery(DialogueQueryBool):
    """Asks whether a speaker role has been filled in the running dialogue."""

    def __init__(self, speaker: SpeakerSocket | None = None, dialogue: Any = None) -> None:
        super().__init__(dialogue)
        self.speaker = speaker

    def execute(self) -> bool:
        if self.speaker is None:
            raise DialogueError("speaker found query has no speaker socket")
        return self.dialogue.speaker_is_present(self.speaker.speaker_name)

    def graph_description(self) -> str:
        if self.speaker is None:
            return "Invalid Speaker for Query"
        return f"{self.speaker.speaker_name} found"

    def is_valid(self) -> bool:
        return self.speaker is not None and self.speaker.is_valid()


class _SpeakerSockets:
    """Holds the speaker sockets a speaker query is asked about."""

    def __init__(
        self,
        speaker: SpeakerSocket | None = None,
        additional_speakers: Iterable[SpeakerSocket] = (),
        dialogue: Any = None,
    ) -> None:
        super().__init__(dialogue)  # type: ignore[call-arg]
        self.speaker = speaker
        self.additional_speakers: list[SpeakerSocket] = list(additional_speakers)


def _run_speaker_query(query: Any) -> Any:
    """Resolve the query's sockets to speaker entries and ask ``query_speaker``."""
    if query.speaker is None:
        raise DialogueError("speaker query has no speaker socket")
    dialogue = query.dialogue
    component = query.speaker.get_speaker_component(dialogue)
    if component is None:
        log.warning(_MISSING_SPEAKER)
        dialogue.end_dialogue()
        return query.default

    others: list[SpeakerActorEntry] = []
    for socket in query.additional_speakers:
        other = socket.get_speaker_component(dialogue)
        if other is None:
            log.warning("%s Returning the default answer.", _MISSING_SPEAKER)
            return query.default
        others.append(other.to_speaker_actor_entry())

    return query.query_speaker(component.to_speaker_actor_entry(), others)


def _speaker_query_valid(query: Any) -> bool:
    return (
        query.speaker is not None
        and query.speaker.is_valid()
        and query.is_valid_speaker_query()
    )


class SpeakerQueryBool(_SpeakerSockets, DialogueQueryBool):
    """A true/false question asked about one or more speakers."""

    def execute(self) -> bool:
        return _run_speaker_query(self)

    def query_speaker(self, target: SpeakerActorEntry, others: list[SpeakerActorEntry]) -> bool:
        """Answer the query for the given speakers; without an override, False."""
        return self.default

    def is_valid(self) -> bool:
        return _speaker_query_valid(self)

    def is_valid_speaker_query(self) -> bool:
        return True


class SpeakerQueryFloat(_SpeakerSockets, DialogueQueryFloat):
    """A numeric question asked about one or more speakers."""

    def execute(self) -> float:
        return _run_speaker_query(self)

    def query_speaker(self, target: SpeakerActorEntry, others: list[SpeakerActorEntry]) -> float:
        """Answer the query for the given speakers; without an override, 0.0."""
        return self.default

    def is_valid(self) -> bool:
        return _speaker_query_valid(self)

    def is_valid_speaker_query(self) -> bool:
        return True


class SpeakerQueryInt(_SpeakerSockets, DialogueQueryInt):
    """A whole-number question asked about one or more speakers."""

    def execute(self) -> int:
        return _run_speaker_query(self)

    def query_speaker(self, target: SpeakerActorEntry, others: list[SpeakerActorEntry]) -> int:
        """Answer the query for the given speakers; without an override, 0."""
        return self.default

    def is_valid(self) -> bool:
        return _speaker_query_valid(self)

    def is_valid_speaker_query(self) -> bool:
        return True