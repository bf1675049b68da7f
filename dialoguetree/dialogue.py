"""The dialogue asset: speaker roles, nodes and the traversal between them."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable, Mapping

from .sockets import SpeakerSocket
from .types import (
    CompileStatus,
    DefaultDialogueColors,
    DialogueError,
    DialogueOption,
    Signal,
    SpeakerField,
    SpeechDetails,
)

log = logging.getLogger("dialoguetree")


class SpeakerChange(Enum):
    """The kind of edit made to a dialogue's speaker roles."""

    ARRAY_ADD = "array_add"
    ARRAY_REMOVE = "array_remove"
    VALUE_SET = "value_set"


class Dialogue:
    """A playable dialogue made of nodes and speaker roles.

    Nodes are duck-typed: they expose ``enter_node()``, ``select_option()``,
    ``skip()``, and the attributes ``node_index`` and ``dialogue``. A node
    may only become the root if it marks itself with ``is_entry = True``.
    """

    def __init__(self, name: str = "Dialogue") -> None:
        self.name = name
        self.speakers: dict[str, Any] = {}
        self.speaker_roles: dict[str, SpeakerField] = {}
        self.default_speaker_colors = DefaultDialogueColors()
        self._compile_status = CompileStatus.UNCOMPILED
        self.dirty = False
        self.root_node: Any = None
        self.nodes: list[Any] = []
        self.controller: Any = None
        self.active_node: Any = None
        self.graph: Any = None
        self.on_speaker_roles_changed = Signal()
        self._add_default_speakers()

    @property
    def compile_status(self) -> CompileStatus:
        return self._compile_status

    @compile_status.setter
    def compile_status(self, status: CompileStatus) -> None:
        self._compile_status = status
        self.dirty = True

    def set_speaker(self, name: str, speaker: Any) -> None:
        if name in self.speakers:
            self.speakers[name] = speaker

    def get_speaker(self, name: str) -> Any:
        return self.speakers.get(name)

    def add_speaker_entry(self, name: str) -> None:
        self.speakers.setdefault(name, None)

    def check_playable(self, controller: Any) -> None:
        """Raise :class:`DialogueError` if the dialogue cannot be played."""
        if self._compile_status is not CompileStatus.COMPILED:
            raise DialogueError("Cannot play dialogue. Dialogue is not compiled.")
        if controller is None:
            raise DialogueError("Cannot play dialogue. No valid controller provided.")
        if self.root_node is None:
            raise DialogueError("Cannot play dialogue. Entry node does not exist.")

    def open_dialogue(self, controller: Any, speakers: Mapping[str, Any]) -> None:
        self.check_playable(controller)
        self.controller = controller
        self._fill_speakers(speakers)
        self.traverse_node(self.root_node)

    def clear_controller(self) -> None:
        self.controller = None

    def end_dialogue(self) -> None:
        if self.controller is not None:
            self.controller.end_dialogue()

    def display_speech(self, details: SpeechDetails) -> None:
        speaker = self.speakers.get(details.speaker_name)
        if speaker is None:
            self.end_dialogue()
            return
        self.controller.display_speech(details, speaker)
        self.controller.on_dialogue_speech_displayed.emit(details)

    def display_options(self, options: Iterable[DialogueOption]) -> None:
        if self.controller is None:
            raise DialogueError(
                "Attempting to display options via missing dialogue controller."
            )
        self.controller.display_options([option.details for option in options])

    def select_option(self, index: int) -> None:
        if self.active_node is not None:
            self.active_node.select_option(index)

    def skip(self) -> None:
        if self.active_node is not None:
            self.active_node.skip()

    def traverse_node(self, node: Any) -> None:
        """Enter ``node``; a missing node ends the dialogue."""
        if self.controller is None:
            return
        if node is None:
            self.end_dialogue()
            return
        self.controller.mark_node_visited(self, node.node_index)
        self.active_node = node
        node.enter_node()

    def speaker_is_present(self, name: str) -> bool:
        return self.get_speaker(name) is not None

    def _contains_node(self, node: Any) -> bool:
        return any(existing is node for existing in self.nodes)

    def was_node_visited(self, node: Any) -> bool:
        if self.controller is None or node is None or not self._contains_node(node):
            return False
        return self.controller.was_node_visited(self, node.node_index)

    def mark_node_visited(self, node: Any, visited: bool) -> None:
        if self.controller is None or node is None:
            return
        if visited:
            self.controller.mark_node_visited(self, node.node_index)
        else:
            self.controller.mark_node_unvisited(self, node.node_index)

    def clear_all_node_visits(self) -> None:
        if self.controller is not None:
            self.controller.clear_all_node_visits_for_dialogue(self)

    def add_node(self, node: Any) -> None:
        if node is not None:
            self.nodes.append(node)
            node.dialogue = self

    def remove_node(self, node: Any) -> None:
        if node is not None:
            self.nodes = [existing for existing in self.nodes if existing is not node]

    def set_root_node(self, node: Any) -> None:
        if node is not None and getattr(node, "is_entry", False):
            self.root_node = node

    def clear_dialogue(self) -> None:
        self.root_node = None
        self.nodes.clear()
        self.speakers.clear()
        self._compile_status = CompileStatus.UNCOMPILED

    def pre_compile(self) -> None:
        """Reset the dialogue and create an empty speaker slot per role."""
        self.clear_dialogue()
        for name in self.speaker_roles:
            self.add_speaker_entry(name)

    def post_compile(self) -> None:
        """Tell every node its index within the dialogue."""
        for index, node in enumerate(self.nodes):
            node.node_index = index

    def on_change_speakers(self, change_type: SpeakerChange) -> None:
        if change_type is SpeakerChange.ARRAY_ADD:
            self._on_add_speaker()
        elif change_type is SpeakerChange.ARRAY_REMOVE:
            pass
        else:
            self._on_change_single_speaker()
        self.on_speaker_roles_changed.emit()

    def _add_default_speakers(self) -> None:
        for role in ("NPC", "Player"):
            socket = SpeakerSocket(role)
            self.speaker_roles[socket.speaker_name] = SpeakerField(
                graph_color=self.default_speaker_colors.pop_color(),
                speaker_socket=socket,
            )

    def _on_add_speaker(self) -> None:
        for name, role in self.speaker_roles.items():
            if role.speaker_socket is None:
                role.speaker_socket = SpeakerSocket(name)
                role.graph_color = self.default_speaker_colors.pop_color()

    def _on_change_single_speaker(self) -> None:
        for name, role in self.speaker_roles.items():
            if role.speaker_socket.speaker_name != name:
                role.speaker_socket.speaker_name = name

    def _fill_speakers(self, speakers: Mapping[str, Any]) -> None:
        for name in self.speakers:
            self.speakers[name] = None
        for name, speaker in speakers.items():
            if name in self.speakers and speaker is not None:
                self.speakers[name] = speaker
        for name, speaker in self.speakers.items():
            if speaker is None:
                self.controller.handle_missing_speaker(name)