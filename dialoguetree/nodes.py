"""The nodes a dialogue is built from and how each one is entered."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from .types import DialogueError, DialogueOption, SpeechDetails

log = logging.getLogger("dialoguetree")


class DialogueNode:
    """A node of a dialogue, linked to parent and child nodes."""

    is_entry = False

    def __init__(self) -> None:
        self.dialogue: Any = None
        self.parents: list[DialogueNode] = []
        self.children: list[DialogueNode] = []
        self.node_index = -1

    def add_parent(self, parent: DialogueNode) -> None:
        if parent not in self.parents:
            self.parents.append(parent)

    def add_child(self, child: DialogueNode) -> None:
        if child not in self.children:
            self.children.append(child)

    def as_option(self) -> DialogueOption:
        """The option this node offers when listed as a choice."""
        return DialogueOption()

    def enter_node(self) -> None:
        """Run the node's behaviour when the dialogue reaches it."""

    def select_option(self, index: int) -> None:
        """Handle the player choosing the option at ``index``."""

    def skip(self) -> None:
        """Handle a request to skip the node's content."""

    def _first_child(self) -> DialogueNode | None:
        return self.children[0] if self.children else None


class EntryNode(DialogueNode):
    """The root of a dialogue; passes straight on to its only child."""

    is_entry = True

    def enter_node(self) -> None:
        if self.dialogue is None:
            raise DialogueError("entry node is not part of a dialogue")
        child = self._first_child()
        if child is None:
            log.warning("Exiting dialogue: entry node has no children.")
            self.dialogue.end_dialogue()
            return
        self.dialogue.traverse_node(child)


class SpeechNode(DialogueNode):
    """A line of speech followed by a transition to what comes next."""

    def __init__(self, details: SpeechDetails, transition_type: Callable[[SpeechNode], Any]) -> None:
        super().__init__()
        if transition_type is None:
            raise ValueError("speech node needs a transition type")
        self.details = details
        self.transition = transition_type(self)

    @property
    def speaker(self) -> Any:
        return self.dialogue.get_speaker(self.details.speaker_name)

    @property
    def can_skip(self) -> bool:
        return self.details.can_skip

    def enter_node(self) -> None:
        dialogue = self.dialogue
        if not dialogue.speaker_is_present(self.details.speaker_name):
            log.error(
                "Terminating dialogue early: a participant speaker component "
                "was not found. Verify that the dialogue name property matches "
                "the speaker's role in the dialogue."
            )
            dialogue.end_dialogue()
            return
        if not self.details.ignore_content:
            dialogue.display_speech(self.details)
            self.start_audio()
        if self.transition is None:
            log.error("Speech node is missing transition.")
            dialogue.end_dialogue()
            return
        self.transition.start_transition()

    def select_option(self, index: int) -> None:
        self.transition.select_option(index)

    def skip(self) -> None:
        if self.details.can_skip:
            self.transition.skip()

    def as_option(self) -> DialogueOption:
        return DialogueOption(self.details, self)

    def start_audio(self) -> None:
        """Play the speech's audio and apply its behaviour flags."""
        speaker = self.speaker
        if speaker is None:
            return
        speaker.stop()
        if self.details.speech_audio is not None:
            speaker.set_sound(self.details.speech_audio)
            speaker.play()
        speaker.set_behavior_flags(self.details.behavior_flags)


class BranchNode(DialogueNode):
    """Goes one of two ways depending on a set of conditions."""

    def __init__(self) -> None:
        super().__init__()
        self.if_any = False
        self.true_node: DialogueNode | None = None
        self.false_node: DialogueNode | None = None
        self.conditions: list[Any] = []

    def init_branch_data(
        self,
        if_any: bool,
        true_node: DialogueNode | None,
        false_node: DialogueNode | None,
        conditions: Iterable[Any],
    ) -> None:
        self.if_any = if_any
        self.true_node = true_node
        self.false_node = false_node
        self.conditions = list(conditions)

    def clear_conditions(self) -> None:
        self.conditions.clear()

    def passes_conditions(self) -> bool:
        """Any condition met if ``if_any`` is set, otherwise all of them."""
        results = (condition.is_met() for condition in self.conditions)
        return any(results) if self.if_any else all(results)

    def as_option(self) -> DialogueOption:
        if self.passes_conditions() and self.true_node is not None:
            return DialogueOption(self.true_node.as_option().details, self)
        if self.false_node is not None:
            return DialogueOption(self.false_node.as_option().details, self)
        return DialogueOption()

    def enter_node(self) -> None:
        next_node = self.true_node if self.passes_conditions() else self.false_node
        self.dialogue.traverse_node(next_node)


class EventNode(DialogueNode):
    """Plays a list of events, then passes on to its child."""

    def __init__(self, events: Iterable[Any] = ()) -> None:
        super().__init__()
        self.events: list[Any] = list(events)

    def enter_node(self) -> None:
        self.play_events()
        child = self._first_child()
        if child is not None:
            self.dialogue.traverse_node(child)
        else:
            self.dialogue.end_dialogue()

    def as_option(self) -> DialogueOption:
        child = self._first_child()
        if child is not None:
            return DialogueOption(child.as_option().details, self)
        return DialogueOption()

    def play_events(self) -> None:
        for event in self.events:
            event.play_event()


class JumpNode(DialogueNode):
    """Moves the dialogue to another node elsewhere in the tree."""

    def __init__(self) -> None:
        super().__init__()
        self.jump_target: DialogueNode | None = None

    def set_jump_target(self, target: DialogueNode) -> None:
        if target is None:
            raise ValueError("jump target must be a node")
        self.jump_target = target

    def enter_node(self) -> None:
        self.dialogue.traverse_node(self.jump_target)

    def as_option(self) -> DialogueOption:
        if self.jump_target is not None:
            return DialogueOption(self.jump_target.as_option().details, self)
        return DialogueOption()