"""Strategies deciding how a speech node hands over to the next node."""

from __future__ import annotations

import logging
from typing import Any

from .types import ConnectionLimit, DialogueError, DialogueOption

log = logging.getLogger("dialoguetree")

_MIN_TIMED_PLAY = 0.01


class DialogueTransition:
    """Waits for a speech's audio and minimum play time, then moves on."""

    display_name = "DialogueTransition"
    node_creation_tooltip = ""
    connection_limit = ConnectionLimit.SINGLE

    def __init__(self, owning_node: Any = None) -> None:
        self.owning_node = owning_node
        self.min_play_time_elapsed = False
        self.audio_finished = False
        self._timer: Any = None
        self._listening_to: Any = None

    def start_transition(self) -> None:
        """Begin waiting; transitions at once if there is nothing to wait for."""
        self.min_play_time_elapsed = False
        self.audio_finished = False

        node = self.owning_node
        if node is None:
            raise DialogueError("transition failed to find its owning node")

        speaker = node.speaker
        if speaker is None:
            log.error("Transition failed to find speaker component. Ending dialogue early.")
            node.dialogue.end_dialogue()
            return

        min_play_time = node.details.minimum_play_time
        if min_play_time > _MIN_TIMED_PLAY:
            world = getattr(speaker, "world", None)
            if world is None:
                raise DialogueError("speaker has no world to time the speech against")
            self._timer = world.set_timer(min_play_time, self.on_min_play_time_elapsed)
        else:
            self.min_play_time_elapsed = True

        if speaker.is_playing:
            speaker.on_audio_finished.connect(self.on_done_playing_content)
            self._listening_to = speaker
        else:
            self.audio_finished = True

        if self.min_play_time_elapsed and self.audio_finished:
            self.transition_out()

    def skip(self) -> None:
        if not self.audio_finished:
            self.on_done_playing_content()
        if not self.min_play_time_elapsed:
            self.on_min_play_time_elapsed()

    def transition_out(self) -> None:
        """Move the dialogue on; subclasses decide where to."""

    def select_option(self, index: int) -> None:
        """Handle the player's choice; ignored unless the transition offers options."""

    def check_transition_conditions(self) -> None:
        if self.audio_finished and self.min_play_time_elapsed:
            self.transition_out()

    def on_done_playing_content(self) -> None:
        speaker = self.owning_node.speaker
        if speaker is not None:
            speaker.stop()
            speaker.on_audio_finished.disconnect(self.on_done_playing_content)
        if self._listening_to is not None and self._listening_to is not speaker:
            self._listening_to.on_audio_finished.disconnect(self.on_done_playing_content)
        self._listening_to = None
        self.audio_finished = True
        self.check_transition_conditions()

    def on_min_play_time_elapsed(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self.min_play_time_elapsed = True
        self.check_transition_conditions()


class AutoDialogueTransition(DialogueTransition):
    """Moves on to the first child node, or ends the dialogue if there is none."""

    display_name = "AutoTransition"
    node_creation_tooltip = (
        "Create speech node that automatically transitions to the first viable option"
    )

    def transition_out(self) -> None:
        node = self.owning_node
        children = node.children
        if children and children[0] is not None:
            node.dialogue.traverse_node(children[0])
        else:
            node.dialogue.end_dialogue()


class InputDialogueTransition(DialogueTransition):
    """Offers the child nodes as options and waits for the player to choose."""

    display_name = "InputTransition"
    node_creation_tooltip = (
        "Speech node that waits for the user to select an option before transitioning."
    )
    connection_limit = ConnectionLimit.UNLIMITED

    def __init__(self, owning_node: Any = None) -> None:
        super().__init__(owning_node)
        self.options: list[DialogueOption] = []

    def start_transition(self) -> None:
        self.gather_options()
        if self.owning_node.can_skip:
            self.show_options()
        super().start_transition()

    def transition_out(self) -> None:
        super().transition_out()
        node = self.owning_node
        if not self.options:
            if node.children:
                log.warning(
                    "Terminating dialogue: input transition node has no valid "
                    "options to select from."
                )
            node.dialogue.end_dialogue()
        elif not node.can_skip:
            self.show_options()

    def select_option(self, index: int) -> None:
        """Go to the node behind option ``index``; a bad index ends the dialogue."""
        if not 0 <= index < len(self.options):
            self.owning_node.dialogue.end_dialogue()
            raise DialogueError(
                f"Terminating dialogue: attempted to transition to invalid option index {index}."
            )
        self.owning_node.dialogue.traverse_node(self.options[index].target_node)

    def show_options(self) -> None:
        if self.options:
            self.owning_node.dialogue.display_options(self.options)

    def gather_options(self) -> list[DialogueOption]:
        """Collect the children's options that have text and a target."""
        self.options = [
            option
            for option in (child.as_option() for child in self.owning_node.children)
            if option.details.speech_text and option.target_node is not None
        ]
        return list(self.options)