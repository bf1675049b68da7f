"""Sockets: named references to speakers and nodes within a dialogue."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class SpeakerSocket:
    """Refers to a speaker role of a dialogue by name."""

    speaker_name: str = ""

    def get_speaker_component(self, dialogue: Any) -> Any:
        """Return the component filling this role in ``dialogue``, if any."""
        if dialogue is None or not self.speaker_name:
            return None
        return dialogue.get_speaker(self.speaker_name)

    def is_valid(self) -> bool:
        return bool(self.speaker_name)


@dataclass(eq=False)
class NodeSocket:
    """Refers to a dialogue node, along with its editor-side representation."""

    display_id: str = ""
    dialogue_node: Any = None
    graph_node: Any = None