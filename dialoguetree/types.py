"""Shared value types, enums and a tiny signal implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


class DialogueError(Exception):
    """Raised when a dialogue operation cannot be carried out."""


class CompileStatus(Enum):
    """Compilation state of a dialogue asset."""

    UNCOMPILED = "uncompiled"
    COMPILED = "compiled"
    FAILED = "failed"


class ConnectionLimit(Enum):
    """How many links a node's pin may carry."""

    SINGLE = "single"
    UNLIMITED = "unlimited"


@dataclass(frozen=True)
class Color:
    """An 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")


@dataclass
class SpeechDetails:
    """Everything needed to present one line of speech."""

    speech_text: str = ""
    speaker_name: str = ""
    speech_title: str = ""
    minimum_play_time: float = 0.0
    can_skip: bool = True
    ignore_content: bool = False
    speech_audio: Any = None
    behavior_flags: frozenset[str] = frozenset()


@dataclass
class DialogueOption:
    """A selectable option: the speech to show and the node it leads to."""

    details: SpeechDetails = field(default_factory=SpeechDetails)
    target_node: Any = None


@dataclass
class SpeakerField:
    """A speaker role as declared on a dialogue."""

    graph_color: Color = Color(255, 255, 255)
    speaker_socket: Any = None


_DEFAULT_PALETTE = (
    Color(219, 88, 86),
    Color(86, 150, 219),
    Color(120, 200, 110),
    Color(230, 190, 80),
    Color(170, 110, 210),
    Color(80, 200, 200),
    Color(230, 140, 70),
    Color(200, 200, 200),
)


@dataclass
class DefaultDialogueColors:
    """A cycling palette handing out colours for new speaker roles."""

    colors: list[Color] = field(default_factory=lambda: list(_DEFAULT_PALETTE))
    index: int = 0

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("palette must contain at least one colour")

    def pop_color(self) -> Color:
        """Return the next colour, wrapping around at the end."""
        color = self.colors[self.index]
        self.index = (self.index + 1) % len(self.colors)
        return color


class Signal:
    """A multicast callback list; each callback is registered at most once."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[..., Any]] = []

    def connect(self, callback: Callable[..., Any]) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def disconnect(self, callback: Callable[..., Any]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def emit(self, *args: Any) -> None:
        for callback in list(self._callbacks):
            callback(*args)

    def __len__(self) -> int:
        return len(self._callbacks)

    def __contains__(self, callback: object) -> bool:
        return callback in self._callbacks