# dialoguetree

A small runtime for branching game dialogue. A `Dialogue` holds speaker roles
and a tree of nodes: an entry node, speech nodes spoken by speakers, branch
nodes guarded by conditions, event nodes that play events, and jump nodes that
move control elsewhere in the tree. A `DialogueController` runs the dialogue
that is playing, keeps track of the speech and options on show, and records
which nodes of each dialogue have been visited.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `dialoguetree.types`: `DialogueError` (raised wherever an operation cannot
  be carried out), the enums `CompileStatus` and `ConnectionLimit`, the value
  types `Color`, `SpeechDetails`, `DialogueOption` and `SpeakerField`,
  `DefaultDialogueColors` (a cycling palette; `pop_color()` wraps around), and
  `Signal`, a callback list with `connect`, `disconnect` and `emit`. A
  callback is registered at most once.
- `dialoguetree.dialogue`: `Dialogue`. A new dialogue has two speaker roles,
  `"NPC"` and `"Player"`, in `speaker_roles`. `open_dialogue` raises
  `DialogueError` if the dialogue is not compiled, has no controller or has no
  entry node (`check_playable` makes the same checks). `on_change_speakers`
  takes a `SpeakerChange` and keeps the role sockets in step with the role
  names.
- `dialoguetree.nodes`: `DialogueNode`, `EntryNode`, `SpeechNode`,
  `BranchNode`, `EventNode` and `JumpNode`. A `SpeechNode` is built from a
  `SpeechDetails` and a transition type, which it calls with itself.
- `dialoguetree.transitions`: `AutoDialogueTransition` moves on to the first
  child once the audio has finished and the minimum play time has passed, and
  ends the dialogue if there is no child. `InputDialogueTransition` offers the
  children that have speech text as options and waits for a choice. An option
  index out of range ends the dialogue and raises `DialogueError`.
- `dialoguetree.queries`: `NodeVisitedQuery`, `SpeakerFoundQuery`, and the
  bases `SpeakerQueryBool`, `SpeakerQueryInt` and `SpeakerQueryFloat`.
  Subclass these and override `query_speaker(target, others)`. Without an
  override they answer `False`, `0` or `0.0`.
- `dialoguetree.conditions`: `ConditionBool`, `ConditionInt` (with
  `IntComparison`) and `ConditionFloat` (with `FloatComparison`). Each compares
  the answer of its query. `BranchNode.init_branch_data` takes a list of them,
  and with `if_any` set any one met condition is enough.
- `dialoguetree.events`: `ResetAllNodeVisits`, `ResetNodeVisits`, and
  `DialogueEvent`, which resolves its speaker sockets and calls
  `on_play_event(target, others)`. The default `on_play_event` emits the
  `played` signal.
- `dialoguetree.sockets`: `SpeakerSocket` (a speaker role by name) and
  `NodeSocket` (a reference to a node).
- `dialoguetree.speaker`: `SpeakerComponent`, a participant with a
  `dialogue_name`, behaviour flags and simulated audio (`set_sound`, `play`,
  `stop`, and `finish_audio` to signal the end of the sound).
  `begin_play(world)` picks up the world's controller.
- `dialoguetree.controller`: `DialogueController`, with the records types
  `DialogueRecords` and `NodeVisits`. `start_dialogue` raises `DialogueError`
  for a missing speaker, a speaker without a dialogue name, or two speakers
  sharing a name. `export_records` and `import_records` copy the visit
  records. The display hooks `can_open_display`, `open_display`,
  `close_display`, `display_speech`, `display_options` and
  `handle_missing_speaker` only record what would be shown (`displayed_speech`,
  `displayed_options`, `missing_speakers`). Override them to drive a real
  interface.
- `dialoguetree.manager`: `World`, which holds actors and runs timers on a
  simulated clock (`set_timer`, `advance`). `DialogueSettings` names the
  controller type. `DialogueManager.on_world_begin_play` removes any controllers
  already in the world, spawns one of the configured type and returns it.
- `dialoguetree.picker`: `ObjectPicker`, a searchable list of named objects.
  Names start sorted without regard to case. `filter` keeps the names that
  contain the search text, ignoring case and spaces. `select` passes the chosen
  object to `on_select` and closes the picker.

## Example

Call `pre_compile` before you add nodes, because it clears the dialogue.
Speakers must `begin_play` in a world whose manager has spawned a controller.
Speeches with a minimum play time use that world's timers.

```python
from dialoguetree.dialogue import Dialogue
from dialoguetree.manager import DialogueManager, World
from dialoguetree.nodes import EntryNode, SpeechNode
from dialoguetree.speaker import SpeakerComponent
from dialoguetree.transitions import AutoDialogueTransition, InputDialogueTransition
from dialoguetree.types import CompileStatus, SpeechDetails

world = World()
controller = DialogueManager().on_world_begin_play(world)

npc = SpeakerComponent(dialogue_name="NPC")
player = SpeakerComponent(dialogue_name="Player")
for speaker in (npc, player):
    speaker.begin_play(world)

dialogue = Dialogue("Greeting")
dialogue.pre_compile()
entry = EntryNode()
hello = SpeechNode(
    SpeechDetails(speech_text="Hello there.", speaker_name="NPC"),
    InputDialogueTransition,
)
reply = SpeechNode(
    SpeechDetails(speech_text="Hi!", speaker_name="Player"),
    AutoDialogueTransition,
)
for node in (entry, hello, reply):
    dialogue.add_node(node)
entry.add_child(hello)
hello.add_child(reply)
dialogue.set_root_node(entry)
dialogue.post_compile()
dialogue.compile_status = CompileStatus.COMPILED

controller.start_dialogue(dialogue, [npc, player])
print(controller.displayed_options[0].speech_text)  # Hi!
controller.select_option(0)  # the reply plays, then the dialogue ends
assert controller.current_dialogue is None
```

## What it does not do

The package has no graph editor. It cannot save or load dialogues: you build
them in code. It plays no sound: `SpeakerComponent.play` only marks the speaker
as playing. It has no user interface beyond the controller's hooks. It has no
command-line program.