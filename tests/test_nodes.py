import pytest

from dialoguetree.controller import DialogueController
from dialoguetree.dialogue import Dialogue
from dialoguetree.nodes import (
    BranchNode,
    DialogueNode,
    EntryNode,
    EventNode,
    JumpNode,
    SpeechNode,
)
from dialoguetree.speaker import SpeakerComponent
from dialoguetree.transitions import AutoDialogueTransition
from dialoguetree.types import CompileStatus, DialogueError, DialogueOption, SpeechDetails


def make_dialogue():
    dialogue = Dialogue("Test")
    dialogue.pre_compile()
    entry = EntryNode()
    dialogue.add_node(entry)
    dialogue.set_root_node(entry)
    return dialogue, entry


def add(dialogue, node):
    dialogue.add_node(node)
    return node


def link(parent, child):
    parent.add_child(child)
    child.add_parent(parent)


def speech(text, speaker="NPC", **kwargs):
    return SpeechNode(
        SpeechDetails(speech_text=text, speaker_name=speaker, **kwargs),
        AutoDialogueTransition,
    )


def run(dialogue):
    dialogue.post_compile()
    dialogue.compile_status = CompileStatus.COMPILED
    controller = DialogueController()
    npc = SpeakerComponent("NPC")
    player = SpeakerComponent("Player")
    spoken = []
    controller.on_dialogue_speech_displayed.connect(spoken.append)
    controller.start_dialogue_with_names(dialogue, {"NPC": npc, "Player": player})
    return controller, npc, spoken


class Fixed:
    def __init__(self, value):
        self.value = value

    def is_met(self):
        return self.value


class CountingEvent:
    def __init__(self):
        self.played = 0

    def play_event(self):
        self.played += 1


def test_add_child_and_parent_ignore_duplicates():
    parent, child = DialogueNode(), DialogueNode()
    link(parent, child)
    link(parent, child)
    assert parent.children == [child]
    assert child.parents == [parent]


def test_base_node_option_is_empty():
    option = DialogueNode().as_option()
    assert option == DialogueOption()
    assert option.target_node is None


def test_entry_without_dialogue_raises():
    with pytest.raises(DialogueError):
        EntryNode().enter_node()


def test_entry_without_children_ends_dialogue():
    dialogue, _ = make_dialogue()
    controller, _, spoken = run(dialogue)
    assert controller.current_dialogue is None
    assert spoken == []


def test_speech_chain_plays_in_order_and_marks_visits():
    dialogue, entry = make_dialogue()
    first = add(dialogue, speech("Hello"))
    second = add(dialogue, speech("Bye", speaker="Player"))
    link(entry, first)
    link(first, second)
    controller, _, spoken = run(dialogue)
    assert [details.speech_text for details in spoken] == ["Hello", "Bye"]
    assert controller.current_dialogue is None
    for node in (entry, first, second):
        assert controller.was_node_visited(dialogue, node.node_index)


def test_speech_node_requires_transition_type():
    with pytest.raises(ValueError):
        SpeechNode(SpeechDetails(speech_text="x"), None)


def test_speech_node_option_points_at_itself():
    node = speech("Hi")
    option = node.as_option()
    assert option.target_node is node
    assert option.details is node.details


def test_missing_speaker_ends_dialogue_without_speech():
    dialogue, entry = make_dialogue()
    node = add(dialogue, speech("Who?", speaker="Narrator"))
    link(entry, node)
    controller, _, spoken = run(dialogue)
    assert spoken == []
    assert controller.current_dialogue is None


def test_ignored_content_is_not_displayed_but_dialogue_moves_on():
    dialogue, entry = make_dialogue()
    hidden = add(dialogue, speech("Hidden", ignore_content=True))
    shown = add(dialogue, speech("Shown"))
    link(entry, hidden)
    link(hidden, shown)
    _, _, spoken = run(dialogue)
    assert [details.speech_text for details in spoken] == ["Shown"]


def test_start_audio_sets_flags_and_plays_sound():
    dialogue, entry = make_dialogue()
    node = add(dialogue, speech("Hi", speech_audio="hi.wav", behavior_flags=frozenset({"wave"})))
    link(entry, node)
    controller, npc, _ = run(dialogue)
    assert controller.current_dialogue is dialogue
    assert npc.is_playing
    assert npc.sound == "hi.wav"
    assert npc.behavior_flags == {"wave"}


def test_skip_respects_can_skip():
    dialogue, entry = make_dialogue()
    node = add(dialogue, speech("Listen", speech_audio="a.wav", can_skip=False))
    link(entry, node)
    controller, npc, _ = run(dialogue)
    controller.skip()
    assert controller.current_dialogue is dialogue
    npc.finish_audio()
    assert controller.current_dialogue is None


def test_branch_all_and_any():
    branch = BranchNode()
    branch.init_branch_data(False, None, None, [Fixed(True), Fixed(False)])
    assert not branch.passes_conditions()
    branch.if_any = True
    assert branch.passes_conditions()
    branch.clear_conditions()
    assert not branch.passes_conditions()
    branch.if_any = False
    assert branch.passes_conditions()


def test_branch_option_uses_chosen_side_details():
    yes, no = speech("Yes"), speech("No")
    branch = BranchNode()
    branch.init_branch_data(False, yes, no, [Fixed(True)])
    option = branch.as_option()
    assert option.details is yes.details
    assert option.target_node is branch
    branch.init_branch_data(False, yes, no, [Fixed(False)])
    assert branch.as_option().details is no.details
    branch.init_branch_data(False, None, None, [])
    assert branch.as_option() == DialogueOption()


@pytest.mark.parametrize("met, expected", [(True, "Yes"), (False, "No")])
def test_branch_enters_matching_node(met, expected):
    dialogue, entry = make_dialogue()
    branch = add(dialogue, BranchNode())
    yes = add(dialogue, speech("Yes"))
    no = add(dialogue, speech("No"))
    link(entry, branch)
    branch.init_branch_data(False, yes, no, [Fixed(met)])
    _, _, spoken = run(dialogue)
    assert [details.speech_text for details in spoken] == [expected]


def test_branch_without_target_ends_dialogue():
    dialogue, entry = make_dialogue()
    branch = add(dialogue, BranchNode())
    link(entry, branch)
    branch.init_branch_data(False, speech("Yes"), None, [Fixed(False)])
    controller, _, spoken = run(dialogue)
    assert spoken == []
    assert controller.current_dialogue is None


def test_event_node_plays_events_then_continues():
    dialogue, entry = make_dialogue()
    events = [CountingEvent(), CountingEvent()]
    event_node = add(dialogue, EventNode(events))
    after = add(dialogue, speech("After"))
    link(entry, event_node)
    link(event_node, after)
    _, _, spoken = run(dialogue)
    assert [event.played for event in events] == [1, 1]
    assert [details.speech_text for details in spoken] == ["After"]


def test_event_node_without_child_ends_dialogue():
    dialogue, entry = make_dialogue()
    event = CountingEvent()
    event_node = add(dialogue, EventNode([event]))
    link(entry, event_node)
    controller, _, _ = run(dialogue)
    assert event.played == 1
    assert controller.current_dialogue is None
    assert event_node.as_option() == DialogueOption()


def test_event_node_option_forwards_child_details():
    event_node = EventNode()
    child = speech("Next")
    link(event_node, child)
    option = event_node.as_option()
    assert option.details is child.details
    assert option.target_node is event_node


def test_jump_target_must_exist():
    with pytest.raises(ValueError):
        JumpNode().set_jump_target(None)


def test_jump_node_moves_to_target():
    dialogue, entry = make_dialogue()
    jump = add(dialogue, JumpNode())
    target = add(dialogue, speech("Landed"))
    link(entry, jump)
    jump.set_jump_target(target)
    _, _, spoken = run(dialogue)
    assert [details.speech_text for details in spoken] == ["Landed"]
    option = jump.as_option()
    assert option.details is target.details
    assert option.target_node is jump
    assert JumpNode().as_option() == DialogueOption()