from types import SimpleNamespace

import pytest

from dialoguetree.picker import EMPTY_OPTIONS_TEXT, ObjectPicker


def make(*names):
    return [SimpleNamespace(name=name) for name in names]


def test_names_start_sorted_case_insensitively():
    picker = ObjectPicker(make("beta", "Alpha", "gamma"))
    assert picker.filtered_names == ["Alpha", "beta", "gamma"]
    assert picker.is_open is True


def test_custom_name_getter():
    objects = [SimpleNamespace(label="Node B"), SimpleNamespace(label="Node A")]
    picker = ObjectPicker(objects, name_getter=lambda obj: obj.label)
    assert picker.filtered_names == ["Node A", "Node B"]
    assert picker.collection["Node A"] is objects[1]


def test_duplicate_names_keep_last_object():
    objects = make("Same", "Same")
    picker = ObjectPicker(objects)
    assert picker.collection == {"Same": objects[1]}


def test_empty_collection_rejected():
    with pytest.raises(ValueError):
        ObjectPicker([])


def test_filter_ignores_case_and_spaces():
    picker = ObjectPicker(make("Speech 1", "Speech 2", "Branch"))
    assert picker.filter("speech1") == ["Speech 1"]
    assert picker.filter("  SPE ECH") == ["Speech 1", "Speech 2"]
    assert picker.search_text == "  SPE ECH"


def test_filter_without_matches_shows_placeholder():
    picker = ObjectPicker(make("Alpha"))
    assert picker.filter("zzz") == []
    assert picker.entries == [EMPTY_OPTIONS_TEXT]


def test_blank_search_restores_every_name():
    picker = ObjectPicker(make("Alpha", "Beta"))
    picker.filter("alp")
    assert picker.filter("   ") == ["Alpha", "Beta"]
    picker.filter("bet")
    picker.clear_search()
    assert set(picker.entries) == {"Alpha", "Beta"}
    assert picker.search_text == ""


def test_select_reports_and_closes():
    objects = make("Alpha", "Beta")
    chosen = []
    picker = ObjectPicker(objects, on_select=chosen.append)
    result = picker.select("Beta")
    assert result is objects[1]
    assert chosen == [objects[1]]
    assert picker.is_open is False


def test_select_unknown_name_raises():
    picker = ObjectPicker(make("Alpha"))
    with pytest.raises(KeyError):
        picker.select("Missing")
    assert picker.is_open is True