"""Argument validation through each tool's pydantic model."""

import pytest

from goalstory.catalog import get_tool
from goalstory.schemas import ValidationError, is_number, validate_arguments


def definition(name):
    return get_tool(name).definition


def problems_of(name, arguments):
    with pytest.raises(ValidationError) as info:
        validate_arguments(definition(name), arguments)
    return info.value.problems


def test_none_optional_values_are_dropped():
    validated = validate_arguments(definition("goalstory_update_goal"), {"id": "g1", "name": None})
    assert validated.values == {"id": "g1"}


def test_none_required_value_counts_as_missing():
    problems = problems_of("goalstory_read_one_goal", {"id": None})
    assert [str(p) for p in problems] == ["id: is required"]


def test_every_problem_is_collected():
    with pytest.raises(ValidationError) as info:
        validate_arguments(definition("goalstory_create_story"), {"goal_id": "g1", "title": 5})
    paths = sorted(p.path for p in info.value.problems)
    assert paths == ["step_id", "story_text", "title"]
    assert str(info.value).startswith("Invalid arguments for goalstory_create_story: ")


def test_blank_required_string_is_rejected():
    with pytest.raises(ValidationError, match="id: must not be empty"):
        validate_arguments(definition("goalstory_read_one_goal"), {"id": "  "})


def test_unknown_keys_are_reported_as_ignored():
    validated = validate_arguments(definition("goalstory_about"), {"b": 1, "a": 2})
    assert validated.values == {}
    assert validated.ignored == ["a", "b"]


def test_non_object_arguments():
    problems = problems_of("goalstory_about", ["nope"])
    assert [str(p) for p in problems] == ["arguments: expected an object, got array"]


@pytest.mark.parametrize("value, kind", [(True, "boolean"), ("1", "string"), ([1], "array")])
def test_numbers_reject_other_types(value, kind):
    problems = problems_of("goalstory_update_self_user", {"visibility": value})
    assert [str(p) for p in problems] == [f"visibility: expected a number, got {kind}"]


@pytest.mark.parametrize("value", [0, 1, 2.5])
def test_numbers_keep_their_value(value):
    validated = validate_arguments(definition("goalstory_update_self_user"), {"visibility": value})
    assert validated.values == {"visibility": value}


def test_time_settings_outside_choices():
    problems = problems_of(
        "goalstory_create_scheduled_story",
        {"goal_id": "g1", "timeSettings": {"hour": "13", "period": "AM", "utcOffset": "+01:00"}},
    )
    assert [p.path for p in problems] == ["timeSettings.hour"]


def test_time_settings_are_dumped_as_plain_values():
    validated = validate_arguments(
        definition("goalstory_create_scheduled_story"),
        {"goal_id": "g1", "timeSettings": {"hour": "9", "period": "AM", "utcOffset": "+01:00", "x": 1}},
    )
    assert validated.values["timeSettings"] == {"hour": "9", "period": "AM", "utcOffset": "+01:00"}


def test_string_array_rejects_non_strings():
    problems = problems_of("goalstory_set_steps_order", {"ordered_steps_ids": ["a", 2]})
    assert [p.path for p in problems] == ["ordered_steps_ids.1"]


def test_comma_separated_string_becomes_a_list():
    validated = validate_arguments(
        definition("goalstory_create_steps"), {"goal_id": "g1", "steps": "Buy shoes, Run 1K,, Run 5K"}
    )
    assert validated.values["steps"] == ["Buy shoes", "Run 1K", "Run 5K"]


def test_nested_object_must_be_an_object():
    problems = problems_of(
        "goalstory_create_scheduled_story", {"goal_id": "g1", "timeSettings": "9am"}
    )
    assert [p.path for p in problems] == ["timeSettings"]


@pytest.mark.parametrize("value, expected", [(0, True), (1.5, True), (True, False), ("1", False)])
def test_is_number(value, expected):
    assert is_number(value) is expected
