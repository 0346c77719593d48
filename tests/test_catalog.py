"""Catalog shape: names, order, schemas and labels."""

import pytest

from goalstory.catalog import CATALOG, get_tool, list_tools, tool_names
from goalstory.schemas import ToolArguments
from goalstory.time_settings import UTC_OFFSETS


EXPECTED_ORDER = (
    "goalstory_about",
    "goalstory_read_self_user",
    "goalstory_update_self_user",
    "goalstory_count_goals",
    "goalstory_create_goal",
    "goalstory_update_goal",
    "goalstory_destroy_goal",
    "goalstory_read_one_goal",
    "goalstory_read_goals",
    "goalstory_read_current_focus",
    "goalstory_get_story_context",
    "goalstory_create_steps",
    "goalstory_read_steps",
    "goalstory_read_one_step",
    "goalstory_update_step",
    "goalstory_destroy_step",
    "goalstory_update_step_notes",
    "goalstory_set_steps_order",
    "goalstory_create_story",
    "goalstory_read_stories",
    "goalstory_read_one_story",
    "goalstory_read_scheduled_stories",
    "goalstory_create_scheduled_story",
    "goalstory_update_scheduled_story",
    "goalstory_destroy_scheduled_story",
)


def test_catalog_lists_every_tool_in_order():
    assert tool_names() == EXPECTED_ORDER
    assert len(CATALOG) == 25


def test_names_are_unique():
    assert len(set(tool_names())) == len(tool_names())


def test_unknown_tool_lookup_returns_none():
    assert get_tool("goalstory_launch_rocket") is None


@pytest.mark.parametrize("definition", list_tools(), ids=lambda d: d.name)
def test_every_schema_is_an_object_with_a_description(definition):
    schema = definition.input_schema
    assert schema["type"] == "object"
    assert isinstance(schema["properties"], dict)
    assert definition.description
    for name in schema.get("required", []):
        assert name in schema["properties"]


def test_create_goal_requires_only_name():
    schema = get_tool("goalstory_create_goal").definition.input_schema
    assert schema["required"] == ["name"]
    assert set(schema["properties"]) == {"name", "description", "story_mode", "belief_mode"}


def test_update_self_user_has_no_required_fields():
    schema = get_tool("goalstory_update_self_user").definition.input_schema
    assert "required" not in schema
    assert {"type": "number"} in schema["properties"]["visibility"]["anyOf"]


def test_create_steps_declares_a_string_array():
    steps = get_tool("goalstory_create_steps").definition.input_schema["properties"]["steps"]
    assert steps["type"] == "array"
    assert steps["items"] == {"type": "string"}
    assert steps["description"].startswith("List of clear, actionable step descriptions")


def test_time_settings_schema_enumerates_the_domain():
    schema = get_tool("goalstory_create_scheduled_story").definition.input_schema
    assert schema["required"] == ["goal_id", "timeSettings"]
    assert schema["properties"]["timeSettings"]["$ref"] == "#/$defs/TimeSettings"

    time_settings = schema["$defs"]["TimeSettings"]
    assert time_settings["required"] == ["hour", "period", "utcOffset"]
    assert time_settings["properties"]["hour"]["enum"] == [str(h) for h in range(1, 13)]
    assert time_settings["properties"]["period"]["enum"] == ["AM", "PM"]
    assert time_settings["properties"]["utcOffset"]["enum"] == list(UTC_OFFSETS)


def test_update_scheduled_story_time_settings_optional():
    schema = get_tool("goalstory_update_scheduled_story").definition.input_schema
    assert schema["required"] == ["id"]


@pytest.mark.parametrize("definition", list_tools(), ids=lambda d: d.name)
def test_input_schema_is_rendered_from_the_argument_model(definition):
    assert issubclass(definition.arguments, ToolArguments)
    assert definition.input_schema == definition.arguments.model_json_schema()


def test_to_dict_uses_mcp_key_names():
    data = get_tool("goalstory_about").definition.to_dict()
    assert set(data) == {"name", "description", "inputSchema"}
    assert data["inputSchema"]["type"] == "object"
    assert data["inputSchema"]["properties"] == {}


def test_success_label_interpolates_arguments():
    entry = get_tool("goalstory_read_steps")
    assert entry.success_label({"goal_id": "g-42"}) == "Steps for goal 'g-42':"


def test_success_label_with_missing_argument_renders_blank():
    entry = get_tool("goalstory_read_steps")
    assert entry.success_label({}) == "Steps for goal '':"
