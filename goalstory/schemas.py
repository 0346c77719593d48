# =============================================================================
# goalstory/schemas.py  —  Tool Argument Models & Validation
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   1. One pydantic model per tool describing its arguments.  The catalog
#      attaches a model to each ToolDefinition; its model_json_schema() is
#      the inputSchema clients see in tools/list.
#   2. validate_arguments(): runs a raw argument bag through the tool's
#      model at the boundary and returns a ValidatedArguments record, or
#      raises ValidationError listing EVERY problem pydantic found.
#
# VALIDATION POLICY:
#   - Required fields must be present (and non-empty, for strings).
#   - Supplied fields must have the declared type.  Numbers are checked by
#     type, not truthiness: 0 is a valid status/visibility.  bool is not a
#     number here even though Python says isinstance(True, int).
#   - hour / period / utcOffset must be one of their Literal values.
#   - Unknown top-level fields are tolerated (extra="ignore"): they are
#     dropped and reported in ValidatedArguments.ignored, never rejected.
#   - Fields that are None are treated as absent.
#   - A string given where a string array is declared is split on commas.
#     MCP inspectors often send "step1, step2" for array fields.
# =============================================================================

from typing import Annotated, Any, Mapping, Optional, Union

import pydantic
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    WithJsonSchema,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from goalstory.models import ToolDefinition, ValidatedArguments, ValidationProblem
from goalstory.time_settings import TimeSettings


class ValidationError(Exception):
    """Tool arguments did not match the tool's argument model."""

    def __init__(self, problems: list[ValidationProblem], tool_name: str = ""):
        self.problems = problems
        self.tool_name = tool_name
        details = "; ".join(str(p) for p in problems)
        prefix = f"Invalid arguments for {tool_name}" if tool_name else "Invalid arguments"
        super().__init__(f"{prefix}: {details}")

    @classmethod
    def from_pydantic(
        cls, error: pydantic.ValidationError, tool_name: str = ""
    ) -> "ValidationError":
        return cls([_problem(detail) for detail in error.errors()], tool_name)


def _problem(detail: Mapping[str, Any]) -> ValidationProblem:
    path = ".".join(str(part) for part in detail["loc"]) or "arguments"
    if detail["type"] == "missing":
        return ValidationProblem(path, "is required")
    if detail["type"] == "value_error":
        return ValidationProblem(path, str(detail["ctx"]["error"]))
    return ValidationProblem(path, detail["msg"])


# =============================================================================
# Field types
# =============================================================================
def is_number(value: Any) -> bool:
    """True for int/float values, False for bool and everything else."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _only_numbers(value: Any) -> Any:
    if not is_number(value):
        raise PydanticCustomError(
            "number_type", "expected a number, got {kind}", {"kind": _type_name(value)}
        )
    return value


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


def _split_commas(value: Any) -> Any:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


Number = Annotated[
    Union[int, float], BeforeValidator(_only_numbers), WithJsonSchema({"type": "number"})
]
RequiredText = Annotated[str, AfterValidator(_not_blank)]


class ToolArguments(BaseModel):
    """Base for every tool's argument model."""

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            raise PydanticCustomError(
                "object_type", "expected an object, got {kind}", {"kind": _type_name(data)}
            )
        return {key: value for key, value in data.items() if value is not None}


# -----------------------------------------------------------------------------
# Shared descriptions
# -----------------------------------------------------------------------------
def _id(what: str):
    return Field(description=f"Unique identifier of the {what}.")


def _page(noun: str):
    return Field(None, description=f"Page number for viewing subsets of {noun} (starts at 1).")


def _limit(noun: str):
    return Field(None, description=f"Maximum number of {noun} to return per page.")


TIME_SETTINGS_DESCRIPTION = (
    "Specifies the time of day for the scheduled story generation, in the user's "
    "local time. It is converted to UTC before it is saved."
)


# =============================================================================
# Argument models
# =============================================================================
class NoArguments(ToolArguments):
    """Tools that take no arguments (about, read_self_user, ...)."""


class UpdateSelfUserArguments(ToolArguments):
    name: Optional[str] = Field(
        None, description="The user's preferred name for their Goal Story profile."
    )
    about: Optional[str] = Field(
        None,
        description="Personal context including motivations, beliefs, and "
        "goal-achievement preferences gathered through guided questions.",
    )
    visibility: Optional[Number] = Field(
        None,
        description="Profile visibility setting where 0 = public (viewable by others) "
        "and 1 = private (only visible to user).",
    )


class CreateGoalArguments(ToolArguments):
    name: RequiredText = Field(
        description="Clear and specific title that captures the essence of the goal."
    )
    description: Optional[str] = Field(
        None,
        description="Detailed explanation of the goal, including context, motivation, "
        "and desired outcomes.",
    )
    story_mode: Optional[str] = Field(
        None,
        description="Narrative approach that shapes how future stories visualize goal "
        "achievement.",
    )
    belief_mode: Optional[str] = Field(
        None,
        description="Framework defining how the user's core beliefs and values "
        "influence this goal.",
    )


class UpdateGoalArguments(ToolArguments):
    id: RequiredText = _id("goal to be updated")
    name: Optional[str] = Field(None, description="Refined or clarified goal title.")
    status: Optional[Number] = Field(
        None,
        description="Goal progress status: 0 = active/in progress, 1 = successfully "
        "completed.",
    )
    description: Optional[str] = Field(
        None, description="Enhanced goal context, motivation, or outcome details."
    )
    outcome: Optional[str] = Field(
        None,
        description="Actual results and impact achieved through goal completion or progress.",
    )
    evidence: Optional[str] = Field(
        None,
        description="Concrete proof, measurements, or observations of goal "
        "progress/completion.",
    )
    story_mode: Optional[str] = Field(
        None, description="Updated narrative style for future goal achievement stories."
    )
    belief_mode: Optional[str] = Field(
        None, description="Refined understanding of how personal beliefs shape this goal."
    )


class DestroyGoalArguments(ToolArguments):
    id: RequiredText = _id("goal to be permanently removed")


class ReadOneGoalArguments(ToolArguments):
    id: RequiredText = _id("goal to retrieve")


class ReadGoalsArguments(ToolArguments):
    page: Optional[Number] = _page("goals")
    limit: Optional[Number] = _limit("goals")


class StoryContextArguments(ToolArguments):
    goalId: RequiredText = Field(description="Unique identifier of the goal for context gathering.")
    stepId: RequiredText = Field(
        description="Unique identifier of the specific step for context gathering."
    )
    feedback: Optional[str] = Field(
        None, description="Additional user input to enhance context understanding."
    )


class CreateStepsArguments(ToolArguments):
    goal_id: RequiredText = Field(
        description="Unique identifier of the goal these steps will help achieve."
    )
    steps: list[str] = Field(
        description="List of clear, actionable step descriptions in sequence. The first "
        "item in this array will become step 1, the second will become step 2, and so "
        "on based on timestamp ordering."
    )

    @field_validator("steps", mode="before")
    @classmethod
    def split_steps(cls, v):
        return _split_commas(v)


class ReadStepsArguments(ToolArguments):
    goal_id: RequiredText = Field(
        description="Unique identifier of the goal whose steps to retrieve."
    )
    page: Optional[Number] = _page("steps")
    limit: Optional[Number] = _limit("steps")


class ReadOneStepArguments(ToolArguments):
    id: RequiredText = _id("step to retrieve")


class UpdateStepArguments(ToolArguments):
    id: RequiredText = _id("step to update")
    name: Optional[str] = Field(None, description="Refined or clarified step description.")
    status: Optional[Number] = Field(
        None, description="Step completion status: 0 = pending/in progress, 1 = completed."
    )
    outcome: Optional[str] = Field(
        None, description="Results and impact achieved through completing this step."
    )
    evidence: Optional[str] = Field(
        None, description="Concrete proof or observations of step completion."
    )


class DestroyStepArguments(ToolArguments):
    id: RequiredText = _id("step to be permanently removed")


class UpdateStepNotesArguments(ToolArguments):
    id: RequiredText = _id("step to update")
    notes: RequiredText = Field(
        description="Additional context, insights, or reflections in markdown format."
    )


class SetStepsOrderArguments(ToolArguments):
    ordered_steps_ids: list[str] = Field(
        description="Array of step IDs in the desired new order. The first ID in this "
        "array will become step 1 (earliest timestamp), the second ID will become step "
        "2, and so on."
    )

    @field_validator("ordered_steps_ids", mode="before")
    @classmethod
    def split_ids(cls, v):
        return _split_commas(v)


class CreateStoryArguments(ToolArguments):
    goal_id: RequiredText = Field(description="Unique identifier of the goal this story supports.")
    step_id: RequiredText = Field(
        description="Unique identifier of the specific step this story visualizes."
    )
    title: RequiredText = Field(
        description="Engaging headline that captures the essence of the story."
    )
    story_text: RequiredText = Field(
        description="Detailed narrative that vividly illustrates goal/step achievement."
    )


class ReadStoriesArguments(ToolArguments):
    goal_id: RequiredText = Field(
        description="Unique identifier of the goal whose stories to retrieve."
    )
    step_id: RequiredText = Field(
        description="Unique identifier of the step whose stories to retrieve."
    )
    page: Optional[Number] = _page("stories")
    limit: Optional[Number] = _limit("stories")


class ReadOneStoryArguments(ToolArguments):
    id: RequiredText = _id("story to retrieve")


class ReadScheduledStoriesArguments(ToolArguments):
    page: Optional[Number] = _page("scheduled stories")
    limit: Optional[Number] = _limit("scheduled stories")


class CreateScheduledStoryArguments(ToolArguments):
    goal_id: RequiredText = Field(
        description="Unique identifier of the goal for which to schedule story generation."
    )
    timeSettings: TimeSettings = Field(description=TIME_SETTINGS_DESCRIPTION)


class UpdateScheduledStoryArguments(ToolArguments):
    id: RequiredText = _id("scheduled story configuration to update")
    timeSettings: Optional[TimeSettings] = Field(None, description=TIME_SETTINGS_DESCRIPTION)
    status: Optional[Number] = Field(
        None, description="Status of the scheduled story: 0 = Active, 1 = Paused."
    )


class DestroyScheduledStoryArguments(ToolArguments):
    id: RequiredText = _id("scheduled story configuration to delete")


# =============================================================================
# Validation
# =============================================================================
def validate_arguments(definition: ToolDefinition, arguments: Any) -> ValidatedArguments:
    """Check a raw argument bag against a tool's argument model.

    Args:
        definition: The catalog definition of the tool being called.
        arguments: The caller's argument bag (should be a mapping).

    Returns:
        ValidatedArguments with the known fields (type-checked, None values
        removed) and the names of any unknown fields that were dropped.

    Raises:
        ValidationError: if any required field is missing or any supplied
            field has the wrong type/value.  All problems pydantic reports
            are collected into one error.
    """
    model = definition.arguments
    try:
        parsed = model.model_validate(arguments)
    except pydantic.ValidationError as e:
        raise ValidationError.from_pydantic(e, definition.name) from e

    ignored = sorted(key for key in arguments if key not in model.model_fields)
    return ValidatedArguments(values=parsed.model_dump(exclude_none=True), ignored=ignored)
