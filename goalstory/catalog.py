# =============================================================================
# goalstory/catalog.py  —  The Tool Catalog (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Declares every tool the gateway exposes, as DATA.  Each CatalogEntry is
#
#     definition  — name, description, argument model (its JSON Schema is
#                   what tools/list shows)
#     build       — validated args + base URL → BackendRequest
#     label       — the text prefix put in front of a successful reply
#
#   The dispatcher never branches on tool names.  Adding a tool means adding
#   one entry to _ENTRIES below.
#
# TOOL NAMING CONVENTIONS:
#   - goalstory_read_*    → GET, safe to retry
#   - goalstory_create_*  → POST
#   - goalstory_update_*  → PATCH, only the supplied fields are sent
#   - goalstory_destroy_* → DELETE
#
# DISCOVERY ORDER:
#   list_tools() returns definitions in the order of _ENTRIES.  Clients show
#   them in that order, so related tools are kept together (users, goals,
#   focus/context, steps, stories, scheduled stories).
#
# DESCRIPTIONS:
#   The calling LLM reads these to decide WHEN to call a tool and HOW to
#   fill its arguments.  The step tools spell out the ordering rule
#   (smallest order_ts = step 1) because reversing it is an easy mistake.
# =============================================================================

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

from goalstory import step_order, time_settings
from goalstory.models import BackendRequest, ToolDefinition, ToolResult
from goalstory.request_builder import entity_path, make_request, pick_optional, query_string
from goalstory.schemas import (
    CreateGoalArguments,
    CreateScheduledStoryArguments,
    CreateStepsArguments,
    CreateStoryArguments,
    DestroyGoalArguments,
    DestroyScheduledStoryArguments,
    DestroyStepArguments,
    NoArguments,
    ReadGoalsArguments,
    ReadOneGoalArguments,
    ReadOneStepArguments,
    ReadOneStoryArguments,
    ReadScheduledStoriesArguments,
    ReadStepsArguments,
    ReadStoriesArguments,
    SetStepsOrderArguments,
    StoryContextArguments,
    UpdateGoalArguments,
    UpdateScheduledStoryArguments,
    UpdateSelfUserArguments,
    UpdateStepArguments,
    UpdateStepNotesArguments,
)


Builder = Callable[[Mapping[str, Any], str], Union[BackendRequest, ToolResult]]


@dataclass(frozen=True)
class CatalogEntry:
    """A tool definition plus how to turn a call into one backend request."""

    definition: ToolDefinition
    build: Builder
    label: str                         # str.format_map() template over the arguments

    @property
    def name(self) -> str:
        return self.definition.name

    def success_label(self, args: Mapping[str, Any]) -> str:
        return self.label.format_map(_LabelArgs(args))


class _LabelArgs(dict):
    """format_map() source that renders unknown keys as empty strings."""

    def __missing__(self, key):
        return ""


# =============================================================================
# Request builders
# =============================================================================
# Factories for the common shapes, so most entries are one line of data.
# =============================================================================
def fixed(method: str, path: str) -> Builder:
    """No arguments: e.g. GET /about."""
    def build(args, base_url):
        return make_request(method, base_url, path)
    return build


def by_id(method: str, collection: str) -> Builder:
    """Entity addressed by id, no body: GET/DELETE /collection/:id."""
    def build(args, base_url):
        return make_request(method, base_url, entity_path(collection, args["id"]))
    return build


def listing(path: str, required: tuple[str, ...] = (), optional: tuple[str, ...] = ("page", "limit")) -> Builder:
    """GET with query parameters: required ones always, optional when present."""
    def build(args, base_url):
        return make_request("GET", base_url, path, query=query_string(args, required, optional))
    return build


def create(path: str, required: tuple[str, ...], optional: tuple[str, ...] = ()) -> Builder:
    """POST with a JSON body of required fields plus present optional ones."""
    def build(args, base_url):
        body = {name: args[name] for name in required}
        body.update(pick_optional(args, optional))
        return make_request("POST", base_url, path, body=body)
    return build


def update(path: str, optional: tuple[str, ...], with_id: bool = False) -> Builder:
    """PATCH with only the supplied optional fields.

    With with_id, the entity id is appended to the path; without it the
    path is fixed (PATCH /users).  The body is always an object, possibly {}.
    """
    def build(args, base_url):
        target = entity_path(path, args["id"]) if with_id else path
        return make_request("PATCH", base_url, target, body=pick_optional(args, optional))
    return build


def create_steps(args, base_url):
    names = args["steps"]
    if not names:
        return ToolResult("Steps created:\nNo steps provided; nothing was created.")
    body = {"goal_id": args["goal_id"], "steps": step_order.step_payloads(names)}
    return make_request("POST", base_url, "/steps", body=body)


def set_steps_order(args, base_url):
    step_ids = args["ordered_steps_ids"]
    if not step_ids:
        return ToolResult("Steps order updated:\nNo step ids provided; nothing was reordered.")
    body = {"steps": step_order.reorder_payloads(step_ids)}
    return make_request("POST", base_url, "/steps/order", body=body)


def update_step_notes(args, base_url):
    return make_request(
        "PATCH", base_url, entity_path("/step/notes", args["id"]), body={"notes": args["notes"]}
    )


def create_scheduled_story(args, base_url):
    body = {"goal_id": args["goal_id"]}
    body.update(time_settings.schedule_fields(args["timeSettings"]))
    return make_request("POST", base_url, "/schedules/stories", body=body)


def update_scheduled_story(args, base_url):
    body: dict[str, Any] = {}
    if args.get("timeSettings") is not None:
        body.update(time_settings.schedule_fields(args["timeSettings"]))
    body.update(pick_optional(args, ("status",)))
    return make_request(
        "PATCH", base_url, entity_path("/schedules/stories", args["id"]), body=body
    )


# =============================================================================
# Shared descriptions
# =============================================================================
STEP_ORDER_NOTE = (
    "IMPORTANT: Steps are ordered by their 'order_ts' timestamp in ascending order - "
    "the step with the smallest timestamp value is step 1, and steps with larger "
    "timestamp values come later in the sequence. NOTE: Be careful not to reverse the "
    "order - smaller timestamps (earlier in time) = earlier steps in the sequence."
)


# =============================================================================
# The catalog
# =============================================================================
_ENTRIES = (
    # ---------- ABOUT ----------
    CatalogEntry(
        ToolDefinition(
            "goalstory_about",
            "Retrieve information about Goal Story's philosophy and the power of "
            "story-driven goal achievement. Use this to help users understand the "
            "unique approach of Goal Storying.",
            NoArguments,
        ),
        fixed("GET", "/about"),
        "About data:",
    ),
    # ---------- USERS ----------
    CatalogEntry(
        ToolDefinition(
            "goalstory_read_self_user",
            "Get the user's profile data including their preferences, belief systems, "
            "and past goal history to enable personalized goal storying and "
            "context-aware discussions.",
            NoArguments,
        ),
        fixed("GET", "/users"),
        "User data:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_update_self_user",
            "Update the user's profile including their name, visibility preferences, "
            "and personal context. When updating 'about' data, guide the user through "
            "questions to understand their motivations, beliefs, and goal-achievement "
            "style.",
            UpdateSelfUserArguments,
        ),
        update("/users", ("name", "about", "visibility")),
        "Updated user:",
    ),
    # ---------- GOALS ----------
    CatalogEntry(
        ToolDefinition(
            "goalstory_count_goals",
            "Get the total number of goals in the user's journey. Useful for tracking "
            "overall progress and goal management patterns.",
            NoArguments,
        ),
        fixed("GET", "/count/goals"),
        "Count of goals:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_create_goal",
            "Begin the goal clarification process by creating a new goal. Always "
            "discuss and refine the goal with the user before or after saving, "
            "ensuring it's well-defined and aligned with their aspirations. Confirm "
            "if any adjustments are needed after creation.",
            CreateGoalArguments,
        ),
        create("/goals", ("name",), ("description", "story_mode", "belief_mode")),
        "Goal created:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_update_goal",
            "Update goal details including name, status, description, outcomes, "
            "evidence of completion, and story/belief modes that influence how "
            "stories are generated.",
            UpdateGoalArguments,
        ),
        update(
            "/goals",
            ("name", "status", "description", "outcome", "evidence", "story_mode", "belief_mode"),
            with_id=True,
        ),
        "Goal updated:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_destroy_goal",
            "Remove a goal and all its associated steps and stories from the user's "
            "journey. Use with confirmation to prevent accidental deletion.",
            DestroyGoalArguments,
        ),
        by_id("DELETE", "/goals"),
        "Goal deleted:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_read_one_goal",
            "Retrieve detailed information about a specific goal to support focused "
            "discussion and story creation.",
            ReadOneGoalArguments,
        ),
        by_id("GET", "/goals"),
        "Goal data:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_read_goals",
            "Get an overview of the user's goal journey, with optional pagination to "
            "manage larger sets of goals.",
            ReadGoalsArguments,
        ),
        listing("/goals"),
        "Goals retrieved:",
    ),
    # ---------- CURRENT / CONTEXT ----------
    CatalogEntry(
        ToolDefinition(
            "goalstory_read_current_focus",
            "Identify which goal and step the user is currently focused on to "
            "maintain context in discussions and story creation.",
            NoArguments,
        ),
        fixed("GET", "/current"),
        "Current goal/step focus:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_get_story_context",
            "Gather rich context about the user, their current goal/step, beliefs, "
            "and motivations to create deeply personalized and meaningful stories. "
            "Combines user profile data with conversation insights.",
            StoryContextArguments,
        ),
        listing("/context", required=("goalId", "stepId"), optional=("feedback",)),
        "Story context:",
    ),
    # ---------- STEPS ----------
    CatalogEntry(
        ToolDefinition(
            "goalstory_create_steps",
            "Formulate actionable steps for a goal through thoughtful discussion. "
            "Present the steps for user review either before or after saving, "
            "ensuring they're clear and achievable. Confirm if any refinements are "
            "needed. The first item in your array will get the smallest timestamp "
            "(becoming step 1), and subsequent steps will have progressively larger "
            "timestamps. " + STEP_ORDER_NOTE,
            CreateStepsArguments,
        ),
        create_steps,
        "Steps created:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_read_steps",
            "Access the action plan for a specific goal, showing all steps in the "
            "journey toward achievement. " + STEP_ORDER_NOTE,
            ReadStepsArguments,
        ),
        listing("/steps", required=("goal_id",)),
        "Steps for goal '{goal_id}':",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_read_one_step",
            "Get detailed information about a specific step to support focused "
            "discussion and story creation.",
            ReadOneStepArguments,
        ),
        by_id("GET", "/steps"),
        "Step data:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_update_step",
            "Update step details including the name, completion status, evidence, "
            "and outcome. Use this to track progress and insights.",
            UpdateStepArguments,
        ),
        update("/steps", ("name", "status", "outcome", "evidence"), with_id=True),
        "Step updated:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_destroy_step",
            "Remove a specific step from a goal's action plan.",
            DestroyStepArguments,
        ),
        by_id("DELETE", "/steps"),
        "Step deleted:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_update_step_notes",
            "Update step notes with additional context, insights, or reflections in "
            "markdown format. Use this to capture valuable information from "
            "discussions.",
            UpdateStepNotesArguments,
        ),
        update_step_notes,
        "Step notes updated:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_set_steps_order",
            "Reorder steps in a goal by specifying the new sequence. This allows for "
            "prioritizing steps or reorganizing the workflow without deleting and "
            "recreating steps. " + STEP_ORDER_NOTE,
            SetStepsOrderArguments,
        ),
        set_steps_order,
        "Steps order updated:",
    ),
    # ---------- STORIES ----------
    CatalogEntry(
        ToolDefinition(
            "goalstory_create_story",
            "Generate and save a highly personalized story that visualizes "
            "achievement of the current goal/step. Uses understanding of the user's "
            "beliefs, motivations, and context to create engaging mental imagery. If "
            "context is needed, gathers it through user discussion and profile data.",
            CreateStoryArguments,
        ),
        create("/stories", ("goal_id", "step_id", "title", "story_text")),
        "Story created:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_read_stories",
            "Access the collection of personalized stories created for a specific "
            "goal/step pair, supporting reflection and motivation.",
            ReadStoriesArguments,
        ),
        listing("/stories", required=("goal_id", "step_id")),
        "Stories:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_read_one_story",
            "Retrieve a specific story to revisit the visualization and mental "
            "imagery created for goal achievement.",
            ReadOneStoryArguments,
        ),
        by_id("GET", "/stories"),
        "Story data:",
    ),
    # ---------- SCHEDULED STORIES ----------
    CatalogEntry(
        ToolDefinition(
            "goalstory_read_scheduled_stories",
            "Get a list of all scheduled story generation configurations for the "
            "user, with optional pagination. IMPORTANT: All times stored in Goal "
            "Story are in UTC, so you'll have to convert that to the user's local "
            "time.",
            ReadScheduledStoriesArguments,
        ),
        listing("/schedules/stories"),
        "Scheduled stories retrieved:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_create_scheduled_story",
            "Schedule automatic story generation for a specific goal. Requires the "
            "goal ID and the desired time settings (hour, AM/PM and the user's "
            "current UTC offset).",
            CreateScheduledStoryArguments,
        ),
        create_scheduled_story,
        "Scheduled story created:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_update_scheduled_story",
            "Update the configuration of a scheduled story generation, such as "
            "changing the time or its status (active/paused).",
            UpdateScheduledStoryArguments,
        ),
        update_scheduled_story,
        "Scheduled story updated:",
    ),
    CatalogEntry(
        ToolDefinition(
            "goalstory_destroy_scheduled_story",
            "Delete a scheduled story generation configuration. Use with "
            "confirmation.",
            DestroyScheduledStoryArguments,
        ),
        by_id("DELETE", "/schedules/stories"),
        "Scheduled story deleted:",
    ),
)


CATALOG: Mapping[str, CatalogEntry] = MappingProxyType({e.name: e for e in _ENTRIES})

if len(CATALOG) != len(_ENTRIES):
    raise RuntimeError("Duplicate tool names in the catalog")


def get_tool(name: str) -> Optional[CatalogEntry]:
    """Look up a catalog entry by tool name.  None if unknown."""
    return CATALOG.get(name)


def list_tools() -> tuple[ToolDefinition, ...]:
    """All tool definitions, in declaration order."""
    return tuple(entry.definition for entry in _ENTRIES)


def tool_names() -> tuple[str, ...]:
    return tuple(entry.name for entry in _ENTRIES)
