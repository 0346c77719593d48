# =============================================================================
# goalstory/models.py  —  Data Models (the "nouns" of the gateway)
# =============================================================================
#
# These dataclasses define the shape of everything that flows through one
# tool invocation:
#
#   ToolCall ──▶ ToolDefinition (+ its pydantic arguments model)
#            ──▶ BackendRequest ──▶ ToolResult
#
# They carry almost no behavior.  The few methods here only RENDER a model
# into another representation (JSON Schema for discovery, the MCP content
# list for a reply).
#
# IMMUTABILITY:
#   Definitions and requests are frozen.  The catalog is built once at import
#   time and shared by every call; a BackendRequest is built fresh per call
#   and never reused.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel


HTTP_METHODS = ("GET", "POST", "PATCH", "DELETE")


# -----------------------------------------------------------------------------
# ToolDefinition — what tools/list advertises for one tool
# -----------------------------------------------------------------------------
# Each tool has a pydantic argument model (goalstory/schemas.py).  Its JSON
# Schema is the inputSchema clients see.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDefinition:
    """Name, description and argument model of one catalog tool."""

    name: str                          # globally unique, e.g. "goalstory_create_goal"
    description: str                   # read by the calling LLM to decide WHEN to call
    arguments: type[BaseModel]         # validates the call and renders inputSchema

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.arguments.model_json_schema()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


# -----------------------------------------------------------------------------
# ToolCall — one incoming invocation
# -----------------------------------------------------------------------------
# arguments is None when the caller sent no argument bag at all.  That is a
# different case from an empty dict, which is a valid (empty) bag.
# -----------------------------------------------------------------------------
@dataclass
class ToolCall:
    name: str
    arguments: Optional[dict[str, Any]] = None


# -----------------------------------------------------------------------------
# BackendRequest — the single HTTP exchange a tool call maps to
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class BackendRequest:
    """An HTTP call against the Goal Story backend."""

    method: str                        # GET / POST / PATCH / DELETE
    url: str                           # absolute: base + path + query string
    body: Any = None                   # JSON value; None means "send no body"

    def __post_init__(self):
        if self.method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method {self.method!r}")


# -----------------------------------------------------------------------------
# ToolResult — the uniform envelope returned for EVERY call
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolResult:
    """Text shown to the calling agent, plus whether it describes a failure."""

    text: str
    is_error: bool = False

    def to_mcp(self) -> dict[str, Any]:
        """Render as an MCP CallToolResult payload."""
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


# -----------------------------------------------------------------------------
# UtcTime — the UTC form of a daily schedule preference
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class UtcTime:
    """Time of day in UTC.  No date: schedules recur daily."""

    hour: int                          # 0 .. 23
    minute: int = 0                    # 0 .. 59

    def as_hhmm(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


# -----------------------------------------------------------------------------
# OrderedItem — a step payload (or step id) paired with its order key
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class OrderedItem:
    value: Any
    order_ts: str                      # StepOrderKey: ISO-8601 UTC, millisecond precision


@dataclass
class ValidationProblem:
    """One thing wrong with a tool's arguments."""

    path: str                          # "timeSettings.utcOffset"
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class ValidatedArguments:
    """Arguments that passed schema validation.

    values holds only the fields the schema knows about; unknown extra keys
    from the caller are listed in ignored and dropped.
    """

    values: dict[str, Any] = field(default_factory=dict)
    ignored: list[str] = field(default_factory=list)
