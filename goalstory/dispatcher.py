# =============================================================================
# goalstory/dispatcher.py  —  Tool Name + Arguments → ToolResult
# =============================================================================
#
# WHAT THIS FILE DOES:
#   The single entry point for a tool call.  Every call walks four stages
#   and ALWAYS ends in a ToolResult, success or error:
#
#     1. RECEIVED   no argument bag at all → "No arguments provided"
#     2. VALIDATED  unknown tool → "Unknown tool: <name>"
#                   arguments checked against the tool's schema
#     3. EXECUTED   the catalog entry builds ONE BackendRequest, which is
#                   sent; nothing else touches the network
#     4. COMPLETED  reply → "<label>\n<pretty JSON>", isError=False
#                   failure → "Error: <diagnostics>", isError=True
#
#   Stages 1 and 2 never make an HTTP call.  No exception escapes
#   dispatch(): validation errors, backend errors and unexpected faults are
#   all turned into error envelopes here.
#
# STATE:
#   A Dispatcher holds only its GatewayConfig, its BackendClient and a
#   reference to the read-only catalog.  Calls share nothing else, so
#   several dispatchers (one per fake backend in tests, say) can coexist.
# =============================================================================

import json
import logging
from typing import Any, Mapping, Optional, Union

import httpx

from goalstory.backend import BackendClient, BackendError
from goalstory.catalog import CATALOG, CatalogEntry
from goalstory.config import GatewayConfig
from goalstory.models import BackendRequest, ToolCall, ToolResult
from goalstory.schemas import ValidationError, validate_arguments


logger = logging.getLogger(__name__)

NO_ARGUMENTS = "No arguments provided"


def format_payload(payload: Any) -> str:
    """Pretty-print a backend reply for the result text."""
    if isinstance(payload, str):
        return payload
    return json.dumps(payload, indent=2, ensure_ascii=False)


class Dispatcher:
    """Routes tool calls through validation, request building and the backend."""

    def __init__(
        self,
        config: GatewayConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        catalog: Mapping[str, CatalogEntry] = CATALOG,
    ):
        self.config = config
        self.catalog = catalog
        self.backend = BackendClient(config, http_client)

    # -------------------------------------------------------------------------
    # Stage 2: lookup + validation + building (pure, no I/O)
    # -------------------------------------------------------------------------
    def prepare(
        self, name: str, arguments: Any
    ) -> Optional[tuple[CatalogEntry, dict[str, Any], Union[BackendRequest, ToolResult]]]:
        """Validate a call and build its request without sending it.

        Returns:
            (entry, validated values, request), or None for an unknown tool
            name.  The request is a ToolResult instead when the tool has
            nothing to send (e.g. an empty list of steps).

        Raises:
            ValidationError: arguments do not match the tool's model.
        """
        entry = self.catalog.get(name)
        if entry is None:
            return None

        validated = validate_arguments(entry.definition, arguments)
        if validated.ignored:
            logger.info("%s: ignoring unknown arguments %s", name, ", ".join(validated.ignored))

        return entry, validated.values, entry.build(validated.values, self.config.base_url)

    # -------------------------------------------------------------------------
    # The full state machine
    # -------------------------------------------------------------------------
    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResult:
        """Run one tool call end to end.  Never raises."""

        # --- Stage 1: RECEIVED ---
        if arguments is None:
            return ToolResult(NO_ARGUMENTS, is_error=True)

        # --- Stage 2: VALIDATED ---
        try:
            prepared = self.prepare(name, arguments)
        except ValidationError as e:
            return ToolResult(f"Error: {e}", is_error=True)
        except Exception as e:
            logger.exception("Failed to build request for %s", name)
            return ToolResult(f"Error: {e}", is_error=True)

        if prepared is None:
            logger.warning("Unknown tool requested: %s", name)
            return ToolResult(f"Unknown tool: {name}", is_error=True)

        entry, values, request = prepared
        if isinstance(request, ToolResult):
            return request

        # --- Stage 3: EXECUTED ---
        logger.info("%s → %s %s", name, request.method, request.url)
        try:
            payload = await self.backend.send(request)
        except BackendError as e:
            return ToolResult(f"Error: {e}", is_error=True)
        except Exception as e:
            logger.exception("Unexpected failure calling backend for %s", name)
            return ToolResult(f"Error: {e}", is_error=True)

        # --- Stage 4: COMPLETED ---
        try:
            return ToolResult(f"{entry.success_label(values)}\n{format_payload(payload)}")
        except Exception as e:
            logger.exception("Failed to format reply for %s", name)
            return ToolResult(f"Error: {e}", is_error=True)

    async def call(self, call: ToolCall) -> ToolResult:
        return await self.dispatch(call.name, call.arguments)
