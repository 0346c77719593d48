# =============================================================================
# goalstory/request_builder.py  —  URL, Query and Body Composition
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Pure helpers that every catalog entry uses to turn validated arguments
#   into a BackendRequest.  Each helper encodes ONE of the composition rules:
#
#     entity_path()     id goes into the path segment (percent-encoded),
#                       never into the query string or body
#     pick_optional()   optional fields are sent only when present:
#                         - numbers: whenever the value IS a number (0 too)
#                         - strings: when non-empty
#                         - arrays:  when non-empty
#     query_string()    repeated key=value pairs via urlencode(doseq=True);
#                       no "key[]=" brackets, no comma joining
#     make_request()    base URL + path + query → absolute URL
#
#   None of these functions perform I/O.
# =============================================================================

from typing import Any, Iterable, Mapping, Optional
from urllib.parse import quote, urlencode

from goalstory.models import BackendRequest
from goalstory.schemas import is_number


def entity_path(collection: str, entity_id: str) -> str:
    """Build "/collection/<id>" with the id encoded as a single path segment."""
    return f"{collection}/{quote(str(entity_id), safe='')}"


def is_present(value: Any) -> bool:
    """Whether an optional value should be sent to the backend."""
    if is_number(value):
        return True
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    if isinstance(value, Mapping):
        return True
    return False


def pick_optional(args: Mapping[str, Any], names: Iterable[str]) -> dict[str, Any]:
    """Return only the named optional fields that are present in args."""
    return {name: args[name] for name in names if is_present(args.get(name))}


def query_string(
    args: Mapping[str, Any],
    required: Iterable[str] = (),
    optional: Iterable[str] = (),
) -> str:
    """Serialize query parameters as repeated key=value pairs.

    Required names are always included; optional names follow the
    pick_optional() presence rules.  Numbers are rendered with str(), so
    page=0 becomes "page=0".
    """
    pairs: dict[str, Any] = {name: args[name] for name in required}
    pairs.update(pick_optional(args, optional))
    return urlencode(
        {key: _query_value(value) for key, value in pairs.items()},
        doseq=True,
    )


def _query_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return str(value)


def make_request(
    method: str,
    base_url: str,
    path: str,
    query: str = "",
    body: Optional[Any] = None,
) -> BackendRequest:
    """Assemble the absolute URL and wrap everything in a BackendRequest."""
    url = f"{base_url}{path}"
    if query:
        url = f"{url}?{query}"
    return BackendRequest(method=method, url=url, body=body)
