# =============================================================================
# goalstory/step_order.py  —  Step Order Keys
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The Goal Story backend orders a goal's steps by their "order_ts"
#   timestamp, ascending: the smallest timestamp is step 1.  When the agent
#   creates or reorders steps it sends them as a list, and this module turns
#   that list into (item, order key) pairs whose ascending key order is
#   exactly the list order.
#
# THE KEYS:
#   Position i gets start + i milliseconds, rendered as ISO-8601 UTC with
#   millisecond precision ("2026-10-17T12:00:00.000Z").  With a fixed width
#   format, string order equals time order, so the keys sort correctly both
#   as text and as timestamps.  Only the relative order matters; the backend
#   owns the stored values.
#
# REPLACEMENT, NOT INSERTION:
#   Every call assigns keys to the WHOLE list it was given.  Nothing here
#   looks at, compares with, or merges into existing backend ordering.
# =============================================================================

from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

from goalstory.models import OrderedItem


ORDER_KEY_FIELD = "order_ts"
KEY_STEP = timedelta(milliseconds=1)


def format_order_key(moment: datetime) -> str:
    """Render a datetime as a StepOrderKey (UTC, millisecond precision)."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def assign_order_keys(items: Iterable[Any], start: Optional[datetime] = None) -> list[OrderedItem]:
    """Pair each item with a strictly increasing order key.

    Args:
        items: Step names (create) or step ids (reorder), in the order the
            caller wants them.  The first item becomes step 1.
        start: Timestamp for the first key.  Defaults to "now" in UTC.
            Naive datetimes are taken to be UTC.

    Returns:
        One OrderedItem per input item, same order.  Empty input gives an
        empty list.
    """
    if start is None:
        start = datetime.now(timezone.utc)
    elif start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    # Keys carry millisecond precision; truncate so position 0 renders exactly.
    start = start.replace(microsecond=(start.microsecond // 1000) * 1000)

    return [
        OrderedItem(value=item, order_ts=format_order_key(start + KEY_STEP * position))
        for position, item in enumerate(items)
    ]


def step_payloads(names: Iterable[str], start: Optional[datetime] = None) -> list[dict[str, str]]:
    """Create-steps payload: [{"name": ..., "order_ts": ...}, ...]."""
    return [
        {"name": item.value, ORDER_KEY_FIELD: item.order_ts}
        for item in assign_order_keys(names, start)
    ]


def reorder_payloads(step_ids: Iterable[str], start: Optional[datetime] = None) -> list[dict[str, str]]:
    """Reorder payload: [{"id": ..., "order_ts": ...}, ...]."""
    return [
        {"id": item.value, ORDER_KEY_FIELD: item.order_ts}
        for item in assign_order_keys(step_ids, start)
    ]
