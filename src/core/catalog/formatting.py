"""
Human-friendly formatting for sizes and timestamps.

Registered as Jinja filters so templates can show "83.9 MB" and
"3 days ago" without doing any parsing themselves.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Union

import humanize

from .catalog import parse_timestamp

logger = logging.getLogger(__name__)


def human_size(size_bytes: Optional[int]) -> str:
    """Format a byte count, e.g. 83886080 -> '83.9 MB'."""
    return humanize.naturalsize(size_bytes or 0)


def human_time(
    value: Union[str, datetime, None],
    now: Optional[datetime] = None,
) -> str:
    """
    Format a timestamp relative to now, e.g. '2 hours ago'.

    A timestamp that can't be parsed is logged and shown as "now";
    a bad value in one row shouldn't break the page.
    """
    now = now or datetime.now(timezone.utc)

    if isinstance(value, datetime):
        moment = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    else:
        moment = parse_timestamp(value or "")
        if moment is None:
            logger.warning(
                "Could not parse timestamp",
                extra={"input_time": value}
            )
            moment = now

    return humanize.naturaltime(now - moment)
