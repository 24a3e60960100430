"""Cache keys for the public festival pages and per-user plan pages.

Day-scoped pages are keyed by ISO date; requests without a day use
``DEFAULT_DAY``. Each family of day pages has an index key listing the
page keys currently cached, so all of them can be dropped together.
"""

from datetime import date

FESTIVAL_LIST_KEY = "festivals:list"
DEFAULT_DAY = "default"


def day_token(day: date | None) -> str:
    return day.isoformat() if day else DEFAULT_DAY


def festival_key(slug: str) -> str:
    return f"festivals:{slug}"


def schedule_key(slug: str, day: date | None) -> str:
    return f"festivals:{slug}:schedule:{day_token(day)}"


def schedule_index_key(slug: str) -> str:
    return f"festivals:{slug}:schedule-pages"


def plan_key(plan_id: object, day: date | None) -> str:
    return f"plans:{plan_id}:{day_token(day)}"


def plan_index_key(plan_id: object) -> str:
    return f"plans:{plan_id}:pages"
