# Models live in data/; imported here so Django registers them with the app
from .data.models import SchedulingItem, ReviewHistoryEntry  # noqa: F401
