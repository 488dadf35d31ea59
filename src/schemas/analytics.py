"""Analytics schemas."""

from pydantic import BaseModel


class AnalyticsSummary(BaseModel):
    """Aggregated counters for one press kit."""

    total_views: int
    unique_visitors: int
    section_views: dict[str, int]
    referrers: dict[str, int]
