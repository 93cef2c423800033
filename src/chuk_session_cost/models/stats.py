# chuk_session_cost/models/stats.py
"""Statistics for the summary cache."""

from pydantic import BaseModel, Field


class SummaryCacheStats(BaseModel):
    """Counters describing how often a cached summary was reused."""

    hits: int = Field(default=0, description="Fingerprint matched, summary reused")
    misses: int = Field(default=0, description="Full recomputations")
    skips: int = Field(default=0, description="Latest event had no usage, summary reused")
    resets: int = Field(default=0, description="Entry cleared by an empty or shrunken session")
    event_count: int = Field(default=0, description="Events seen at the last evaluation")

    @property
    def reuse_rate(self) -> float:
        """Share of evaluations answered without recomputing."""
        total = self.hits + self.skips + self.misses
        if total == 0:
            return 0.0
        return (self.hits + self.skips) / total
