from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field


class DetectionReport(BaseModel):
    """Markers and additive codes found in one product's ingredients."""
    model_config = ConfigDict(frozen=True)

    matched_markers: Tuple[str, ...] = ()
    additive_codes: Tuple[str, ...] = ()
    raw_additive_count: int = Field(0, ge=0)

    @property
    def has_markers(self) -> bool:
        return len(self.matched_markers) > 0
