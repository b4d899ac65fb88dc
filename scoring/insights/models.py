from typing import Tuple
from pydantic import BaseModel, ConfigDict


class InsightSet(BaseModel):
    """Templated messages for one analysis, each list de-duplicated in template order."""
    model_config = ConfigDict(frozen=True)

    insights: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
