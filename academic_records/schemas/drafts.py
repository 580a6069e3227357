from typing import Dict, Optional

from pydantic import BaseModel, Field

# ✅ payload persisted for one draft scope
class DraftState(BaseModel):
    grades: Dict[str, Optional[float]] = Field(default_factory=dict)   # enrollment ID -> marks (null = not a number)
    last_saved: float = 0.0                                             # epoch seconds of the last write
