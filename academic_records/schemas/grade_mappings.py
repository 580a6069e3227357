from pydantic import BaseModel, ConfigDict
from typing import Optional

# ✅ one rule of the grade scale (marks range -> letter grade / grade point)
class GradeMapping(BaseModel):
    letter_grade: str                        # letter grade (e.g. A+, B, F)
    grade_point: float                       # grade point on the 4.0 scale
    min_marks: float                         # inclusive lower bound
    max_marks: float                         # inclusive upper bound
    id: Optional[str] = None                 # store row ID, when loaded from the DB

    model_config = ConfigDict(from_attributes=True, frozen=True)
