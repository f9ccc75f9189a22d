from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

# Raw timestamps stay as delivered by the store; the report core parses them.
Timestamp = Union[datetime, date, str]


class DateRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    date_from: Optional[Timestamp] = None
    date_to: Optional[Timestamp] = None


class FilterSpec(BaseModel):
    """Criteria for one filtering pass. specialty == "all" disables the category check."""
    model_config = ConfigDict(frozen=True)

    date_range: DateRange = DateRange()
    specialty: str = "all"
    search_query: str = ""
