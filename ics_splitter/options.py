"""Options for splitting a calendar.

The options mirror the settings a user picks before splitting: whether to
strip incompatible properties, the size limit for each output file and an
optional date range. Values can be populated using either the python field
names or the camel case names used by browser and JSON callers:

```python
options = SplitOptions.from_dict({"maxSizeBytes": 1024 * 1024, "cleanMode": False})
```
"""

from __future__ import annotations

import datetime
import logging
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .dates import normalize_date
from .exceptions import SplitOptionsError

__all__ = [
    "DEFAULT_MAX_SIZE_BYTES",
    "SplitOptions",
]

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_SIZE_BYTES = 500 * 1024

DateOrDatetime = Union[datetime.datetime, datetime.date]


class SplitOptions(BaseModel):
    """Settings used when filtering and splitting events."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    clean_mode: bool = Field(default=True, alias="cleanMode")
    """Remove properties known to break imports, see `writer.CLEAN_MODE_DENYLIST`."""

    max_size_bytes: int = Field(
        default=DEFAULT_MAX_SIZE_BYTES, alias="maxSizeBytes", gt=0
    )
    """Target upper bound for the estimated size of each output calendar."""

    start_date: Optional[DateOrDatetime] = Field(default=None, alias="startDate")
    """Earliest event start to include, unbounded if not set."""

    end_date: Optional[DateOrDatetime] = Field(default=None, alias="endDate")
    """Latest event start to include, a plain date includes the whole day."""

    @model_validator(mode="after")
    def _check_date_range(self) -> "SplitOptions":
        """Validate that the date range is not reversed."""
        if self.start_date is None or self.end_date is None:
            return self
        if normalize_date(self.start_date) > normalize_date(
            self.end_date, end_of_day=True
        ):
            raise ValueError(
                f"Start date {self.start_date} must not be after end date {self.end_date}"
            )
        return self

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SplitOptions":
        """Create options from a dictionary, raising SplitOptionsError if invalid."""
        try:
            options = cls.model_validate(data)
        except ValidationError as err:
            raise SplitOptionsError(
                "Invalid split options", detailed_error=str(err)
            ) from err
        _LOGGER.debug("Using split options %s", options)
        return options
