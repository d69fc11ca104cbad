"""Activity records supplied by the upstream fitness platform."""

import logging
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Union

from pydantic import (
    AliasChoices,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError as PydanticValidationError,
    field_validator,
)

from ..exceptions import ActivityValidationError


logger = logging.getLogger(__name__)


# Activity types that count as running for pace-based calculations
RUN_TYPES = frozenset({"Run", "VirtualRun"})


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class ActivityRecord(BaseModel):
    """
    A single activity summary as returned by the upstream activities endpoint.

    Field names follow the upstream snake_case keys so raw payloads validate
    directly; serialization uses camelCase. ``start_date`` prefers the local
    start time and is stored as a naive wall-clock datetime.
    """

    model_config = ConfigDict(
        alias_generator=AliasGenerator(serialization_alias=to_camel),
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: Union[int, str] = Field(..., description="Upstream activity identifier")
    name: str = Field(default="", description="Activity title")
    start_date: datetime = Field(
        ...,
        validation_alias=AliasChoices("start_date_local", "start_date", "startDate"),
        description="Local start time",
    )
    type: str = Field(default="", description="Legacy activity type")
    sport_type: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("sport_type", "sportType"),
        description="Sport type",
    )
    distance: float = Field(default=0.0, ge=0, description="Distance in meters")
    moving_time: float = Field(
        default=0.0,
        ge=0,
        validation_alias=AliasChoices("moving_time", "movingTime"),
        description="Moving time in seconds",
    )
    average_heartrate: Optional[float] = Field(
        None,
        validation_alias=AliasChoices("average_heartrate", "averageHeartrate"),
        description="Average heart rate in bpm",
    )
    max_heartrate: Optional[float] = Field(
        None,
        validation_alias=AliasChoices("max_heartrate", "maxHeartrate"),
        description="Maximum heart rate in bpm",
    )
    total_elevation_gain: float = Field(
        default=0.0,
        validation_alias=AliasChoices("total_elevation_gain", "totalElevationGain"),
        description="Elevation gain in meters",
    )

    @field_validator("start_date")
    @classmethod
    def _drop_timezone(cls, value: datetime) -> datetime:
        # Local start times carry a spurious UTC marker upstream
        if value.tzinfo is not None:
            return value.replace(tzinfo=None)
        return value

    @field_validator("total_elevation_gain", mode="before")
    @classmethod
    def _missing_elevation(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @property
    def is_run(self) -> bool:
        """Whether the activity counts as a run."""
        return self.type in RUN_TYPES or self.sport_type in RUN_TYPES

    @property
    def has_heart_rate(self) -> bool:
        """Whether a usable average heart rate was recorded."""
        return self.average_heartrate is not None and self.average_heartrate > 0

    @property
    def local_date(self) -> date:
        """Calendar day of the activity start."""
        return self.start_date.date()

    @property
    def pace_sec_per_km(self) -> float:
        """Average pace in seconds per kilometer (0 without distance)."""
        if self.distance <= 0:
            return 0.0
        return self.moving_time / (self.distance / 1000)

    @property
    def moving_time_min(self) -> float:
        return self.moving_time / 60


def parse_activities(
    payloads: Iterable[Union[ActivityRecord, dict]],
    strict: bool = False,
) -> List[ActivityRecord]:
    """
    Validate raw activity payloads into ActivityRecords.

    Args:
        payloads: Raw upstream dicts or already-built records
        strict: Raise on the first invalid payload instead of skipping it

    Returns:
        Parsed records in input order

    Raises:
        ActivityValidationError: If strict and a payload fails validation
    """
    records: List[ActivityRecord] = []
    skipped = 0

    for index, payload in enumerate(payloads):
        if isinstance(payload, ActivityRecord):
            records.append(payload)
            continue
        try:
            records.append(ActivityRecord.model_validate(payload))
        except PydanticValidationError as e:
            if strict:
                raise ActivityValidationError(
                    f"Invalid activity payload at index {index}",
                    index=index,
                    details={"errors": e.errors(include_url=False)},
                ) from e
            skipped += 1
            logger.warning(f"Skipping invalid activity at index {index}: {e.error_count()} error(s)")

    if skipped:
        logger.info(f"Parsed {len(records)} activities, skipped {skipped} invalid")

    return records
