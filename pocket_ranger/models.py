"""Core domain models.

The corpus loader, the resolver and the hint provider all operate on these
types. Pydantic validates every record at load time; instances are frozen so
a record handed to a caller can never be used to mutate the corpus.

Field names are snake_case in Python and camelCase on the wire
(``partnerLink``, ``adventureKey``, ``recommendedFile``).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

Activity = Literal["hiking", "fishing", "exploration", "dining", "social"]

Timeframe = Literal["weekend", "multi-day", "day trip"]

HintSource = Literal["priority", "llm", "keywords"]


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict:
        """Wire representation: camelCase keys, unset optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ScheduleItem(_Frozen):
    """One timed entry in an itinerary."""

    time: str  # display string, e.g. "9:00 AM"
    activity: str
    location: str
    description: str | None = None
    partner_link: str | None = None
    partner_name: str | None = None

    @model_validator(mode="after")
    def _check_partner(self) -> ScheduleItem:
        if self.partner_link is None:
            return self
        if not self.partner_name:
            raise ValueError("partnerLink requires partnerName")
        if not self.partner_link.startswith(("http://", "https://")):
            raise ValueError(f"partnerLink must be an absolute http(s) URL: {self.partner_link!r}")
        return self


class AdventureRecord(_Frozen):
    """A pre-authored itinerary stored as data/adventures/<key>.json."""

    key: str
    name: str
    activity: Activity
    city: str  # "City, Region"
    description: str
    schedule: tuple[ScheduleItem, ...] = ()
    # Hint-provider vocabulary; never part of the API response.
    keywords: tuple[str, ...] = Field(default=(), exclude=True)

    @property
    def city_name(self) -> str:
        """Lower-cased first comma segment of ``city`` ("Madison, WI" → "madison")."""
        return self.city.lower().split(",")[0].strip()

    def summary(self) -> dict:
        return {
            "key": self.key,
            "name": self.name,
            "city": self.city,
            "activity": self.activity,
            "scheduleItems": len(self.schedule),
        }


class SampleQuery(_Frozen):
    """An authored phrase paired with the adventure it should resolve to."""

    query: str
    adventure_key: str


class ExtractedInfo(_Frozen):
    """Structured attributes pulled out of a free-text request."""

    activity: str | None = None
    location: str | None = None
    features: tuple[str, ...] = ()
    timeframe: Timeframe = "day trip"


class Hint(_Frozen):
    """Hint provider output, fed back to the resolver as ``recommendedFile``."""

    response: str
    recommended_file: str
    extracted_info: ExtractedInfo
    source: HintSource
    should_search: bool = True
