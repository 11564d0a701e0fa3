"""Geographic location model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Location(BaseModel):
    """A latitude/longitude pair supplied by the host application.

    Both coordinates travel together; the overlay stores or removes
    them as a unit.

    Parameters
    ----------
    latitude : float
        Latitude in degrees.
    longitude : float
        Longitude in degrees.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        allow_inf_nan=False,
    )

    latitude: float = Field(validation_alias=AliasChoices("latitude", "lat"))
    longitude: float = Field(validation_alias=AliasChoices("longitude", "lng", "lon"))

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _reject_bools(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("coordinate must be a number, not a bool")
        return value

    @classmethod
    def coerce(cls, value: Location | tuple[float, float] | None) -> Location | None:
        """Accept a :class:`Location`, a ``(lat, lon)`` tuple, or ``None``."""
        if value is None or isinstance(value, Location):
            return value
        latitude, longitude = value
        return cls(latitude=latitude, longitude=longitude)
