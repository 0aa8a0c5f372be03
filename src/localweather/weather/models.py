"""Typed models for weather snapshots and OpenWeatherMap responses.

Only the fields that end up in a local weather observation are modelled
for the provider response; everything else is allowed through untouched.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# ─────────────────────────── snapshot ────────────────────────────────────────


class WeatherCondition(str, Enum):
    """Qualitative weather condition reported with an observation."""

    CLEAR = "CLEAR"
    CLOUDY = "CLOUDY"
    DRIZZLE = "DRIZZLE"
    FOGGY = "FOGGY"
    HAILING = "HAILING"
    HAZY = "HAZY"
    ICY = "ICY"
    RAINY = "RAINY"
    SANDSTORM = "SANDSTORM"
    SNOWY = "SNOWY"
    THUNDER = "THUNDER"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_owm_id(cls, condition_id: int | None) -> WeatherCondition:
        """Map an OpenWeatherMap condition id to a weather condition.

        Args:
            condition_id: Condition code from the ``weather`` block

        Returns:
            Matching condition, UNKNOWN for unmapped or missing codes
        """
        if condition_id is None:
            return cls.UNKNOWN
        if 200 <= condition_id < 300:
            return cls.THUNDER
        if 300 <= condition_id < 400:
            return cls.DRIZZLE
        if condition_id == 511:  # freezing rain
            return cls.ICY
        if 500 <= condition_id < 600:
            return cls.RAINY
        if 611 <= condition_id <= 613:  # sleet
            return cls.ICY
        if 600 <= condition_id < 700:
            return cls.SNOWY
        if condition_id in (701, 741):
            return cls.FOGGY
        if condition_id in (711, 721):
            return cls.HAZY
        if condition_id in (731, 751, 761, 762):
            return cls.SANDSTORM
        if condition_id == 800:
            return cls.CLEAR
        if 801 <= condition_id <= 804:
            return cls.CLOUDY
        if condition_id == 906:  # legacy hail code
            return cls.HAILING
        return cls.UNKNOWN


class WeatherSnapshot(BaseModel):
    """Current conditions as reported by one weather provider fetch.

    Timestamps are epoch seconds. Numeric fields the provider did not
    report are ``None``.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: float = Field(..., description="Provider observation time")
    sunrise: int | None = Field(None, description="Local sunrise (epoch seconds)")
    sunset: int | None = Field(None, description="Local sunset (epoch seconds)")
    temperature: float | None = Field(None, description="Temperature in °C")
    pressure: float | None = Field(None, description="Pressure in hPa")
    humidity: float | None = Field(None, description="Relative humidity in %")
    cloudiness: float | None = Field(None, description="Cloud cover in %")
    precipitation: float | None = Field(None, description="Precipitation in mm")
    precipitation_period: int | None = Field(
        None, description="Hours the precipitation amount covers"
    )
    condition: WeatherCondition = WeatherCondition.UNKNOWN
    source: str


# ─────────────────────────── OpenWeatherMap response ─────────────────────────


class OwmCondition(BaseModel):
    """Weather condition entry from OpenWeatherMap."""

    id: int
    main: str | None = None
    description: str | None = None
    icon: str | None = None


class OwmMain(BaseModel):
    """Main measurement block."""

    temp: float | None = None
    pressure: float | None = None
    humidity: float | None = None

    model_config = ConfigDict(extra="allow")


class OwmClouds(BaseModel):
    """Cloud cover block."""

    all: float | None = None


class OwmPrecipitation(BaseModel):
    """Rain or snow volume for the last one or three hours."""

    last_hour: float | None = Field(None, alias="1h")
    last_three_hours: float | None = Field(None, alias="3h")


class OwmSys(BaseModel):
    """System block carrying sunrise and sunset times."""

    sunrise: int | None = None
    sunset: int | None = None

    model_config = ConfigDict(extra="allow")


class CurrentWeatherResponse(BaseModel):
    """OpenWeatherMap 2.5 current weather response."""

    dt: int
    main: OwmMain = Field(default_factory=OwmMain)
    weather: list[OwmCondition] = Field(default_factory=list)
    clouds: OwmClouds | None = None
    rain: OwmPrecipitation | None = None
    snow: OwmPrecipitation | None = None
    sys: OwmSys = Field(default_factory=OwmSys)
    name: str | None = None

    model_config = ConfigDict(extra="allow")

    @property
    def condition_id(self) -> int | None:
        """Get the primary condition code.

        Returns:
            First condition id or None if the list is empty
        """
        return self.weather[0].id if self.weather else None

    def precipitation(self) -> tuple[float, int]:
        """Combine rain and snow volumes into one amount and period.

        One-hour volumes are preferred; three-hour volumes are used when
        that is all the provider reported. No precipitation block means
        0 mm over the last hour.

        Returns:
            Tuple of (amount in mm, period in hours)
        """
        blocks = [b for b in (self.rain, self.snow) if b is not None]
        hourly = [b.last_hour for b in blocks if b.last_hour is not None]
        if hourly:
            return sum(hourly), 1
        three_hourly = [b.last_three_hours for b in blocks if b.last_three_hours is not None]
        if three_hourly:
            return sum(three_hourly), 3
        return 0.0, 1

    def to_snapshot(self, source: str) -> WeatherSnapshot:
        """Convert the response to a provider-neutral snapshot.

        Args:
            source: Name of the provider the response came from

        Returns:
            Immutable weather snapshot
        """
        amount, period = self.precipitation()
        return WeatherSnapshot(
            timestamp=float(self.dt),
            sunrise=self.sys.sunrise,
            sunset=self.sys.sunset,
            temperature=self.main.temp,
            pressure=self.main.pressure,
            humidity=self.main.humidity,
            cloudiness=self.clouds.all if self.clouds else None,
            precipitation=amount,
            precipitation_period=period,
            condition=WeatherCondition.from_owm_id(self.condition_id),
            source=source,
        )
