"""
TCX Activity Records

Immutable records produced by a single parse of a TCX file:
- TrackPoint: one timestamped sample
- Lap: declared lap totals plus trackpoint-derived metrics
- Activity: laps rolled up per workout
- ParsedFile: activities rolled up for the whole file

Metrics that can be unavailable (power with no samples, altitude with no
trackpoints) are stored as None and rendered as "NA" in dict output.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

NOT_AVAILABLE = "NA"


def format_metric(value: Optional[float]) -> Any:
    """Render an optional metric, substituting the "NA" marker for None"""
    return NOT_AVAILABLE if value is None else value


@dataclass(frozen=True)
class Position:
    """Latitude/longitude pair in degrees"""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class TrackPoint:
    """A single trackpoint sample"""

    time: str  # verbatim from the file
    position: Optional[Position]
    altitude_meters: float
    distance_meters: float  # cumulative
    heart_rate: int
    cadence: int
    watts: float
    speed: float
    sensor_state: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "latitude": self.position.latitude if self.position else None,
            "longitude": self.position.longitude if self.position else None,
            "altitude_meters": self.altitude_meters,
            "distance_meters": self.distance_meters,
            "heart_rate": self.heart_rate,
            "cadence": self.cadence,
            "watts": self.watts,
            "speed": self.speed,
            "sensor_state": self.sensor_state,
        }


@dataclass(frozen=True)
class Lap:
    """A lap with the file's declared totals and derived metrics"""

    start_time: str

    # Declared by the file's lap summary
    total_time_seconds: float
    distance_meters: float
    calories: int

    trackpoints: Tuple[TrackPoint, ...]

    # Derived from trackpoints
    total_ascent: float
    total_descent: float
    max_altitude: Optional[float]
    average_heart_rate: float

    def to_dict(self, include_trackpoints: bool = False) -> Dict[str, Any]:
        result = {
            "start_time": self.start_time,
            "total_time_seconds": self.total_time_seconds,
            "distance_meters": self.distance_meters,
            "calories": self.calories,
            "total_ascent": self.total_ascent,
            "total_descent": self.total_descent,
            "max_altitude": format_metric(self.max_altitude),
            "average_heart_rate": self.average_heart_rate,
            "trackpoints_count": len(self.trackpoints),
        }
        if include_trackpoints:
            result["trackpoints"] = [tp.to_dict() for tp in self.trackpoints]
        return result


@dataclass(frozen=True)
class Activity:
    """One recorded workout and its lap roll-up"""

    sport: str
    id: str
    laps: Tuple[Lap, ...]
    total_time_seconds: float
    total_distance_meters: float
    total_calories: int
    total_ascent: float
    total_descent: float
    max_altitude: Optional[float]
    average_heart_rate: float

    def to_dict(self, include_trackpoints: bool = False) -> Dict[str, Any]:
        return {
            "sport": self.sport,
            "id": self.id,
            "total_time_seconds": self.total_time_seconds,
            "total_distance_meters": self.total_distance_meters,
            "total_calories": self.total_calories,
            "total_ascent": self.total_ascent,
            "total_descent": self.total_descent,
            "max_altitude": format_metric(self.max_altitude),
            "average_heart_rate": self.average_heart_rate,
            "laps": [lap.to_dict(include_trackpoints) for lap in self.laps],
        }


@dataclass(frozen=True)
class ParsedFile:
    """Complete parse result for a TCX file"""

    activities: Tuple[Activity, ...]

    # Summed / maxed across activities
    total_time_seconds: float
    total_distance_meters: float
    total_calories: int
    total_ascent: float
    total_descent: float
    max_altitude: Optional[float]

    # Computed over every trackpoint in the file
    average_heart_rate: float
    max_watts: Optional[float]
    average_watts: Optional[float]
    average_cadence_all: float
    average_cadence_biking: float
    average_speed_all: float
    average_speed_moving: float

    def summary(self) -> Dict[str, Any]:
        """Flat top-level metrics, with "NA" for unavailable values"""
        return {
            "total_distance_meters": self.total_distance_meters,
            "total_time_seconds": self.total_time_seconds,
            "total_calories": self.total_calories,
            "total_ascent": self.total_ascent,
            "total_descent": self.total_descent,
            "max_altitude": format_metric(self.max_altitude),
            "average_heart_rate": self.average_heart_rate,
            "max_watts": format_metric(self.max_watts),
            "average_watts": format_metric(self.average_watts),
            "average_cadence_all": self.average_cadence_all,
            "average_cadence_biking": self.average_cadence_biking,
            "average_speed_all": self.average_speed_all,
            "average_speed_moving": self.average_speed_moving,
        }

    def to_dict(self, include_trackpoints: bool = False) -> Dict[str, Any]:
        result = self.summary()
        result["activities"] = [
            activity.to_dict(include_trackpoints) for activity in self.activities
        ]
        return result
