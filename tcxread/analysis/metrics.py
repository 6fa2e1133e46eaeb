"""
TCX Metrics Aggregator

Pure reductions over parsed trackpoints, applied at lap, activity and file
scope:
- Ascent/descent from consecutive altitude deltas
- Max altitude (None when there are no trackpoints)
- All-samples and active-only (value > 0) averages
- Power with an explicit "unavailable" result when no watts were recorded

None of these functions mutate their input or raise on empty input.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from .models import Activity, Lap, ParsedFile, TrackPoint


def calculate_ascent_descent(trackpoints: Sequence[TrackPoint]) -> Tuple[float, float]:
    """
    Calculate total ascent and descent between consecutive trackpoints.

    Args:
        trackpoints: Trackpoints in recorded order

    Returns:
        Tuple of (ascent, descent) in meters, both non-negative
    """
    ascent = 0.0
    descent = 0.0
    previous_altitude = None

    for tp in trackpoints:
        altitude = tp.altitude_meters
        if previous_altitude is not None:
            diff = altitude - previous_altitude
            if diff > 0:
                ascent += diff
            elif diff < 0:
                descent += abs(diff)
        previous_altitude = altitude

    return ascent, descent


def calculate_max_altitude(trackpoints: Sequence[TrackPoint]) -> Optional[float]:
    """Highest altitude over the trackpoints, or None if there are none"""
    if not trackpoints:
        return None
    return max(tp.altitude_meters for tp in trackpoints)


def max_of(values: Iterable[Optional[float]]) -> Optional[float]:
    """Max ignoring unavailable values; None if nothing is available"""
    available = [v for v in values if v is not None]
    return max(available) if available else None


def average_all(values: Sequence[float]) -> float:
    """Mean over every sample, zeros included"""
    if not values:
        return 0.0
    return float(sum(values)) / len(values)


def average_active(values: Sequence[float]) -> float:
    """Mean over samples greater than zero"""
    return average_all([v for v in values if v > 0])


def calculate_average_heart_rate(trackpoints: Sequence[TrackPoint]) -> float:
    """Average heart rate, treating 0 bpm as no reading"""
    return average_active([tp.heart_rate for tp in trackpoints])


def calculate_power(
    trackpoints: Sequence[TrackPoint],
) -> Tuple[Optional[float], Optional[float]]:
    """
    Calculate maximum and average power over nonzero watt samples.

    Returns:
        Tuple of (max_watts, average_watts); both None when no trackpoint
        recorded power
    """
    watts = [tp.watts for tp in trackpoints if tp.watts > 0]
    if not watts:
        return None, None
    return max(watts), average_all(watts)


def calculate_cadence(trackpoints: Sequence[TrackPoint]) -> Tuple[float, float]:
    """
    Returns:
        Tuple of (average_cadence_all, average_cadence_biking); the first
        includes zero samples, the second only pedaling samples
    """
    cadences = [tp.cadence for tp in trackpoints]
    return average_all(cadences), average_active(cadences)


def calculate_speed(trackpoints: Sequence[TrackPoint]) -> Tuple[float, float]:
    """
    Returns:
        Tuple of (average_speed_all, average_speed_moving) in m/s
    """
    speeds = [tp.speed for tp in trackpoints]
    return average_all(speeds), average_active(speeds)


def lap_trackpoints(laps: Iterable[Lap]) -> List[TrackPoint]:
    return [tp for lap in laps for tp in lap.trackpoints]


def flatten_trackpoints(activities: Iterable[Activity]) -> List[TrackPoint]:
    """Every trackpoint in the file, in document order"""
    return [tp for activity in activities for tp in lap_trackpoints(activity.laps)]


def build_lap(
    start_time: str,
    total_time_seconds: float,
    distance_meters: float,
    calories: int,
    trackpoints: Sequence[TrackPoint],
) -> Lap:
    """Build a Lap from its declared totals, deriving the trackpoint metrics"""
    ascent, descent = calculate_ascent_descent(trackpoints)

    return Lap(
        start_time=start_time,
        total_time_seconds=total_time_seconds,
        distance_meters=distance_meters,
        calories=calories,
        trackpoints=tuple(trackpoints),
        total_ascent=ascent,
        total_descent=descent,
        max_altitude=calculate_max_altitude(trackpoints),
        average_heart_rate=calculate_average_heart_rate(trackpoints),
    )


def build_activity(sport: str, activity_id: str, laps: Sequence[Lap]) -> Activity:
    """Roll laps up into an Activity"""
    return Activity(
        sport=sport,
        id=activity_id,
        laps=tuple(laps),
        total_time_seconds=sum((lap.total_time_seconds for lap in laps), 0.0),
        total_distance_meters=sum((lap.distance_meters for lap in laps), 0.0),
        total_calories=sum(lap.calories for lap in laps),
        total_ascent=sum((lap.total_ascent for lap in laps), 0.0),
        total_descent=sum((lap.total_descent for lap in laps), 0.0),
        max_altitude=max_of(lap.max_altitude for lap in laps),
        average_heart_rate=calculate_average_heart_rate(lap_trackpoints(laps)),
    )


def build_parsed_file(activities: Sequence[Activity]) -> ParsedFile:
    """
    Roll activities up into the file-level result.

    Totals are summed (or maxed) across activities. Rate metrics are
    recomputed over the flattened trackpoint population so activities with
    more samples carry proportionally more weight.
    """
    trackpoints = flatten_trackpoints(activities)
    max_watts, average_watts = calculate_power(trackpoints)
    cadence_all, cadence_biking = calculate_cadence(trackpoints)
    speed_all, speed_moving = calculate_speed(trackpoints)

    return ParsedFile(
        activities=tuple(activities),
        total_time_seconds=sum((a.total_time_seconds for a in activities), 0.0),
        total_distance_meters=sum((a.total_distance_meters for a in activities), 0.0),
        total_calories=sum(a.total_calories for a in activities),
        total_ascent=sum((a.total_ascent for a in activities), 0.0),
        total_descent=sum((a.total_descent for a in activities), 0.0),
        max_altitude=max_of(a.max_altitude for a in activities),
        average_heart_rate=calculate_average_heart_rate(trackpoints),
        max_watts=max_watts,
        average_watts=average_watts,
        average_cadence_all=cadence_all,
        average_cadence_biking=cadence_biking,
        average_speed_all=speed_all,
        average_speed_moving=speed_moving,
    )
