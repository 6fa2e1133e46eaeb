"""
Tests for TCX Metrics Aggregator

Tests for ascent/descent, averages, power availability and roll-up
across laps and activities.
"""

import pytest
from tcxread.analysis.metrics import (
    average_active,
    average_all,
    build_activity,
    build_lap,
    build_parsed_file,
    calculate_ascent_descent,
    calculate_average_heart_rate,
    calculate_cadence,
    calculate_max_altitude,
    calculate_power,
    calculate_speed,
    max_of,
)
from tcxread.analysis.models import TrackPoint


def make_trackpoint(
    altitude=0.0, heart_rate=0, cadence=0, watts=0.0, speed=0.0, distance=0.0
) -> TrackPoint:
    return TrackPoint(
        time="2026-01-15T08:00:00Z",
        position=None,
        altitude_meters=altitude,
        distance_meters=distance,
        heart_rate=heart_rate,
        cadence=cadence,
        watts=watts,
        speed=speed,
        sensor_state="",
    )


def make_lap(trackpoints, total_time=0.0, distance=0.0, calories=0):
    return build_lap("2026-01-15T08:00:00Z", total_time, distance, calories, trackpoints)


class TestAscentDescent:
    """Tests for consecutive-altitude ascent/descent"""

    def test_uphill_pair(self):
        """b > a should be pure ascent"""
        ascent, descent = calculate_ascent_descent(
            [make_trackpoint(altitude=100.0), make_trackpoint(altitude=112.5)]
        )
        assert ascent == 12.5
        assert descent == 0.0

    def test_downhill_pair(self):
        """b < a should be pure descent"""
        ascent, descent = calculate_ascent_descent(
            [make_trackpoint(altitude=100.0), make_trackpoint(altitude=90.0)]
        )
        assert ascent == 0.0
        assert descent == 10.0

    def test_flat_pair(self):
        """Equal altitudes contribute to neither"""
        ascent, descent = calculate_ascent_descent(
            [make_trackpoint(altitude=50.0), make_trackpoint(altitude=50.0)]
        )
        assert ascent == 0.0
        assert descent == 0.0

    def test_empty_and_single_point(self):
        """No deltas means no ascent or descent"""
        assert calculate_ascent_descent([]) == (0.0, 0.0)
        assert calculate_ascent_descent([make_trackpoint(altitude=300.0)]) == (0.0, 0.0)

    def test_rolling_profile_is_non_negative(self):
        """Ascent and descent accumulate separately"""
        altitudes = [10.0, 20.0, 30.0, 25.0, 15.0, 18.0]
        ascent, descent = calculate_ascent_descent(
            [make_trackpoint(altitude=a) for a in altitudes]
        )
        assert ascent == pytest.approx(23.0)
        assert descent == pytest.approx(15.0)
        assert ascent >= 0 and descent >= 0


class TestMaxAltitude:
    """Tests for max altitude and its unavailable case"""

    def test_max_over_trackpoints(self):
        points = [make_trackpoint(altitude=a) for a in (100.0, 105.0, 103.0)]
        assert calculate_max_altitude(points) == 105.0

    def test_no_trackpoints_is_unavailable(self):
        assert calculate_max_altitude([]) is None

    def test_negative_altitudes(self):
        """Below sea level should still report the highest point"""
        points = [make_trackpoint(altitude=a) for a in (-20.0, -5.0, -12.0)]
        assert calculate_max_altitude(points) == -5.0

    def test_max_of_skips_unavailable(self):
        assert max_of([None, 110.0, 105.0]) == 110.0
        assert max_of([None, None]) is None
        assert max_of([]) is None


class TestAverages:
    """Tests for all-samples and active-only averages"""

    def test_average_all_includes_zeros(self):
        assert average_all([0, 80, 90, 0]) == 42.5

    def test_average_active_excludes_zeros(self):
        assert average_active([0, 80, 90, 0]) == 85.0

    def test_empty_population_falls_back_to_zero(self):
        assert average_all([]) == 0.0
        assert average_active([]) == 0.0
        assert average_active([0, 0, 0]) == 0.0

    def test_heart_rate_ignores_zero_bpm(self):
        points = [make_trackpoint(heart_rate=hr) for hr in (0, 140, 150)]
        assert calculate_average_heart_rate(points) == 145.0

    def test_cadence_variants(self):
        """Zero cadence dilutes the 'all' average but not the active one"""
        points = [make_trackpoint(cadence=c) for c in (0, 80, 90, 0)]
        cadence_all, cadence_biking = calculate_cadence(points)

        assert cadence_all == 42.5
        assert cadence_biking == 85.0
        assert cadence_biking >= 80

    def test_speed_variants(self):
        points = [make_trackpoint(speed=s) for s in (0.0, 5.0, 7.0)]
        speed_all, speed_moving = calculate_speed(points)

        assert speed_all == pytest.approx(4.0)
        assert speed_moving == pytest.approx(6.0)

    def test_no_trackpoints(self):
        assert calculate_cadence([]) == (0.0, 0.0)
        assert calculate_speed([]) == (0.0, 0.0)
        assert calculate_average_heart_rate([]) == 0.0


class TestPower:
    """Tests for power metrics and the unavailable marker"""

    def test_no_watts_is_unavailable(self):
        points = [make_trackpoint(watts=0.0) for _ in range(3)]
        assert calculate_power(points) == (None, None)

    def test_no_trackpoints_is_unavailable(self):
        assert calculate_power([]) == (None, None)

    def test_zero_watts_excluded(self):
        points = [make_trackpoint(watts=w) for w in (200.0, 300.0, 0.0)]
        max_watts, average_watts = calculate_power(points)

        assert max_watts == 300.0
        assert average_watts == 250.0
        assert average_watts <= max_watts


class TestRollUp:
    """Tests for lap -> activity -> file roll-up"""

    @pytest.fixture
    def two_lap_activity(self):
        lap1 = make_lap(
            [
                make_trackpoint(altitude=100.0, heart_rate=0),
                make_trackpoint(altitude=105.0, heart_rate=140),
                make_trackpoint(altitude=103.0, heart_rate=150),
            ],
            total_time=600.0,
            distance=2000.0,
            calories=120,
        )
        lap2 = make_lap(
            [
                make_trackpoint(altitude=103.0, heart_rate=0),
                make_trackpoint(altitude=110.0, heart_rate=0),
            ],
            total_time=300.0,
            distance=1000.5,
            calories=60,
        )
        return build_activity("Biking", "2026-01-15T08:00:00Z", [lap1, lap2])

    def test_lap_metrics(self, two_lap_activity):
        lap1, lap2 = two_lap_activity.laps

        assert lap1.total_ascent == 5.0
        assert lap1.total_descent == 2.0
        assert lap1.max_altitude == 105.0
        assert lap1.average_heart_rate == 145.0

        assert lap2.total_ascent == 7.0
        assert lap2.total_descent == 0.0
        assert lap2.max_altitude == 110.0
        assert lap2.average_heart_rate == 0.0

    def test_activity_totals(self, two_lap_activity):
        assert two_lap_activity.total_ascent == 12.0
        assert two_lap_activity.total_descent == 2.0
        assert two_lap_activity.max_altitude == 110.0
        assert two_lap_activity.total_time_seconds == 900.0
        assert two_lap_activity.total_distance_meters == 3000.5
        assert two_lap_activity.total_calories == 180
        assert two_lap_activity.average_heart_rate == 145.0

    def test_declared_lap_totals_are_kept(self):
        """Lap time/distance/calories come from the file, not trackpoints"""
        lap = make_lap(
            [make_trackpoint(distance=0.0), make_trackpoint(distance=50.0)],
            total_time=42.0,
            distance=999.0,
            calories=7,
        )
        assert lap.total_time_seconds == 42.0
        assert lap.distance_meters == 999.0
        assert lap.calories == 7

    def test_empty_activity(self):
        activity = build_activity("Running", "id", [])
        assert activity.total_ascent == 0.0
        assert activity.total_descent == 0.0
        assert activity.max_altitude is None
        assert activity.average_heart_rate == 0.0

    def test_lap_without_trackpoints_does_not_hide_max_altitude(self):
        activity = build_activity(
            "Running", "id", [make_lap([]), make_lap([make_trackpoint(altitude=42.0)])]
        )
        assert activity.max_altitude == 42.0

    def test_file_sums_activities(self, two_lap_activity):
        other = build_activity(
            "Running",
            "2026-01-16T08:00:00Z",
            [make_lap([make_trackpoint(altitude=50.0), make_trackpoint(altitude=40.0)], distance=500.0)],
        )
        parsed = build_parsed_file([two_lap_activity, other])

        assert parsed.total_distance_meters == sum(
            a.total_distance_meters for a in parsed.activities
        )
        assert parsed.total_ascent == 12.0
        assert parsed.total_descent == 12.0
        assert parsed.max_altitude == 110.0

    def test_file_heart_rate_uses_all_trackpoints(self):
        """File average is over samples, not the mean of activity averages"""
        short = build_activity("Running", "a", [make_lap([make_trackpoint(heart_rate=100)])])
        long = build_activity(
            "Running", "b", [make_lap([make_trackpoint(heart_rate=200) for _ in range(3)])]
        )
        parsed = build_parsed_file([short, long])

        assert parsed.average_heart_rate == 175.0
        assert parsed.average_heart_rate != (
            short.average_heart_rate + long.average_heart_rate
        ) / 2

    def test_file_power_spans_activities(self):
        with_power = build_activity(
            "Biking", "a", [make_lap([make_trackpoint(watts=200.0), make_trackpoint(watts=0.0)])]
        )
        without_power = build_activity("Biking", "b", [make_lap([make_trackpoint(watts=0.0)])])
        parsed = build_parsed_file([with_power, without_power])

        assert parsed.max_watts == 200.0
        assert parsed.average_watts == 200.0

    def test_empty_file(self):
        parsed = build_parsed_file([])

        assert parsed.total_distance_meters == 0.0
        assert parsed.total_calories == 0
        assert parsed.max_altitude is None
        assert parsed.max_watts is None
        assert parsed.average_watts is None
        assert parsed.summary()["max_altitude"] == "NA"
        assert parsed.summary()["average_watts"] == "NA"
