from datetime import datetime, timedelta, timezone

from skychart.core.drawops import Circle
from skychart.core.models import ForecastPoint, SunTimes
from skychart.core.points import Bounds
from skychart.core.samples import calculate_sun_times
from skychart.core.sky import (
    SkyPhase, classify_sky_phase, decor_ops, is_daytime, phase_color, sky_color, sky_fade_stops,
    sky_gradient_stops, star_count, cloud_count,
)
from skychart.core.styles import DEFAULT_STYLES

DAY = datetime(2026, 1, 26)
FULL_SUN = SunTimes(
    sunrise=DAY.replace(hour=7),
    sunset=DAY.replace(hour=17),
    dawn=DAY.replace(hour=6, minute=30),
    dusk=DAY.replace(hour=17, minute=30),
)


def at(hour, minute=0):
    return DAY.replace(hour=hour, minute=minute)


def hours(start, n, coverage=20.0):
    return [ForecastPoint(datetime=at(start) + timedelta(hours=i), condition='sunny', temperature=40 + i,
                          cloud_coverage=coverage) for i in range(n)]


def test_phase_with_twilight():
    assert classify_sky_phase(at(6, 45), FULL_SUN) is SkyPhase.DAWN
    assert classify_sky_phase(at(12), FULL_SUN) is SkyPhase.DAY
    assert classify_sky_phase(at(17, 15), FULL_SUN) is SkyPhase.DUSK
    assert classify_sky_phase(at(22), FULL_SUN) is SkyPhase.NIGHT
    assert classify_sky_phase(at(3), FULL_SUN) is SkyPhase.NIGHT


def test_phase_compares_time_of_day_only():
    # "next" sunrise is tomorrow; today's noon is still day
    tomorrow = SunTimes(**{k: v + timedelta(days=1) for k, v in vars(FULL_SUN).items()})
    assert classify_sky_phase(at(12), tomorrow) is SkyPhase.DAY


def test_phase_without_twilight_is_day_or_night():
    sun = SunTimes(sunrise=at(7), sunset=at(17))
    assert classify_sky_phase(at(6, 45), sun) is SkyPhase.NIGHT
    assert classify_sky_phase(at(7), sun) is SkyPhase.DAY
    assert classify_sky_phase(at(17), sun) is SkyPhase.NIGHT


def test_phase_hour_fallback():
    assert classify_sky_phase(at(5), None) is SkyPhase.DAWN
    assert classify_sky_phase(at(12), None) is SkyPhase.DAY
    assert classify_sky_phase(at(19), SunTimes()) is SkyPhase.DUSK
    assert classify_sky_phase(at(23), None) is SkyPhase.NIGHT
    assert is_daytime(at(6), None)
    assert not is_daytime(at(18), None)


def test_daytime_across_timezones():
    utc = timezone.utc
    plus_one = timezone(timedelta(hours=1))
    sun = SunTimes(sunrise=datetime(2026, 1, 26, 6, 0, tzinfo=utc), sunset=datetime(2026, 1, 26, 16, 0, tzinfo=utc))
    assert is_daytime(datetime(2026, 1, 26, 7, 30, tzinfo=plus_one), sun)
    assert not is_daytime(datetime(2026, 1, 26, 6, 30, tzinfo=plus_one), sun)
    # naive bucket against aware sun times: wall clocks compared as given
    assert is_daytime(datetime(2026, 1, 26, 6, 30), sun)


UTC = timezone.utc
# Los Angeles in January, reported in UTC: the local day spans UTC midnight
LA_SUN = SunTimes(
    sunrise=datetime(2026, 1, 26, 15, 0, tzinfo=UTC),
    sunset=datetime(2026, 1, 27, 1, 0, tzinfo=UTC),
    dawn=datetime(2026, 1, 26, 14, 30, tzinfo=UTC),
    dusk=datetime(2026, 1, 27, 1, 30, tzinfo=UTC),
)


def utc(day, hour, minute=0):
    return datetime(2026, 1, day, hour, minute, tzinfo=UTC)


def test_daytime_across_utc_midnight():
    sun = SunTimes(sunrise=LA_SUN.sunrise, sunset=LA_SUN.sunset)
    assert is_daytime(utc(26, 20), sun)
    assert is_daytime(utc(27, 0, 30), sun)
    assert not is_daytime(utc(26, 10), sun)
    assert not is_daytime(utc(27, 1), sun)
    assert classify_sky_phase(utc(26, 20), sun) is SkyPhase.DAY
    # the same instants seen from a Pacific-time forecast
    pst = timezone(timedelta(hours=-8))
    assert is_daytime(datetime(2026, 1, 26, 12, tzinfo=pst), sun)
    assert not is_daytime(datetime(2026, 1, 26, 18, tzinfo=pst), sun)


def test_twilight_across_utc_midnight():
    assert classify_sky_phase(utc(26, 14, 45), LA_SUN) is SkyPhase.DAWN
    assert classify_sky_phase(utc(26, 20), LA_SUN) is SkyPhase.DAY
    assert classify_sky_phase(utc(27, 0, 15), LA_SUN) is SkyPhase.DAY
    assert classify_sky_phase(utc(27, 1, 15), LA_SUN) is SkyPhase.DUSK
    assert classify_sky_phase(utc(27, 3), LA_SUN) is SkyPhase.NIGHT
    # dusk itself wraps: sunset 23:45, dusk 00:15
    late = SunTimes(sunrise=utc(26, 9), sunset=utc(26, 23, 45), dawn=utc(26, 8, 30), dusk=utc(27, 0, 15))
    assert classify_sky_phase(utc(27, 0, 5), late) is SkyPhase.DUSK
    assert classify_sky_phase(utc(26, 23, 50), late) is SkyPhase.DUSK
    assert classify_sky_phase(utc(27, 0, 20), late) is SkyPhase.NIGHT


def test_gradient_for_utc_window_west_of_greenwich():
    forecast = [ForecastPoint(datetime=utc(26, 12 + i), cloud_coverage=0) for i in range(12)]
    stops = sky_gradient_stops(forecast, LA_SUN)
    night = phase_color(SkyPhase.NIGHT, 0.0)
    day = phase_color(SkyPhase.DAY, 0.0)
    # 12Z-14Z night, hard edge at the 15Z sunrise, 15Z-23Z day; sunset falls after the window
    assert len(stops) == 14
    assert [s.color for s in stops].count(day) == 10
    assert stops[-1].color == day
    assert stops[0].color == night


def test_polar_day_and_night():
    summer = calculate_sun_times('2026-06-21', 80)
    assert summer.sunset - summer.sunrise == timedelta(hours=24)
    for hour in (0, 6, 12, 23):
        when = datetime(2026, 6, 21, hour)
        assert is_daytime(when, summer)
        assert classify_sky_phase(when, summer) is SkyPhase.DAY
    winter = calculate_sun_times('2026-12-21', 80)
    assert winter.sunrise == winter.sunset
    assert not is_daytime(datetime(2026, 12, 21, 12), winter)
    assert classify_sky_phase(datetime(2026, 12, 21, 3), winter) is SkyPhase.NIGHT
    assert classify_sky_phase(datetime(2026, 12, 21, 11, 45), winter) is SkyPhase.DAWN
    assert classify_sky_phase(datetime(2026, 12, 21, 12, 15), winter) is SkyPhase.DUSK


def test_phase_colors():
    assert phase_color(SkyPhase.DAY, 0.0) == DEFAULT_STYLES['sky.day_clear']
    assert phase_color(SkyPhase.DAY, 1.0) == DEFAULT_STYLES['sky.day_cloudy']
    assert phase_color(SkyPhase.NIGHT, 1.0) == DEFAULT_STYLES['sky.night_cloudy']
    assert phase_color(SkyPhase.DAWN, 0.0) == DEFAULT_STYLES['sky.dawn']
    assert phase_color(SkyPhase.DAY, 3.0) == DEFAULT_STYLES['sky.day_cloudy']
    assert sky_color(at(12), None, None) == phase_color(SkyPhase.DAY, 0.5)


def test_sunrise_hard_edge():
    forecast = hours(1, 12)
    sun = SunTimes(sunrise=at(6, 30), sunset=at(17))
    stops = sky_gradient_stops(forecast, sun)
    assert len(stops) == 14
    offsets = [s.offset for s in stops]
    assert offsets == sorted(offsets)
    night = phase_color(SkyPhase.NIGHT, 0.2)
    day = phase_color(SkyPhase.DAY, 0.2)
    assert stops[6].offset == 0.5 - 0.001
    assert stops[6].color == night
    assert stops[7].offset == 0.5 + 0.001
    assert stops[7].color == day


def test_sun_events_outside_window_add_nothing():
    forecast = hours(9, 6)
    stops = sky_gradient_stops(forecast, SunTimes(sunrise=at(7), sunset=at(17)))
    assert len(stops) == 6
    assert sky_gradient_stops([], FULL_SUN) == []


def test_earlier_event_wraps_to_next_day():
    forecast = [ForecastPoint(datetime=at(20) + timedelta(hours=i), cloud_coverage=0) for i in range(12)]
    # sunrise at 07:00 on the first bucket's date lies before the window; 07:00 tomorrow is inside
    stops = sky_gradient_stops(forecast, SunTimes(sunrise=at(7), sunset=at(17)))
    assert len(stops) == 14
    before = [s for s in stops if s.offset == 1.0 - 0.001]
    assert [s.color for s in before] == [phase_color(SkyPhase.NIGHT, 0.0)]
    assert stops[-1].offset == 1.0
    assert stops[-1].color == phase_color(SkyPhase.DAY, 0.0)


def test_fade_mask():
    stops = sky_fade_stops()
    assert [s.opacity for s in stops] == [1.0, 1.0, 0.0, 0.0]
    assert stops[1].offset == 0.15
    assert stops[2].offset == 0.5


def test_decor_counts():
    box = Bounds(0, 0, 100, 20)
    assert star_count(box, 100) == 1
    assert star_count(box, 0) == 4
    assert cloud_count(box, 5) == 0
    assert cloud_count(box, 100) == 16


def test_decor_day_clouds_night_stars():
    sun = SunTimes(sunrise=at(7), sunset=at(17))
    night = [ForecastPoint(datetime=at(2), cloud_coverage=0)]
    day = [ForecastPoint(datetime=at(12), cloud_coverage=0)]
    assert decor_ops(day, sun, 0, 40, 10, 80) == []
    stars = decor_ops(night, sun, 0, 40, 10, 80)
    assert stars and all(isinstance(op, Circle) for op in stars)
    assert all(10 <= op.cy <= 30 for op in stars)
    assert decor_ops(night, sun, 0, 40, 10, 80) == stars
