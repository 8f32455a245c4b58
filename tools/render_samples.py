#!/usr/bin/env python3
"""
Render the built-in sample forecasts as SVG and PNG for eyeballing.
- Hourly: every pattern x season, 12 buckets from 06:00 (or --start-hour)
- Daily: one week of mixed weather
Output goes to debug_output/ next to this folder unless --out is given.
Usage:
    python tools/render_samples.py --season summer --algorithm poisson
"""
import argparse
import logging
from pathlib import Path

from skychart.core.config import configure_logging, load_settings
from skychart.core.samples import PATTERNS, SEASONS, calculate_sun_times, sample_daily, sample_forecast
from skychart.core.scene_daily import compose_daily
from skychart.core.scene_hourly import compose_hourly
from skychart.core.styles import default_styles
from skychart.core.target_raster import save_png
from skychart.core.target_svg import render_svg

log = logging.getLogger('skychart.tools.samples')

BASE = Path(__file__).resolve().parent.parent
DEFAULT_OUT = BASE / 'debug_output'


def write_scene(scene, out_dir: Path, name: str, scale: float) -> None:
    svg_path = out_dir / f"{name}.svg"
    svg_path.write_text(render_svg(scene), encoding='utf-8')
    save_png(scene, out_dir / f"{name}.png", scale=scale, background='#1c1c1c')
    log.info('[SAMPLES] %s: %d layers', name, len(scene.layer_names()))


def main(out_dir: Path = DEFAULT_OUT, seasons=None, patterns=None, start_hour: int = 6,
         settings_path=None, algorithm=None, scale: float = 2.0) -> None:
    settings = load_settings(settings_path)
    styles = default_styles().with_overrides(settings.styles)
    out_dir.mkdir(parents=True, exist_ok=True)
    for season in seasons or sorted(SEASONS):
        sun = calculate_sun_times(SEASONS[season][2], latitude=settings.hourly.latitude or 40.0)
        for pattern in patterns or sorted(PATTERNS):
            forecast = sample_forecast(pattern, season)[start_hour:]
            scene = compose_hourly(forecast, sun, settings.hourly, styles=styles, algorithm=algorithm)
            write_scene(scene, out_dir, f"hourly_{pattern}_{season}", scale)
    daily = compose_daily(sample_daily(), layout=settings.daily, styles=styles, algorithm=algorithm)
    write_scene(daily, out_dir, 'daily_week', scale)
    files = sorted(p.name for p in out_dir.iterdir())
    log.info('[SAMPLES] %d files in %s', len(files), out_dir)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Render sample weather charts')
    parser.add_argument('--out', type=str, default=str(DEFAULT_OUT))
    parser.add_argument('--season', action='append', choices=sorted(SEASONS))
    parser.add_argument('--pattern', action='append', choices=sorted(PATTERNS))
    parser.add_argument('--start-hour', type=int, default=6)
    parser.add_argument('--settings', type=str, default=None, help='JSON settings file')
    parser.add_argument('--algorithm', type=str, default=None, help='voronoi, poisson or jittered')
    parser.add_argument('--scale', type=float, default=2.0)
    parser.add_argument('--verbose', action='store_true')
    args = parser.parse_args()
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    main(Path(args.out), args.season, args.pattern, args.start_hour, args.settings, args.algorithm, args.scale)
