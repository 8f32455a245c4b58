#!/usr/bin/env python3
"""
Generate bitmap icons for every condition and seasonal icon id.
- Output size: 48x48 px by default, transparent background
- File names: the icon id with "mdi:" dropped, e.g. weather-partly-cloudy.png
Requires: Pillow (PIL)
"""
import argparse
import os

from skychart.core.icons_raster import GLYPHS, icon_image

OUT_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'assets', 'icons')


def file_name(icon_id: str) -> str:
    return icon_id.split(':', 1)[-1] + '.png'


def main(out_dir: str = OUT_DIR, size: int = 48):
    os.makedirs(out_dir, exist_ok=True)
    for icon_id in sorted(GLYPHS):
        icon_image(icon_id, size).save(os.path.join(out_dir, file_name(icon_id)), format='PNG')
    files = sorted(os.listdir(out_dir))
    print(f"Generated {len(GLYPHS)} icons.")
    print("Folder:", out_dir)
    print("Files:", files)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Generate condition icon PNGs')
    parser.add_argument('--out', type=str, default=OUT_DIR)
    parser.add_argument('--size', type=int, default=48)
    args = parser.parse_args()
    main(args.out, args.size)
