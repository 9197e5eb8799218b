# conversions.py – scalar formulation math for ColorToken
#   - RGB <-> HSB via max/min/delta sectors
#   - RGB <-> CMYK with a guarded key-black denominator
#   - Rec. 601 luma for the gray formulation
# All channels are floats, conventionally in [0, 1]; nothing is clamped here.

from __future__ import annotations

from math import fmod

Channel = float
RGB = tuple[Channel, Channel, Channel]
HSB = tuple[Channel, Channel, Channel]
CMYK = tuple[Channel, Channel, Channel, Channel]

# Rec. 601 luma weights
LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114


def wrap_hue(h: Channel) -> Channel:
    """Fold any finite hue into [0, 1)."""
    h = h % 1.0
    # tiny negatives round up to exactly 1.0
    return 0.0 if h >= 1.0 else h


def rgb_to_hsb(r: Channel, g: Channel, b: Channel) -> HSB:
    max_v = max(r, g, b)
    delta = max_v - min(r, g, b)
    if delta == 0:
        return 0.0, 0.0, max_v

    s = delta / max_v if max_v != 0 else 0.0
    if r == max_v:
        h = fmod((g - b) / delta, 6.0)
    elif g == max_v:
        h = (b - r) / delta + 2.0
    else:
        h = (r - g) / delta + 4.0
    return wrap_hue(h / 6.0), s, max_v


def rgb_to_cmyk(r: Channel, g: Channel, b: Channel) -> CMYK:
    k = 1.0 - max(r, g, b)
    if not k < 1.0:
        return 0.0, 0.0, 0.0, k
    d = 1.0 - k
    return (1.0 - r - k) / d, (1.0 - g - k) / d, (1.0 - b - k) / d, k


def rgb_to_gray(r: Channel, g: Channel, b: Channel) -> Channel:
    return LUMA_R * r + LUMA_G * g + LUMA_B * b


def hsb_to_rgb(h: Channel, s: Channel, v: Channel) -> RGB:
    c = v * s
    x = c * (1.0 - abs(fmod(h * 6.0, 2.0) - 1.0))
    m = v - c

    sector = int(h * 6.0)
    if sector == 0:
        r, g, b = c, x, 0.0
    elif sector == 1:
        r, g, b = x, c, 0.0
    elif sector == 2:
        r, g, b = 0.0, c, x
    elif sector == 3:
        r, g, b = 0.0, x, c
    elif sector == 4:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x
    return r + m, g + m, b + m


def cmyk_to_rgb(c: Channel, m: Channel, y: Channel, k: Channel) -> RGB:
    return (1.0 - c) * (1.0 - k), (1.0 - m) * (1.0 - k), (1.0 - y) * (1.0 - k)


def gray_to_rgb(w: Channel) -> RGB:
    return w, w, w


def gray_to_hsb(w: Channel) -> HSB:
    return 0.0, 0.0, w


def gray_to_cmyk(w: Channel) -> CMYK:
    return 0.0, 0.0, 0.0, 1.0 - w


__all__ = [
    "wrap_hue",
    "rgb_to_hsb",
    "rgb_to_cmyk",
    "rgb_to_gray",
    "hsb_to_rgb",
    "cmyk_to_rgb",
    "gray_to_rgb",
    "gray_to_hsb",
    "gray_to_cmyk",
]
