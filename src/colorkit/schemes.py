from __future__ import annotations

from typing import Callable, List, Literal, Mapping

from .token import ColorToken

SchemeKind = Literal["analogous", "monochromatic", "triadic", "complementary"]

# (hue offset in degrees, saturation fn, brightness fn)
Step = tuple[float, Callable[[float], float], Callable[[float], float]]


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else x


def _same(x: float) -> float:
    return x


SCHEMES: Mapping[str, tuple[Step, ...]] = {
    "analogous": (
        (30.0, lambda s: s - 0.05, lambda v: v - 0.1),
        (15.0, lambda s: s - 0.05, lambda v: v - 0.05),
        (-15.0, lambda s: s - 0.05, lambda v: v - 0.05),
        (-30.0, lambda s: s - 0.05, lambda v: v - 0.1),
    ),
    "monochromatic": (
        (0.0, lambda s: s / 2, lambda v: v / 3),
        (0.0, _same, lambda v: v / 2),
        (0.0, lambda s: s / 3, lambda v: 2 * v / 3),
        (0.0, _same, lambda v: 4 * v / 5),
    ),
    "triadic": (
        (120.0, lambda s: 2 * s / 3, lambda v: v - 0.05),
        (120.0, _same, _same),
        (240.0, _same, _same),
        (240.0, lambda s: 2 * s / 3, lambda v: v - 0.05),
    ),
    "complementary": (
        (0.0, _same, lambda v: 4 * v / 5),
        (0.0, lambda s: 5 * s / 7, _same),
        (180.0, _same, _same),
        (180.0, lambda s: 5 * s / 7, _same),
    ),
}

SCHEME_KINDS: tuple[str, ...] = tuple(SCHEMES)


def color_scheme(token: ColorToken, kind: SchemeKind) -> List[ColorToken]:
    """
    Four HSB companions of ``token`` for a classic harmony.

    Hue offsets are in degrees and wrap; saturation and brightness are
    clamped to [0, 1]. Alpha is carried over.
    """
    try:
        steps = SCHEMES[kind]
    except KeyError:
        raise ValueError(
            f"unknown scheme '{kind}', expected one of {', '.join(SCHEME_KINDS)}"
        ) from None

    out: List[ColorToken] = []
    for offset, sat, bri in steps:
        out.append(
            ColorToken.from_hsb(
                token.hue + offset / 360.0,
                _clamp01(sat(token.saturation)),
                _clamp01(bri(token.brightness)),
                token.alpha,
            )
        )
    return out


__all__ = ["SchemeKind", "SCHEMES", "SCHEME_KINDS", "color_scheme"]
