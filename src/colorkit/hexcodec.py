from __future__ import annotations

import logging
import math
import string

from coloraide import Color

from .token import DEFAULT_NAME, SPACES, ColorToken, RGBSpace

log = logging.getLogger(__name__)

MAX_DIGITS = 8
SUPPORTED_LENGTHS = frozenset({2, 3, 4, 6, 8})

P3_PREFIX = "P3-"

FIT_HEX = {"method": "clip"}  # hex channels are plain bytes, no gamut mapping

# formulations whose channels are authored in the token's own RGB space;
# HSB and CMYK are always sRGB-based
_SPACE_BOUND = {"rgb", "gray"}


class HexValidationError(ValueError):
    """Base for hex decode failures; ``kind`` is stable, the message is for people."""

    kind = "invalid"
    message = "Invalid hex color"

    def __init__(self, text: str = "") -> None:
        self.text = text
        super().__init__(self.message)


class EmptyHexError(HexValidationError):
    kind = "empty"
    message = "Hex value cannot be empty"


class TooManyCharactersError(HexValidationError):
    kind = "too_many_characters"
    message = f"Hex value cannot exceed {MAX_DIGITS} characters"


class InvalidCharactersError(HexValidationError):
    kind = "invalid_characters"
    message = "Hex value may only contain 0-9 and A-F"


class UnsupportedLengthError(HexValidationError):
    kind = "unsupported_length"
    message = "Hex value must have 2, 3, 4, 6 or 8 digits"


class ColorSpaceConversionError(ValueError):
    """The visible color could not be expressed in the requested RGB space."""


def validate_hex(text: str) -> str:
    """
    Strip decoration and check the digits of a hex color.

    Returns the bare digit string (3-digit shorthand expanded to 6) or raises
    the matching ``HexValidationError`` subclass.
    """
    raw = (text or "").strip()
    if raw.startswith("#"):
        raw = raw[1:]
    if raw[:2] in ("0x", "0X"):
        raw = raw[2:]
    raw = raw.strip()

    if not raw:
        raise EmptyHexError(text)
    if len(raw) > MAX_DIGITS:
        raise TooManyCharactersError(text)
    if not all(c in string.hexdigits for c in raw):
        raise InvalidCharactersError(text)
    if len(raw) not in SUPPORTED_LENGTHS:
        raise UnsupportedLengthError(text)

    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    return raw


def _bytes01(digits: str) -> list[float]:
    return [int(digits[i : i + 2], 16) / 255.0 for i in range(0, len(digits), 2)]


def parse_hex(
    text: str, *, name: str = DEFAULT_NAME, color_space: RGBSpace = "srgb"
) -> ColorToken:
    """
    Decode ``#`` / ``0x`` prefixed or bare hex into a synchronized token.

    2 digits: gray, 4: gray + alpha, 3 or 6: RGB, 8: RGBA.
    """
    try:
        digits = validate_hex(text)
    except HexValidationError as e:
        log.debug("rejected hex %r: %s", text, e.kind)
        raise

    channels = _bytes01(digits)
    if len(channels) == 1:
        return ColorToken.from_gray(channels[0], name=name, color_space=color_space)
    if len(channels) == 2:
        w, a = channels
        return ColorToken.from_gray(w, a, name=name, color_space=color_space)
    if len(channels) == 3:
        r, g, b = channels
        return ColorToken.from_rgb(r, g, b, name=name, color_space=color_space)
    r, g, b, a = channels
    return ColorToken.from_rgb(r, g, b, a, name=name, color_space=color_space)


def _byte(v: float) -> int:
    # round half away from zero; inputs are already clipped to [0, 1]
    return int(math.floor(v * 255.0 + 0.5))


def format_components(r: float, g: float, b: float, alpha: float = 1.0) -> str:
    """``#RRGGBB``, or ``#RRGGBBAA`` when alpha is not exactly 1."""
    out = f"#{_byte(r):02X}{_byte(g):02X}{_byte(b):02X}"
    if alpha != 1.0:
        out += f"{_byte(alpha):02X}"
    return out


def source_space(token: ColorToken) -> RGBSpace:
    return token.rgb_color_space if token.formulation in _SPACE_BOUND else "srgb"


def convert_components(
    token: ColorToken, target: str
) -> tuple[float, float, float, float]:
    """RGBA of ``token`` expressed in ``target``, clipped to its gamut."""
    if target not in SPACES:
        raise ColorSpaceConversionError(f"unsupported RGB color space '{target}'")
    try:
        c = Color(source_space(token), [token.red, token.green, token.blue], token.alpha)
        coords = c.convert(target).fit(**FIT_HEX).coords()
    except Exception as exc:
        raise ColorSpaceConversionError(
            f"cannot convert {source_space(token)} to {target}: {exc}"
        ) from exc
    r, g, b = (min(1.0, max(0.0, float(v))) for v in coords)
    a = min(1.0, max(0.0, float(token.alpha)))
    return r, g, b, a


def to_hex(
    token: ColorToken, color_space: str | None = None, *, fallback: str | None = None
) -> str:
    """
    Encode ``token`` as uppercase hex in ``color_space`` (default: its own).

    Display-P3 output is prefixed with ``P3-``. A failed conversion raises
    ``ColorSpaceConversionError`` unless ``fallback`` is given, in which case
    the failure is logged and ``fallback`` returned.
    """
    target = color_space or token.rgb_color_space
    try:
        r, g, b, a = convert_components(token, target)
    except ColorSpaceConversionError as exc:
        if fallback is None:
            raise
        log.warning("hex encode fell back to %s: %s", fallback, exc)
        return fallback

    text = format_components(r, g, b, a)
    return P3_PREFIX + text if target == "display-p3" else text


__all__ = [
    "HexValidationError",
    "EmptyHexError",
    "TooManyCharactersError",
    "InvalidCharactersError",
    "UnsupportedLengthError",
    "ColorSpaceConversionError",
    "validate_hex",
    "parse_hex",
    "format_components",
    "source_space",
    "convert_components",
    "to_hex",
]
