from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace, fields
from datetime import datetime, timezone
from typing import Any, Literal, Mapping

from .conversions import (
    cmyk_to_rgb,
    gray_to_cmyk,
    gray_to_hsb,
    gray_to_rgb,
    hsb_to_rgb,
    rgb_to_cmyk,
    rgb_to_gray,
    rgb_to_hsb,
    wrap_hue,
)

Formulation = Literal["rgb", "hsb", "cmyk", "gray"]
RGBSpace = Literal["srgb", "srgb-linear", "display-p3"]

FORMULATIONS: tuple[Formulation, ...] = ("rgb", "hsb", "cmyk", "gray")
SPACES: tuple[RGBSpace, ...] = ("srgb", "srgb-linear", "display-p3")

DEFAULT_NAME = "New Color"

# channel -> formulation that owns it; alpha belongs to none
CHANNELS: Mapping[str, Formulation | None] = {
    "red": "rgb",
    "green": "rgb",
    "blue": "rgb",
    "hue": "hsb",
    "saturation": "hsb",
    "brightness": "hsb",
    "cyan": "cmyk",
    "magenta": "cmyk",
    "yellow": "cmyk",
    "key_black": "cmyk",
    "white": "gray",
    "alpha": None,
}

# names used by the file_format snippets
_SPACE_LABELS: Mapping[str, str] = {
    "srgb": "sRGB",
    "srgb-linear": "sRGBLinear",
    "display-p3": "displayP3",
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ColorToken:
    """
    One color held in four formulations plus alpha.

    Only the channels of ``formulation`` are authoritative; every instance
    is synchronized on construction, so the other three formulations always
    describe the same visible color. Tokens are immutable: the ``with_*``
    methods return a new token sharing the same identity.
    """

    formulation: Formulation = "rgb"
    rgb_color_space: RGBSpace = "srgb"
    name: str = DEFAULT_NAME
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    date_created: datetime = field(default_factory=_now)

    white: float = 0.5

    red: float = 0.5
    green: float = 0.5
    blue: float = 0.5

    hue: float = 0.5
    saturation: float = 0.5
    brightness: float = 0.5

    cyan: float = 0.5
    magenta: float = 0.5
    yellow: float = 0.5
    key_black: float = 0.5

    alpha: float = 1.0

    def __post_init__(self) -> None:
        if self.formulation not in FORMULATIONS:
            raise ValueError(f"unknown formulation '{self.formulation}'")
        if self.rgb_color_space not in SPACES:
            raise ValueError(f"unknown RGB color space '{self.rgb_color_space}'")
        for name, value in _synchronized_channels(self).items():
            object.__setattr__(self, name, value)

    # ---- constructors ----

    @classmethod
    def from_rgb(
        cls,
        r: float,
        g: float,
        b: float,
        alpha: float = 1.0,
        *,
        name: str = DEFAULT_NAME,
        color_space: RGBSpace = "srgb",
    ) -> ColorToken:
        return cls(
            formulation="rgb",
            rgb_color_space=color_space,
            name=name,
            red=r,
            green=g,
            blue=b,
            alpha=alpha,
        )

    @classmethod
    def from_hsb(
        cls,
        hue: float,
        saturation: float,
        brightness: float,
        alpha: float = 1.0,
        *,
        name: str = DEFAULT_NAME,
    ) -> ColorToken:
        return cls(
            formulation="hsb",
            name=name,
            hue=hue,
            saturation=saturation,
            brightness=brightness,
            alpha=alpha,
        )

    @classmethod
    def from_cmyk(
        cls,
        cyan: float,
        magenta: float,
        yellow: float,
        key_black: float,
        alpha: float = 1.0,
        *,
        name: str = DEFAULT_NAME,
    ) -> ColorToken:
        return cls(
            formulation="cmyk",
            name=name,
            cyan=cyan,
            magenta=magenta,
            yellow=yellow,
            key_black=key_black,
            alpha=alpha,
        )

    @classmethod
    def from_gray(
        cls,
        white: float,
        alpha: float = 1.0,
        *,
        name: str = DEFAULT_NAME,
        color_space: RGBSpace = "srgb",
    ) -> ColorToken:
        return cls(
            formulation="gray",
            rgb_color_space=color_space,
            name=name,
            white=white,
            alpha=alpha,
        )

    @classmethod
    def copy_of(cls, token: ColorToken) -> ColorToken:
        """Same color, name and tags under a fresh id and timestamp."""
        return replace(token, id=uuid.uuid4(), date_created=_now())

    # ---- per-channel updates ----

    def with_channel(self, channel: str, value: float) -> ColorToken:
        """Set one channel, make its formulation active and resynchronize."""
        if channel not in CHANNELS:
            raise KeyError(channel)
        owner = CHANNELS[channel] or self.formulation
        return replace(self, formulation=owner, **{channel: float(value)})

    def with_red(self, value: float) -> ColorToken:
        return self.with_channel("red", value)

    def with_green(self, value: float) -> ColorToken:
        return self.with_channel("green", value)

    def with_blue(self, value: float) -> ColorToken:
        return self.with_channel("blue", value)

    def with_hue(self, value: float) -> ColorToken:
        return self.with_channel("hue", value)

    def with_saturation(self, value: float) -> ColorToken:
        return self.with_channel("saturation", value)

    def with_brightness(self, value: float) -> ColorToken:
        return self.with_channel("brightness", value)

    def with_cyan(self, value: float) -> ColorToken:
        return self.with_channel("cyan", value)

    def with_magenta(self, value: float) -> ColorToken:
        return self.with_channel("magenta", value)

    def with_yellow(self, value: float) -> ColorToken:
        return self.with_channel("yellow", value)

    def with_key_black(self, value: float) -> ColorToken:
        return self.with_channel("key_black", value)

    def with_white(self, value: float) -> ColorToken:
        return self.with_channel("white", value)

    def with_alpha(self, value: float) -> ColorToken:
        return self.with_channel("alpha", value)

    # ---- tag switches ----

    def with_formulation(self, formulation: Formulation) -> ColorToken:
        # already synchronized; switching to gray keeps only the luma
        return replace(self, formulation=formulation)

    def with_color_space(self, space: RGBSpace) -> ColorToken:
        return replace(self, rgb_color_space=space)

    def with_name(self, name: str) -> ColorToken:
        return replace(self, name=name)

    def with_hex(self, text: str) -> ColorToken:
        """
        Load a hex color into the current formulation, keeping identity.

        Raises the matching ``HexValidationError`` subclass on bad input.
        """
        from .hexcodec import parse_hex

        decoded = parse_hex(text)
        if self.formulation == "rgb":
            updates = {"red": decoded.red, "green": decoded.green, "blue": decoded.blue}
        elif self.formulation == "hsb":
            updates = {
                "hue": decoded.hue,
                "saturation": decoded.saturation,
                "brightness": decoded.brightness,
            }
        elif self.formulation == "cmyk":
            updates = {
                "cyan": decoded.cyan,
                "magenta": decoded.magenta,
                "yellow": decoded.yellow,
                "key_black": decoded.key_black,
            }
        else:
            updates = {"white": decoded.white}
        return replace(self, alpha=decoded.alpha, **updates)

    # ---- views ----

    @property
    def rgba(self) -> tuple[float, float, float, float]:
        return self.red, self.green, self.blue, self.alpha

    @property
    def hex(self) -> str:
        from .hexcodec import to_hex

        return to_hex(self)

    @property
    def file_format(self) -> str:
        space = _SPACE_LABELS[self.rgb_color_space]
        if self.formulation == "rgb":
            return (
                f"Color(.{space}, red: {self.red}, green: {self.green}, "
                f"blue: {self.blue}, opacity: {self.alpha})"
            )
        if self.formulation == "hsb":
            return (
                f"Color(hue: {self.hue}, saturation: {self.saturation}, "
                f"brightness: {self.brightness}, opacity: {self.alpha})"
            )
        if self.formulation == "cmyk":
            return (
                f"Color(PlatformColor(cmyk: ({self.cyan}, {self.magenta}, "
                f"{self.yellow}, {self.key_black}))).opacity({self.alpha})"
            )
        return f"Color(.{space}, white: {self.white}).opacity({self.alpha})"

    # ---- serialization ----

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {f.name: getattr(self, f.name) for f in fields(self)}
        out["id"] = str(self.id)
        out["date_created"] = self.date_created.isoformat()
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ColorToken:
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {k: v for k, v in data.items() if k in known}
        if "id" in kwargs:
            kwargs["id"] = uuid.UUID(str(kwargs["id"]))
        if "date_created" in kwargs:
            created = datetime.fromisoformat(kwargs["date_created"])
            if created.tzinfo is None:
                created = created.replace(tzinfo=timezone.utc)
            kwargs["date_created"] = created
        for name in CHANNELS:
            if name in kwargs:
                kwargs[name] = float(kwargs[name])
        return cls(**kwargs)


def synchronize(token: ColorToken) -> ColorToken:
    """Return ``token`` with every formulation derived from the active one."""
    return replace(token)


def _synchronized_channels(token: ColorToken) -> dict[str, float]:
    f = token.formulation
    if f == "rgb":
        r, g, b = token.red, token.green, token.blue
        h, s, v = rgb_to_hsb(r, g, b)
        c, m, y, k = rgb_to_cmyk(r, g, b)
        w = rgb_to_gray(r, g, b)
    elif f == "hsb":
        h, s, v = wrap_hue(token.hue), token.saturation, token.brightness
        r, g, b = hsb_to_rgb(h, s, v)
        c, m, y, k = rgb_to_cmyk(r, g, b)
        w = rgb_to_gray(r, g, b)
    elif f == "cmyk":
        c, m, y, k = token.cyan, token.magenta, token.yellow, token.key_black
        r, g, b = cmyk_to_rgb(c, m, y, k)
        h, s, v = rgb_to_hsb(r, g, b)
        w = rgb_to_gray(r, g, b)
    else:
        w = token.white
        r, g, b = gray_to_rgb(w)
        h, s, v = gray_to_hsb(w)
        c, m, y, k = gray_to_cmyk(w)

    return {
        "red": r,
        "green": g,
        "blue": b,
        "hue": h,
        "saturation": s,
        "brightness": v,
        "cyan": c,
        "magenta": m,
        "yellow": y,
        "key_black": k,
        "white": w,
    }


__all__ = [
    "ColorToken",
    "Formulation",
    "RGBSpace",
    "FORMULATIONS",
    "SPACES",
    "CHANNELS",
    "DEFAULT_NAME",
    "synchronize",
]
