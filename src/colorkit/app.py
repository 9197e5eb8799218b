from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, jsonify, request

from .hexcodec import ColorSpaceConversionError, HexValidationError, parse_hex, to_hex
from .schemes import SCHEME_KINDS, color_scheme
from .token import CHANNELS, SPACES, ColorToken

log = logging.getLogger(__name__)

DEFAULTS: Mapping[str, Any] = {
    "LOG_LEVEL": "INFO",
    "DEFAULT_SPACE": "srgb",
}


def parse_space(val: str | None, default: str) -> str:
    s = (val or default).strip().lower()
    if s not in SPACES:
        raise ValueError(f"unknown color space '{s}'")
    return s


def token_payload(token: ColorToken, space: str) -> dict[str, Any]:
    out = token.to_dict()
    out["hex"] = to_hex(token, space)
    return out


def _bad_request(message: str, **extra: Any):
    return jsonify({"error": message, **extra}), 400


# ----------------------------- Flask app ----------------------------------


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULTS)
    app.config.from_prefixed_env("COLORKIT", loads=str)
    if config:
        app.config.from_mapping(config)

    logging.basicConfig(
        level=str(app.config["LOG_LEVEL"]).upper(),
        format="%(levelname)s: %(message)s",
    )

    @app.errorhandler(HexValidationError)
    def invalid_hex(exc: HexValidationError):
        return _bad_request(str(exc), kind=exc.kind)

    @app.errorhandler(ColorSpaceConversionError)
    def conversion_failed(exc: ColorSpaceConversionError):
        return _bad_request(str(exc), kind="conversion")

    def _space() -> str:
        return parse_space(
            request.args.get("space"), app.config["DEFAULT_SPACE"]
        )

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/parse")
    def parse():
        try:
            space = _space()
        except ValueError as e:
            return _bad_request(str(e))
        token = parse_hex(request.args.get("hex", ""), color_space=space)
        return jsonify(token_payload(token, space))

    @app.route("/encode")
    def encode():
        try:
            space = _space()
        except ValueError as e:
            return _bad_request(str(e))
        token = parse_hex(request.args.get("hex", ""))
        return jsonify({"hex": to_hex(token, space)})

    @app.route("/update")
    def update():
        channel = (request.args.get("channel") or "").strip().lower()
        if channel not in CHANNELS:
            return _bad_request(
                f"unknown channel '{channel}'", supported=list(CHANNELS)
            )
        try:
            space = _space()
            value = float(request.args["value"])
        except KeyError:
            return _bad_request("value is required")
        except ValueError as e:
            return _bad_request(str(e))

        token = parse_hex(request.args.get("hex", ""), color_space=space)
        try:
            updated = token.with_channel(channel, value)
        except Exception as exc:
            log.exception("Channel update failed")
            return jsonify({"error": str(exc)}), 500
        return jsonify(token_payload(updated, space))

    @app.route("/schemes")
    def schemes():
        kind = (request.args.get("kind") or "complementary").lower()
        if kind not in SCHEME_KINDS:
            return _bad_request(
                f"unknown scheme '{kind}'", supported=list(SCHEME_KINDS)
            )
        token = parse_hex(request.args.get("hex", ""))
        try:
            palette = [to_hex(t) for t in color_scheme(token, kind)]  # type: ignore[arg-type]
        except Exception as exc:
            log.exception("Scheme generation failed")
            return jsonify({"error": str(exc)}), 500
        return jsonify(palette)

    return app


if __name__ == "__main__":
    create_app().run(debug=False, threaded=True)
