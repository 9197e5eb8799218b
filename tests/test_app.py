import pytest

from colorkit.app import create_app


@pytest.fixture
def client():
    app = create_app({"TESTING": True})
    return app.test_client()


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_parse(client):
    res = client.get("/parse", query_string={"hex": "#f00"})
    assert res.status_code == 200
    body = res.get_json()
    assert body["formulation"] == "rgb"
    assert body["red"] == 1.0
    assert body["hex"] == "#FF0000"


def test_parse_gray(client):
    body = client.get("/parse", query_string={"hex": "4f"}).get_json()
    assert body["formulation"] == "gray"
    assert body["hex"] == "#4F4F4F"


def test_parse_error(client):
    res = client.get("/parse", query_string={"hex": "0000F"})
    assert res.status_code == 400
    assert res.get_json()["kind"] == "unsupported_length"


def test_parse_missing_hex(client):
    res = client.get("/parse")
    assert res.status_code == 400
    assert res.get_json()["kind"] == "empty"


def test_unknown_space(client):
    res = client.get("/encode", query_string={"hex": "fff", "space": "cmyk"})
    assert res.status_code == 400


def test_encode_p3(client):
    res = client.get("/encode", query_string={"hex": "00ff00", "space": "display-p3"})
    assert res.get_json()["hex"].startswith("P3-#")


def test_update_channel(client):
    res = client.get(
        "/update", query_string={"hex": "ff0000", "channel": "hue", "value": "0.5"}
    )
    body = res.get_json()
    assert body["formulation"] == "hsb"
    assert body["hex"] == "#00FFFF"


def test_update_alpha(client):
    res = client.get(
        "/update", query_string={"hex": "ff0000", "channel": "alpha", "value": "0.5"}
    )
    assert res.get_json()["hex"] == "#FF000080"


def test_update_bad_input(client):
    res = client.get("/update", query_string={"hex": "ff0000", "channel": "lab"})
    assert res.status_code == 400
    assert "supported" in res.get_json()

    res = client.get("/update", query_string={"hex": "ff0000", "channel": "red"})
    assert res.status_code == 400

    res = client.get(
        "/update", query_string={"hex": "ff0000", "channel": "red", "value": "x"}
    )
    assert res.status_code == 400


def test_schemes(client):
    res = client.get("/schemes", query_string={"hex": "ff0000", "kind": "triadic"})
    palette = res.get_json()
    assert len(palette) == 4
    assert palette[1] == "#00FF00"
    assert palette[2] == "#0000FF"


def test_schemes_unknown_kind(client):
    res = client.get("/schemes", query_string={"hex": "ff0000", "kind": "tetradic"})
    assert res.status_code == 400


def test_default_space_from_config():
    app = create_app({"TESTING": True, "DEFAULT_SPACE": "srgb-linear"})
    res = app.test_client().get("/encode", query_string={"hex": "808080"})
    assert res.get_json()["hex"] == "#373737"


def test_default_space_from_environment(monkeypatch):
    monkeypatch.setenv("COLORKIT_DEFAULT_SPACE", "srgb-linear")
    app = create_app({"TESTING": True})
    assert app.config["DEFAULT_SPACE"] == "srgb-linear"
    res = app.test_client().get("/encode", query_string={"hex": "808080"})
    assert res.get_json()["hex"] == "#373737"
