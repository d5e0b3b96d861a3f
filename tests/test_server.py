"""Tests covering the HTTP API."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from isf.api.server import create_app
from isf.config import ISFConfig

TEST_FILES = Path(__file__).parent / "test_files"


@pytest.fixture()
def client(tmp_path: Path) -> TestClient:
    for entry in TEST_FILES.iterdir():
        shutil.copy(entry, tmp_path / entry.name)
    (tmp_path / "broken.fs").write_text('/* {"INPUTS": [{"NAME": "x"}]} */', encoding="utf-8")
    app = create_app(config=ISFConfig(shader_dir=tmp_path))
    return TestClient(app)


def test_healthz(client: TestClient) -> None:
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_parse_source(client: TestClient) -> None:
    source = '/* {"ISFVSN": "2", "INPUTS": [{"NAME": "inputImage", "TYPE": "image"}]} */ void main() {}'

    response = client.post("/isf/parse", json={"source": source})

    assert response.status_code == 200
    assert response.json() == {"ISFVSN": "2", "INPUTS": [{"NAME": "inputImage", "TYPE": "image"}]}


def test_parse_accepts_glsl_alias(client: TestClient) -> None:
    response = client.post("/isf/parse", json={"glsl": "/* {} */"})

    assert response.status_code == 200
    assert response.json() == {}


def test_parse_missing_comment(client: TestClient) -> None:
    response = client.post("/isf/parse", json={"source": "void main() {}"})

    assert response.status_code == 422
    assert response.json()["detail"] == "missing top comment"


def test_parse_malformed_metadata(client: TestClient) -> None:
    source = '/* {"INPUTS": [{"NAME": "x", "TYPE": "not_a_real_type"}]} */'

    response = client.post("/isf/parse", json={"source": source})

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail[0]["loc"] == ["INPUTS", 0]
    assert "not_a_real_type" in detail[0]["msg"]


def test_parse_requires_source(client: TestClient) -> None:
    response = client.post("/isf/parse", json={"source": 3})

    assert response.status_code == 422


def test_list_shaders(client: TestClient) -> None:
    response = client.get("/isf/shaders")

    assert response.status_code == 200
    payload = response.json()
    assert [shader["id"] for shader in payload["shaders"]] == ["controls.fs", "feedback.fs", "invert.fs"]
    assert [failure["id"] for failure in payload["failures"]] == ["broken.fs"]
    assert payload["failures"][0]["error"] == "MalformedMetadata"


def test_list_shaders_missing_directory(tmp_path: Path) -> None:
    app = create_app(config=ISFConfig(shader_dir=tmp_path / "missing"))

    response = TestClient(app).get("/isf/shaders")

    assert response.status_code == 404


def test_get_shader(client: TestClient) -> None:
    response = client.get("/isf/shaders/feedback.fs")

    assert response.status_code == 200
    payload = response.json()
    assert payload["name"] == "feedback"
    assert payload["metadata"]["PASSES"][1] == {
        "TARGET": "accum",
        "PERSISTENT": True,
        "FLOAT": True,
        "WIDTH": "640",
        "HEIGHT": "480",
    }


@pytest.mark.parametrize("shader_id", ["missing.fs", "notes.txt", "..%2Finvert.fs"])
def test_get_shader_not_found(client: TestClient, shader_id: str) -> None:
    response = client.get(f"/isf/shaders/{shader_id}")

    assert response.status_code == 404


def test_get_shader_errors(client: TestClient) -> None:
    assert client.get("/isf/shaders/passthru.vs").status_code == 422
    assert client.get("/isf/shaders/broken.fs").status_code == 422


def test_get_shader_undecodable(client: TestClient, tmp_path: Path) -> None:
    (tmp_path / "binary.fs").write_bytes(b"/* {} */ \xff\xfe")

    response = client.get("/isf/shaders/binary.fs")

    assert response.status_code == 422
    assert "not valid UTF-8" in response.json()["detail"]
