"""Tests for the top-level ISF models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from isf import FloatInput, ImageImport, ImageInput, Input, Isf, Pass


@pytest.mark.parametrize("raw,expected", [(True, True), (1, True), (1.0, True), (False, False), (0, False), (0.0, False)])
def test_pass_flags_are_lenient(raw, expected) -> None:
    shader_pass = Pass.model_validate({"PERSISTENT": raw, "FLOAT": raw})

    assert shader_pass.persistent is expected
    assert shader_pass.float_buffer is expected


def test_pass_flags_reject_null_and_strings() -> None:
    with pytest.raises(ValidationError):
        Pass.model_validate({"PERSISTENT": None})
    with pytest.raises(ValidationError):
        Pass.model_validate({"FLOAT": "true"})


@pytest.mark.parametrize("raw,expected", [(640, "640"), ("640", "640"), (None, None), ("$WIDTH/2.0", "$WIDTH/2.0")])
def test_pass_dimensions_are_lenient(raw, expected) -> None:
    shader_pass = Pass.model_validate({"WIDTH": raw, "HEIGHT": raw})

    assert shader_pass.width == expected
    assert shader_pass.height == expected


def test_pass_dimension_absent() -> None:
    assert Pass.model_validate({}).width is None


def test_pass_dimension_rejects_arrays() -> None:
    with pytest.raises(ValidationError) as excinfo:
        Pass.model_validate({"WIDTH": [640]})
    assert excinfo.value.errors()[0]["loc"] == ("WIDTH",)


def test_pass_encoding_omits_defaults() -> None:
    assert Pass().model_dump(mode="json") == {}
    assert Pass(target="buf", persistent=True, width="640").model_dump(mode="json") == {
        "TARGET": "buf",
        "PERSISTENT": True,
        "WIDTH": "640",
    }


def test_isf_defaults_encode_to_empty_object() -> None:
    isf = Isf()

    assert isf.inputs == ()
    assert isf.passes == ()
    assert isf.imported == {}
    assert isf.to_dict() == {}


def test_isf_can_be_built_with_attribute_names() -> None:
    isf = Isf(
        isfvsn="2",
        categories=["Blur"],
        inputs=[Input(name="inputImage", variant=ImageInput())],
        passes=[Pass(target="buf", float_buffer=True)],
        imported={"noise": ImageImport(path="noise.png")},
    )

    assert isf.to_dict() == {
        "ISFVSN": "2",
        "CATEGORIES": ["Blur"],
        "INPUTS": [{"NAME": "inputImage", "TYPE": "image"}],
        "PASSES": [{"TARGET": "buf", "FLOAT": True}],
        "IMPORTED": {"noise": {"PATH": "noise.png"}},
    }


def test_isf_decodes_inputs_from_wire_records() -> None:
    isf = Isf.model_validate(
        {
            "INPUTS": [
                {"NAME": "amount", "TYPE": "float", "DEFAULT": 0.5},
                {"NAME": "inputImage", "TYPE": "image"},
            ],
            "UNKNOWN_KEY": 3,
        }
    )

    assert [item.name for item in isf.inputs] == ["amount", "inputImage"]
    assert isf.input("amount").variant == FloatInput(default=0.5)
    with pytest.raises(KeyError):
        isf.input("missing")
    assert "UNKNOWN_KEY" not in isf.to_dict()


def test_isf_input_errors_are_located() -> None:
    with pytest.raises(ValidationError) as excinfo:
        Isf.model_validate({"INPUTS": [{"NAME": "ok", "TYPE": "image"}, {"NAME": "bad", "TYPE": "nope"}]})

    errors = excinfo.value.errors()
    assert len(errors) == 1
    assert errors[0]["loc"] == ("INPUTS", 1)
    assert "nope" in errors[0]["msg"]


def test_isf_rejects_wrong_container_shapes() -> None:
    with pytest.raises(ValidationError):
        Isf.model_validate({"CATEGORIES": "Blur"})
    with pytest.raises(ValidationError):
        Isf.model_validate({"ISFVSN": 2})
    with pytest.raises(ValidationError):
        Isf.model_validate({"IMPORTED": {"noise": {}}})


def test_isf_is_immutable() -> None:
    isf = Isf(isfvsn="2")

    with pytest.raises(ValidationError):
        isf.isfvsn = "3"


def test_json_dump_has_no_nulls() -> None:
    isf = Isf.model_validate({"PASSES": [{"WIDTH": None}], "DESCRIPTION": None})

    assert json.loads(isf.model_dump_json()) == {"PASSES": [{}]}


def test_import_paths_keep_their_text() -> None:
    isf = Isf.model_validate({"IMPORTED": {"a": {"PATH": "x//y/"}, "b": {"PATH": ""}, "c": {"PATH": "./n.png"}}})

    assert isf.imported["a"].path == "x//y/"
    assert isf.to_dict() == {"IMPORTED": {"a": {"PATH": "x//y/"}, "b": {"PATH": ""}, "c": {"PATH": "./n.png"}}}
