"""Tests for the documentation data models and serialization."""

import dataclasses
import json

import pytest

from coffeedoc.analysis.annotations import Annotation, parse_annotations
from coffeedoc.parsers.structure import ClassDoc, FunctionDoc, ModuleDoc

RAW = "Doc.\n@param a x\n@return y"


def _function() -> FunctionDoc:
    return FunctionDoc(
        name="render",
        docstring="Renders.\n@param el target",
        params=["el", "@model", "rest..."],
        annotations={"param": [Annotation("el target", "@param el target\n")]},
        raw_comment="Renders.\n@param el target",
    )


class TestFunctionDoc:
    """Tests for FunctionDoc."""

    def test_defaults(self) -> None:
        func = FunctionDoc(name="f")
        assert func.docstring is None
        assert func.params == []
        assert func.annotations is None
        assert func.annotation_free_docstring() == ""

    def test_to_dict_omits_raw_comment(self) -> None:
        data = _function().to_dict()
        assert set(data) == {"name", "docstring", "params", "annotations"}
        assert data["annotations"] == {
            "param": [{"value": "el target", "raw_value": "@param el target\n"}]
        }

    def test_from_dict(self) -> None:
        restored = FunctionDoc.from_dict(_function().to_dict())
        assert restored.name == "render"
        assert restored.params == ["el", "@model", "rest..."]
        expected = Annotation("el target", "@param el target\n")
        assert restored.annotations["param"][0] == expected
        assert restored.raw_comment is None

    def test_from_dict_without_annotations(self) -> None:
        restored = FunctionDoc.from_dict({"name": "f"})
        assert restored.annotations is None

    def test_annotation_free_docstring(self) -> None:
        assert _function().annotation_free_docstring() == "Renders."

    def test_raw_comment_not_in_repr(self) -> None:
        assert "raw_comment" not in repr(_function())

    def test_single_filter_tag(self) -> None:
        func = FunctionDoc(
            name="f",
            annotations=parse_annotations(RAW),
            raw_comment=RAW,
        )
        assert func.annotation_free_docstring("param") == "Doc.\n@return y"

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            _function().name = "other"


class TestClassDoc:
    """Tests for ClassDoc."""

    def test_defaults(self) -> None:
        cls = ClassDoc(name="View")
        assert cls.parent is None
        assert cls.static_methods == []
        assert cls.instance_methods == []
        assert cls.private_methods == []

    def test_roundtrip(self) -> None:
        cls = ClassDoc(
            name="View",
            docstring="A view.",
            parent="Backbone.View",
            static_methods=[FunctionDoc(name="create")],
            instance_methods=[_function()],
            private_methods=[FunctionDoc(name="_helper")],
        )
        restored = ClassDoc.from_dict(cls.to_dict())
        assert restored.to_dict() == cls.to_dict()
        assert restored.parent == "Backbone.View"


class TestModuleDoc:
    """Tests for ModuleDoc."""

    def test_defaults(self) -> None:
        module = ModuleDoc()
        assert module.docstring is None
        assert module.deps == []

    def test_to_dict_is_json_ready(self) -> None:
        module = ModuleDoc(
            docstring="Doc.",
            deps=[("fs", "fs")],
            classes=[ClassDoc(name="Reader")],
            functions=[_function()],
        )
        data = json.loads(json.dumps(module.to_dict()))
        assert data["deps"] == [["fs", "fs"]]
        assert data["classes"][0]["name"] == "Reader"
        assert data["functions"][0]["params"] == ["el", "@model", "rest..."]

    def test_opaque_deps_pass_through(self) -> None:
        module = ModuleDoc(deps=["jquery", {"name": "x"}])
        assert module.to_dict()["deps"] == ["jquery", {"name": "x"}]

    def test_from_dict(self) -> None:
        data = {
            "docstring": "Doc.",
            "deps": [["fs", "fs"]],
            "classes": [{"name": "Reader"}],
            "functions": [{"name": "read", "params": ["file"]}],
        }
        module = ModuleDoc.from_dict(data)
        assert module.classes[0].name == "Reader"
        assert module.functions[0].params == ["file"]
        assert module.deps == [["fs", "fs"]]
