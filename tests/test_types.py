"""Tests for bind-parameter inference."""

from decimal import Decimal

import pytest

from dbconn import BindKind, BindParam, ParameterBindingError, bind_params, infer_bind_param
from dbconn.types import bind_type_string


class TestInferBindParam:
    def test_scalar_kinds(self):
        assert infer_bind_param("GMT") == BindParam(BindKind.TEXT, "GMT")
        assert infer_bind_param(77) == BindParam(BindKind.INTEGER, 77)
        assert infer_bind_param(1.5) == BindParam(BindKind.FLOAT, 1.5)

    def test_bool_binds_as_integer(self):
        assert infer_bind_param(True) == BindParam(BindKind.INTEGER, 1)
        assert infer_bind_param(False) == BindParam(BindKind.INTEGER, 0)

    def test_tagged_value_passes_through(self):
        tagged = BindParam.text("42")
        assert infer_bind_param(tagged) is tagged

    @pytest.mark.parametrize("value", [None, [1], {"a": 1}, Decimal("1.0"), b"raw", object()])
    def test_unmappable_kinds_rejected(self, value):
        with pytest.raises(ParameterBindingError):
            infer_bind_param(value)


class TestBindParams:
    def test_one_tag_per_param_in_order(self):
        bound = bind_params(["a", 1, True, 2.5])
        assert [p.kind for p in bound] == [
            BindKind.TEXT,
            BindKind.INTEGER,
            BindKind.INTEGER,
            BindKind.FLOAT,
        ]
        assert [p.value for p in bound] == ["a", 1, 1, 2.5]
        assert bind_type_string(bound) == "siid"

    def test_empty(self):
        assert bind_params([]) == []
        assert bind_type_string([]) == ""

    def test_any_bad_value_fails_whole_list(self):
        with pytest.raises(ParameterBindingError, match="list"):
            bind_params([1, "ok", [2, 3]])

    def test_explicit_constructors_coerce(self):
        assert BindParam.integer(True).value == 1
        assert BindParam.floating(3).value == 3.0
        assert BindParam.text(12).value == "12"
