# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from irgen.naming import BindingNameStrategy


def test_default_style_lowercases_first_letter() -> None:
	assert BindingNameStrategy().binding_for("Option") == "option"
	assert BindingNameStrategy().binding_for("TypeExpr") == "typeExpr"


def test_lower_style_lowercases_whole_name() -> None:
	assert BindingNameStrategy(style="lower").binding_for("TypeExpr") == "typeexpr"


def test_keyword_collision_gets_suffix() -> None:
	assert BindingNameStrategy().binding_for("Type") == "type_"
	assert BindingNameStrategy().binding_for("Func") == "func_"
	assert BindingNameStrategy(suffix="0").binding_for("Map") == "map0"


def test_consumer_parameter_collision() -> None:
	assert BindingNameStrategy().binding_for("Consumer") == "consumer_"


def test_field_collision_repeats_suffix() -> None:
	strategy = BindingNameStrategy(style="lower-first")
	assert strategy.binding_for("x", ["x", "x_"]) == "x__"


def test_invalid_strategy() -> None:
	with pytest.raises(ValueError):
		BindingNameStrategy(style="upper")
	with pytest.raises(ValueError):
		BindingNameStrategy(suffix="")
