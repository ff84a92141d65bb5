# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json

import pytest

from merror import InvalidArgumentError
from merror.cli import main, split_type_spec


def test_split_type_spec_with_colon():
	assert split_type_spec("pkg.mod:Outer.Inner") == ("pkg.mod", "Outer.Inner")


def test_split_type_spec_dotted():
	assert split_type_spec("targets.Outer._Nested") == ("targets", "Outer._Nested")
	assert split_type_spec("merror.reflector.Reflector") == ("merror.reflector", "Reflector")


def test_split_type_spec_rejects_garbage():
	with pytest.raises(InvalidArgumentError):
		split_type_spec(":Name")
	with pytest.raises(InvalidArgumentError):
		split_type_spec("merror_no_such_module.Thing")


def test_main_lists_members(capsys):
	assert main(["targets:MethodTarget"]) == 0
	out = capsys.readouterr().out
	assert "- static method MethodTarget.__static_sum(int, int) -> int" in out
	assert "instance method MethodTarget._sum(int, Ref[int]) -> None" in out


def test_main_json_filtered_by_kind(capsys):
	assert main(["targets.IndexerTarget", "--kind", "indexer", "--json"]) == 0
	doc = json.loads(capsys.readouterr().out)
	assert doc["type"] == "targets.IndexerTarget"
	assert {m["kind"] for m in doc["members"]} == {"indexer"}
	assert len(doc["members"]) == 4


def test_main_reports_missing_type(capsys):
	assert main(["targets:Missing"]) == 1
	assert "error: type 'Missing' not found in module 'targets'" in capsys.readouterr().err
