# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for host-facing plugin entry points."""

import io

import pytest
from rich.console import Console

from ctor_meta import (
    CTOR_ARGS_KEY,
    CTOR_NAME_KEY,
    ConfigError,
    TreeFormatError,
    process_estree,
    process_transform,
    read_static_member,
)
from ctor_meta.tree import ClassBody, ClassDeclaration, dump_node, load_program
from estree_builders import class_decl, nested_sum, program, sample_service, token


def test_ph7_ctm_001_process_transform_returns_same_program() -> None:
    tree = load_program(program(sample_service()))

    returned = process_transform(tree, "{}")

    assert returned is tree
    declaration = tree.body[0]
    assert isinstance(declaration, ClassDeclaration)
    assert isinstance(declaration.body, ClassBody)
    assert read_static_member(declaration.body.body, CTOR_ARGS_KEY) == ["SampleApi"]


@pytest.mark.parametrize("config_text", [None, '{"verbose": true}', '{"log": "trace"}'])
def test_ph7_ctm_002_rejected_config_leaves_tree_untouched(config_text: str | None) -> None:
    data = program(sample_service())
    tree = load_program(data)

    with pytest.raises(ConfigError):
        process_transform(tree, config_text)

    assert dump_node(tree) == data


def test_ph7_ctm_003_process_transform_reports_with_configured_level() -> None:
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False)
    tree = load_program(program(class_decl("Service")))

    process_transform(tree, '{"log": "info"}', console=console)

    assert "Processing class : Service" in buffer.getvalue()


def test_ph7_ctm_004_process_estree_returns_transformed_json() -> None:
    output = process_estree(program(class_decl("Plain")), "{}")

    members = output["body"][0]["body"]["body"]
    assert [member["kind"] for member in members] == ["get", "get"]
    assert [member["key"]["arguments"][0]["value"] for member in members] == [
        CTOR_ARGS_KEY,
        CTOR_NAME_KEY,
    ]
    assert members[0]["value"]["body"]["body"][0]["argument"] == {
        "type": "ArrayExpression",
        "elements": [],
    }


def test_ph7_ctm_005_process_estree_checks_config_before_tree() -> None:
    with pytest.raises(ConfigError):
        process_estree({"type": "NotAProgram"}, '{"unknown": 1}')
    with pytest.raises(TreeFormatError):
        process_estree({"type": "NotAProgram"}, "{}")


def test_ph7_ctm_006_process_estree_keeps_parser_tokens() -> None:
    data = program(class_decl("A"))
    data["tokens"] = [token("Keyword", "class"), token("Identifier", "A")]

    output = process_estree(data, "{}")

    assert output["tokens"] == data["tokens"]
    assert len(output["body"][0]["body"]["body"]) == 2


def test_ph7_ctm_007_process_estree_rejects_overly_deep_trees() -> None:
    with pytest.raises(TreeFormatError):
        process_estree(program(nested_sum(5000)), "{}")


def test_ph7_ctm_008_process_estree_logs_pass_boundary(caplog) -> None:
    caplog.set_level("DEBUG", logger="ctor_meta")

    process_estree(program(class_decl("Logged")), '{"log": "none"}')

    messages = [rec.message for rec in caplog.records if rec.name == "ctor_meta.plugin"]
    assert messages == ["Applying constructor metadata transform (log=none statements=1)"]
