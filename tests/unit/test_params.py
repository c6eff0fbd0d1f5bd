# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for type extraction, parameter resolution and constructor lookup."""

from ctor_meta.params import (
    extract_type_name,
    find_constructor,
    find_constructor_params,
    resolve_parameter,
)
from ctor_meta.tree import ClassBody, Identifier, load_node
from estree_builders import (
    array_pattern,
    assign,
    class_body,
    constructor,
    ident,
    keyword,
    method,
    number,
    object_pattern,
    overload_constructor,
    param_prop,
    prop,
    rest,
    type_args,
    type_ref,
)


def _annotation_of(data: dict) -> object:
    node = load_node(data)
    assert isinstance(node, Identifier)
    return node.type_annotation


def test_ph2_ctm_001_extractor_returns_simple_type_reference_name() -> None:
    assert extract_type_name(_annotation_of(ident("a", type_ref("Foo")))) == "Foo"


def test_ph2_ctm_002_extractor_ignores_missing_and_non_reference_types() -> None:
    union = {"type": "TSUnionType", "types": [type_ref("A"), type_ref("B")]}
    literal = {"type": "TSLiteralType", "literal": {"type": "Literal", "value": "x", "raw": '"x"'}}

    assert extract_type_name(None) is None
    assert extract_type_name(_annotation_of(ident("a"))) is None
    assert extract_type_name(_annotation_of(ident("a", keyword("TSStringKeyword")))) is None
    assert extract_type_name(_annotation_of(ident("a", union))) is None
    assert extract_type_name(_annotation_of(ident("a", literal))) is None


def test_ph2_ctm_003_extractor_ignores_generic_and_qualified_references() -> None:
    generic = type_ref("Repository", type_args(type_ref("User")))
    legacy_generic = type_ref("Repository")
    legacy_generic["typeParameters"] = type_args(type_ref("User"))
    qualified = {
        "type": "TSTypeReference",
        "typeName": {"type": "TSQualifiedName", "left": ident("ns"), "right": ident("Foo")},
    }

    assert extract_type_name(_annotation_of(ident("a", generic))) is None
    assert extract_type_name(_annotation_of(ident("a", legacy_generic))) is None
    assert extract_type_name(_annotation_of(ident("a", qualified))) is None


def test_ph2_ctm_004_resolver_handles_identifier_and_promoted_parameters() -> None:
    assert resolve_parameter(load_node(ident("a", type_ref("Foo")))) == ["Foo"]
    assert resolve_parameter(load_node(ident("b"))) == []
    assert resolve_parameter(load_node(param_prop(ident("api", type_ref("Api"))))) == [
        "Api"
    ]


def test_ph2_ctm_005_resolver_skips_defaulted_and_rest_parameters() -> None:
    defaulted = assign(ident("a", type_ref("Foo")), number(1))
    promoted_defaulted = param_prop(assign(ident("a", type_ref("Foo")), number(1)))
    rest_param = rest(ident("items", type_ref("Items")))

    assert resolve_parameter(load_node(defaulted)) == []
    assert resolve_parameter(load_node(promoted_defaulted)) == []
    assert resolve_parameter(load_node(rest_param)) == []
    assert resolve_parameter(None) == []


def test_ph2_ctm_006_resolver_reads_one_level_of_array_pattern() -> None:
    pattern = array_pattern(
        ident("a", type_ref("Foo")),
        None,
        ident("b"),
        array_pattern(ident("nested", type_ref("Deep"))),
        assign(ident("c", type_ref("Defaulted")), number(0)),
        ident("d", type_ref("Bar")),
        rest(ident("others", type_ref("Rest"))),
    )

    assert resolve_parameter(load_node(pattern)) == ["Foo", "Bar"]


def test_ph2_ctm_007_resolver_reads_key_value_object_properties_only() -> None:
    pattern = object_pattern(
        prop("first", ident("one", type_ref("Foo"))),
        prop("x", ident("x"), shorthand=True),
        prop("second", assign(ident("two", type_ref("Defaulted")), number(0))),
        prop("third", object_pattern(prop("deep", ident("deep", type_ref("Deep"))))),
        prop("fourth", ident("four", type_ref("Bar"))),
        rest(ident("others")),
    )

    assert resolve_parameter(load_node(pattern)) == ["Foo", "Bar"]


def test_ph2_ctm_008_outer_pattern_annotation_does_not_flow_inward() -> None:
    type_literal = {
        "type": "TSTypeLiteral",
        "members": [
            {
                "type": "TSPropertySignature",
                "key": ident("x"),
                "typeAnnotation": {"type": "TSTypeAnnotation", "typeAnnotation": type_ref("Foo")},
            }
        ],
    }
    pattern = object_pattern(
        prop("x", ident("x"), shorthand=True),
        prop("y", ident("y"), shorthand=True),
        annotation=type_literal,
    )
    named_outer = array_pattern(ident("a"), annotation=type_ref("Pair"))

    assert resolve_parameter(load_node(pattern)) == []
    assert resolve_parameter(load_node(named_outer)) == []


def test_ph2_ctm_009_locator_returns_first_constructor_params() -> None:
    body = load_node(
        class_body(
            method("run"),
            constructor(ident("a", type_ref("First"))),
            constructor(ident("b", type_ref("Second"))),
        )
    )
    assert isinstance(body, ClassBody)

    params = find_constructor_params(body.body)

    assert params is not None
    assert [param.name for param in params if isinstance(param, Identifier)] == ["a"]
    assert find_constructor(body.body) is body.body[1]


def test_ph2_ctm_010_locator_returns_none_without_constructor() -> None:
    body = load_node(class_body(method("run", ident("a", type_ref("Foo")))))
    assert isinstance(body, ClassBody)

    assert find_constructor_params(body.body) is None
    assert find_constructor_params([]) is None


def test_ph2_ctm_011_locator_reads_overload_signature_params() -> None:
    body = load_node(
        class_body(
            overload_constructor(ident("a", type_ref("Overload"))),
            constructor(ident("a", type_ref("Impl"))),
        )
    )
    assert isinstance(body, ClassBody)

    params = find_constructor_params(body.body)

    assert params is not None
    assert [resolve_parameter(param) for param in params] == [["Overload"]]
