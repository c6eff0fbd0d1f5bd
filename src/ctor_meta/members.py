# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Build and read the symbol-keyed static members carrying constructor metadata."""

import json

from ctor_meta.tree import (
    ArrayExpression,
    BlockStatement,
    CallExpression,
    FunctionExpression,
    Identifier,
    Literal,
    MemberExpression,
    MethodDefinition,
    Node,
    ReturnStatement,
)

CTOR_ARGS_KEY: str = "___CTOR_ARGS___"
CTOR_NAME_KEY: str = "___CTOR_NAME___"


def string_literal(value: str) -> Literal:
    """Build a string literal node."""
    return Literal(value=value, raw=json.dumps(value))


def string_array(values: list[str]) -> ArrayExpression:
    """Build an array literal of string literals."""
    return ArrayExpression(elements=[string_literal(value) for value in values])


def symbol_for(name: str) -> CallExpression:
    """Build a global symbol registry lookup, ``Symbol.for("<name>")``.

    Args:
        name: Registry key.

    Returns:
        Call expression node.
    """
    return CallExpression(
        callee=MemberExpression(
            object=_identifier("Symbol"),
            property=_identifier("for"),
            computed=False,
            extra={"optional": False},
        ),
        arguments=[string_literal(name)],
        extra={"optional": False},
    )


def static_getter(name: str, value: Node) -> MethodDefinition:
    """Build ``static get [Symbol.for(name)]() { return value; }``.

    Args:
        name: Symbol registry key used as the computed member key.
        value: Expression returned by the getter.

    Returns:
        Class member node.
    """
    return MethodDefinition(
        key=symbol_for(name),
        value=FunctionExpression(
            params=[],
            body=BlockStatement(body=[ReturnStatement(argument=value)]),
            extra={"id": None, "async": False, "generator": False, "expression": False},
        ),
        kind="get",
        computed=True,
        static=True,
        extra={"override": False, "optional": False, "decorators": []},
    )


def ctor_args_member(ctor_args: list[str]) -> MethodDefinition:
    """Build the member exposing constructor parameter type names."""
    return static_getter(CTOR_ARGS_KEY, string_array(ctor_args))


def ctor_name_member(class_name: str) -> MethodDefinition:
    """Build the member exposing the class name."""
    return static_getter(CTOR_NAME_KEY, string_literal(class_name))


def read_static_member(members: list[Node], name: str) -> str | list[str] | None:
    """Read the literal returned by a ``Symbol.for(name)`` static getter.

    When several getters share the key, the last one wins, as it does for a
    class evaluated at runtime.

    Args:
        members: Class body members.
        name: Symbol registry key.

    Returns:
        String or list of strings returned by the getter, or None when no
        matching getter returns a string literal value.
    """
    for member in reversed(members):
        if not isinstance(member, MethodDefinition):
            continue
        if not (member.static and member.computed and member.kind == "get"):
            continue
        if not _is_symbol_for(member.key, name):
            continue
        return _returned_literal(member.value)
    return None


def _is_symbol_for(key: Node, name: str) -> bool:
    if not isinstance(key, CallExpression) or len(key.arguments) != 1:
        return False
    callee = key.callee
    if not isinstance(callee, MemberExpression) or callee.computed:
        return False
    if not isinstance(callee.object, Identifier) or callee.object.name != "Symbol":
        return False
    if not isinstance(callee.property, Identifier) or callee.property.name != "for":
        return False
    argument = key.arguments[0]
    return isinstance(argument, Literal) and argument.value == name


def _returned_literal(function: Node) -> str | list[str] | None:
    if not isinstance(function, FunctionExpression):
        return None
    if not isinstance(function.body, BlockStatement) or len(function.body.body) != 1:
        return None
    statement = function.body.body[0]
    if not isinstance(statement, ReturnStatement):
        return None
    value = statement.argument
    if isinstance(value, Literal) and isinstance(value.value, str):
        return value.value
    if isinstance(value, ArrayExpression):
        items = [
            element.value
            for element in value.elements
            if isinstance(element, Literal) and isinstance(element.value, str)
        ]
        if len(items) != len(value.elements):
            return None
        return items
    return None


def _identifier(name: str) -> Identifier:
    return Identifier(name=name, absent={"typeAnnotation"})
