# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Read named-type references from constructor parameter lists."""

from ctor_meta.tree import (
    ArrayPattern,
    FunctionExpression,
    Identifier,
    MethodDefinition,
    Node,
    ObjectPattern,
    Property,
    TSEmptyBodyFunctionExpression,
    TSParameterProperty,
    TSTypeAnnotation,
    TSTypeReference,
)


def extract_type_name(annotation: Node | None) -> str | None:
    """Extract the simple type name from an identifier's type annotation.

    Only a direct, unparameterized reference to a single named type is
    recognized. Qualified names, generics, unions, literals, keyword types and
    missing annotations all yield None.

    Args:
        annotation: ``TSTypeAnnotation`` node or None.

    Returns:
        Referenced type name when recognized, else None.
    """
    if not isinstance(annotation, TSTypeAnnotation):
        return None
    type_node = annotation.type_annotation
    if not isinstance(type_node, TSTypeReference):
        return None
    if type_node.type_arguments is not None:
        return None
    if type_node.extra.get("typeParameters") is not None:
        return None
    if not isinstance(type_node.type_name, Identifier):
        return None
    return type_node.type_name.name


def resolve_parameter(param: Node | None) -> list[str]:
    """Resolve the type names one constructor parameter contributes.

    Parameter shapes:
        ``TSParameterProperty``: its inner identifier, when it is one.
        ``Identifier``: its own annotation.
        ``ArrayPattern``: top-level identifier elements only.
        ``ObjectPattern``: key/value properties whose value is an identifier.
        Anything else contributes nothing.

    Args:
        param: Constructor parameter node.

    Returns:
        Type names in pattern order; empty when nothing is recognized.
    """
    if isinstance(param, TSParameterProperty):
        return _identifier_types(param.parameter)
    if isinstance(param, Identifier):
        return _identifier_types(param)
    if isinstance(param, ArrayPattern):
        return _array_pattern_types(param)
    if isinstance(param, ObjectPattern):
        return _object_pattern_types(param)
    return []


def find_constructor(members: list[Node]) -> MethodDefinition | None:
    """Return the first constructor among class members, if any."""
    for member in members:
        if isinstance(member, MethodDefinition) and member.kind == "constructor":
            return member
    return None


def find_constructor_params(members: list[Node]) -> list[Node] | None:
    """Return the first constructor's parameter list.

    Args:
        members: Class body members.

    Returns:
        Declared parameters, or None when the class has no constructor.
    """
    constructor = find_constructor(members)
    if constructor is None:
        return None
    function = constructor.value
    if isinstance(function, (FunctionExpression, TSEmptyBodyFunctionExpression)):
        return function.params
    return []


def _identifier_types(node: Node | None) -> list[str]:
    if not isinstance(node, Identifier):
        return []
    type_name = extract_type_name(node.type_annotation)
    if type_name is None:
        return []
    return [type_name]


def _array_pattern_types(pattern: ArrayPattern) -> list[str]:
    # Single level: holes, rest elements and nested patterns are skipped.
    types: list[str] = []
    for element in pattern.elements:
        types.extend(_identifier_types(element))
    return types


def _object_pattern_types(pattern: ObjectPattern) -> list[str]:
    types: list[str] = []
    for prop in pattern.properties:
        if not isinstance(prop, Property) or prop.shorthand:
            continue
        types.extend(_identifier_types(prop.value))
    return types
