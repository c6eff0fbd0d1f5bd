# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Program tree model for TypeScript-ESTree JSON documents.

The model names only the node kinds the constructor metadata transform reads
or builds. Every other ESTree node kind is decoded into ``GenericNode`` and
every unnamed key is kept in ``Node.extra``, so a decoded tree encodes back to
the JSON it came from.
"""

import copy
import logging
from collections.abc import Iterator
from dataclasses import MISSING, dataclass, field, fields
from typing import Any, cast

logger = logging.getLogger(__name__)

_NODE_TYPES: dict[str, type["Node"]] = {}
_RESERVED_FIELDS: frozenset[str] = frozenset({"extra", "absent"})
# Source metadata kept as plain JSON; token entries reuse node type names.
_RAW_KEYS: frozenset[str] = frozenset({"tokens", "comments", "loc", "range"})


class TreeFormatError(RuntimeError):
    """Represent a JSON document that is not a well-formed program tree."""


def _list_field(required: bool = False) -> Any:
    if required:
        return field(metadata={"list": True})
    return field(default_factory=list, metadata={"list": True})


@dataclass
class Node:
    """Base class for all program tree nodes.

    Attributes:
        extra: ESTree keys not modelled as attributes, decoded recursively.
            Source metadata keys (``tokens``, ``comments``, ``loc``, ``range``)
            are kept as plain JSON.
        absent: Optional keys that were missing from the decoded JSON.
    """

    extra: dict[str, Any] = field(default_factory=dict, kw_only=True)
    absent: set[str] = field(
        default_factory=set, kw_only=True, repr=False, compare=False
    )

    @property
    def node_type(self) -> str:
        """Return the ESTree ``type`` discriminator."""
        return type(self).__name__


def _register(cls: type[Node]) -> type[Node]:
    _NODE_TYPES[cls.__name__] = cls
    return cls


@dataclass
class GenericNode(Node):
    """Any ESTree node kind the model does not name."""

    type: str
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def node_type(self) -> str:
        return self.type


@_register
@dataclass
class Program(Node):
    body: list[Node] = _list_field(required=True)


@_register
@dataclass
class ClassDeclaration(Node):
    id: Node | None
    body: Node


@_register
@dataclass
class ClassExpression(Node):
    id: Node | None
    body: Node


@_register
@dataclass
class ClassBody(Node):
    body: list[Node] = _list_field(required=True)


@_register
@dataclass
class MethodDefinition(Node):
    key: Node
    value: Node
    kind: str = "method"
    computed: bool = False
    static: bool = False


@_register
@dataclass
class FunctionExpression(Node):
    params: list[Node] = _list_field(required=True)
    body: Node | None = None


@_register
@dataclass
class TSEmptyBodyFunctionExpression(Node):
    """Body-less function of an overload signature or declared method."""

    params: list[Node] = _list_field(required=True)
    body: Node | None = None


@_register
@dataclass
class BlockStatement(Node):
    body: list[Node] = _list_field(required=True)


@_register
@dataclass
class ReturnStatement(Node):
    argument: Node | None = None


@_register
@dataclass
class Identifier(Node):
    name: str
    type_annotation: Node | None = None


@_register
@dataclass
class TSParameterProperty(Node):
    """Constructor parameter promoted to a class field."""

    parameter: Node
    accessibility: str | None = None
    readonly: bool = False


@_register
@dataclass
class TSTypeAnnotation(Node):
    type_annotation: Node


@_register
@dataclass
class TSTypeReference(Node):
    type_name: Node
    type_arguments: Node | None = None


@_register
@dataclass
class TSQualifiedName(Node):
    left: Node
    right: Node


@_register
@dataclass
class ArrayPattern(Node):
    elements: list[Node | None] = _list_field(required=True)
    type_annotation: Node | None = None


@_register
@dataclass
class ObjectPattern(Node):
    properties: list[Node] = _list_field(required=True)
    type_annotation: Node | None = None


@_register
@dataclass
class Property(Node):
    key: Node
    value: Node
    shorthand: bool = False
    computed: bool = False


@_register
@dataclass
class AssignmentPattern(Node):
    left: Node
    right: Node


@_register
@dataclass
class RestElement(Node):
    argument: Node


@_register
@dataclass
class CallExpression(Node):
    callee: Node
    arguments: list[Node] = _list_field(required=True)


@_register
@dataclass
class MemberExpression(Node):
    object: Node
    property: Node
    computed: bool = False


@_register
@dataclass
class Literal(Node):
    value: Any
    raw: str | None = None


@_register
@dataclass
class ArrayExpression(Node):
    elements: list[Node | None] = _list_field(required=True)


def _json_key(attribute: str) -> str:
    head, *rest = attribute.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _model_fields(node: Node) -> list[Any]:
    return [item for item in fields(node) if item.name not in _RESERVED_FIELDS]


def load_node(data: dict[str, Any]) -> Node:
    """Decode one ESTree JSON object into a node.

    Args:
        data: JSON object carrying a string ``type`` key.

    Returns:
        Decoded node with all descendants decoded.

    Raises:
        TreeFormatError: If the object or one of its descendants is malformed.
    """
    node_type = data.get("type")
    if not isinstance(node_type, str):
        raise TreeFormatError(f"Node has no string 'type' key (keys={sorted(data)})")

    node_class = _NODE_TYPES.get(node_type)
    if node_class is None:
        return GenericNode(
            type=node_type,
            fields={
                key: _decode_field(key, value)
                for key, value in data.items()
                if key != "type"
            },
        )

    kwargs: dict[str, Any] = {}
    absent: set[str] = set()
    consumed = {"type"}
    for model_field in fields(node_class):
        if model_field.name in _RESERVED_FIELDS:
            continue
        key = _json_key(model_field.name)
        consumed.add(key)
        if key not in data:
            is_required = (
                model_field.default is MISSING
                and model_field.default_factory is MISSING
            )
            if is_required:
                raise TreeFormatError(f"{node_type} node is missing '{key}'")
            absent.add(key)
            continue
        value = _decode_value(data[key])
        if model_field.metadata.get("list") and not isinstance(value, list):
            raise TreeFormatError(f"{node_type}.{key} must be a list")
        kwargs[model_field.name] = value

    extra = {
        key: _decode_field(key, value)
        for key, value in data.items()
        if key not in consumed
    }
    return node_class(**kwargs, extra=extra, absent=absent)


def load_program(data: Any) -> Program:
    """Decode an ESTree ``Program`` document.

    Args:
        data: Deserialized JSON document.

    Returns:
        Decoded program root.

    Raises:
        TreeFormatError: If the document is not a well-formed ``Program`` or
            nests deeper than the interpreter recursion limit allows.
    """
    if not isinstance(data, dict):
        raise TreeFormatError("Program tree must be a JSON object")
    if data.get("type") != "Program":
        raise TreeFormatError(
            f"Program tree root must have type 'Program' (type={data.get('type')!r})"
        )
    try:
        return cast(Program, load_node(data))
    except RecursionError as exc:
        logger.warning("Program tree nesting exceeds the recursion limit")
        raise TreeFormatError("Program tree is nested too deeply to decode") from exc


def dump_program(program: Program) -> dict[str, Any]:
    """Encode a program root back into ESTree JSON data.

    Raises:
        TreeFormatError: If the tree nests deeper than the interpreter
            recursion limit allows.
    """
    try:
        return dump_node(program)
    except RecursionError as exc:
        logger.warning("Program tree nesting exceeds the recursion limit")
        raise TreeFormatError("Program tree is nested too deeply to encode") from exc


def dump_node(node: Node) -> dict[str, Any]:
    """Encode a node back into ESTree JSON data.

    Args:
        node: Node to encode.

    Returns:
        JSON-compatible mapping.
    """
    if isinstance(node, GenericNode):
        data: dict[str, Any] = {"type": node.type}
        data.update({key: _encode_value(value) for key, value in node.fields.items()})
        return data

    data = {"type": node.node_type}
    for model_field in _model_fields(node):
        key = _json_key(model_field.name)
        value = getattr(node, model_field.name)
        if key in node.absent and value == _default_of(model_field):
            continue
        data[key] = _encode_value(value)
    data.update({key: _encode_value(value) for key, value in node.extra.items()})
    return data


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct child nodes of ``node`` in field order.

    Args:
        node: Parent node.

    Yields:
        Child nodes, looking through lists and plain mappings.
    """
    if isinstance(node, GenericNode):
        yield from _iter_nodes(node.fields)
        return
    for model_field in _model_fields(node):
        yield from _iter_nodes(getattr(node, model_field.name))
    yield from _iter_nodes(node.extra)


class NodeVisitor:
    """Walk a program tree depth-first, dispatching on node type.

    Subclasses define ``visit_<Type>`` methods; nodes without one are walked
    through ``generic_visit``. The generic walk keeps an explicit stack, so
    tree depth only costs Python frames inside ``visit_<Type>`` methods that
    call ``generic_visit`` themselves.
    """

    def visit(self, node: Node) -> None:
        method = getattr(self, f"visit_{node.node_type}", None)
        if method is None:
            self.generic_visit(node)
            return
        method(node)

    def generic_visit(self, node: Node) -> None:
        stack = list(iter_child_nodes(node))
        stack.reverse()
        while stack:
            child = stack.pop()
            method = getattr(self, f"visit_{child.node_type}", None)
            if method is not None:
                method(child)
                continue
            children = list(iter_child_nodes(child))
            children.reverse()
            stack.extend(children)


def _decode_field(key: str, value: Any) -> Any:
    if key in _RAW_KEYS:
        return copy.deepcopy(value)
    return _decode_value(value)


def _decode_value(value: Any) -> Any:
    if isinstance(value, dict):
        if isinstance(value.get("type"), str):
            return load_node(value)
        return {key: _decode_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_decode_value(item) for item in value]
    return value


def _encode_value(value: Any) -> Any:
    if isinstance(value, Node):
        return dump_node(value)
    if isinstance(value, dict):
        return {key: _encode_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_encode_value(item) for item in value]
    return value


def _iter_nodes(value: Any) -> Iterator[Node]:
    if isinstance(value, Node):
        yield value
    elif isinstance(value, dict):
        for item in value.values():
            yield from _iter_nodes(item)
    elif isinstance(value, list):
        for item in value:
            yield from _iter_nodes(item)


def _default_of(model_field: Any) -> Any:
    if model_field.default_factory is not MISSING:
        return model_field.default_factory()
    return model_field.default
