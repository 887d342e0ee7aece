"""Type Resolver: classifies a Tree-sitter type node into a TypeComposition."""

from ngtraverse.config import MAX_RESOLUTION_DEPTH
from ngtraverse.metadata.base import (
    BASIC_TYPE_MAP,
    OBJECT_TYPE_MAP,
    REFERENCE_TYPE_NAMES,
    BasicType,
)
from ngtraverse.metadata.models import TypeComposition, unknown_type
from ngtraverse.utils.ast import get_text, named_children, unwrap_type_annotation
from ngtraverse.utils.logger import get_logger

logger = get_logger("types")

REFERENCE_TYPE_NODES = ("type_identifier", "nested_type_identifier", "generic_type")


def type_kind(node) -> str:
    """Lookup key for the basic-type table.

    Keyword types share the `predefined_type` node, and `null`/`undefined`
    in type position are `literal_type` nodes wrapping the keyword.
    """
    if node.type == "predefined_type":
        return get_text(node).strip()
    if node.type == "literal_type":
        inner = named_children(node)
        if len(inner) == 1 and inner[0].type in ("null", "undefined"):
            return inner[0].type
    return node.type


def reference_type_name(node) -> str:
    name_node = node.child_by_field_name("name") if node.type == "generic_type" else node
    name = get_text(name_node).strip()
    tag = REFERENCE_TYPE_NAMES.get(name)
    return tag.value if tag else name


COMPLEX_TYPE_MAP = {node_type: reference_type_name for node_type in REFERENCE_TYPE_NODES}


def get_type_from_node(node) -> str:
    kind = type_kind(node)
    tag = BASIC_TYPE_MAP.get(kind)
    if tag is not None:
        return tag.value
    tag = OBJECT_TYPE_MAP.get(kind)
    if tag is not None:
        return tag.value
    handler = COMPLEX_TYPE_MAP.get(kind)
    if handler is not None:
        return handler(node)
    return BasicType.UNKNOWN.value


def _flatten_members(node):
    # unions and intersections nest to the left, one level per operator
    members = []
    stack = list(reversed(named_children(node)))
    while stack:
        child = stack.pop()
        if child.type == node.type:
            stack.extend(reversed(named_children(child)))
        else:
            members.append(child)
    return members


def _type_arguments(node):
    if node.type == "generic_type":
        args = node.child_by_field_name("type_arguments")
        return named_children(args) if args is not None else []
    if node.type in ("union_type", "intersection_type"):
        return _flatten_members(node)
    if node.type in ("parenthesized_type", "array_type"):
        return named_children(node)[:1]
    return []


def resolve_type(node, depth: int = 0) -> TypeComposition:
    node = unwrap_type_annotation(node)
    if node is None:
        return unknown_type()
    if depth > MAX_RESOLUTION_DEPTH:
        logger.warning("Type nesting deeper than %d, stopping at %s", MAX_RESOLUTION_DEPTH, node.type)
        return unknown_type()

    kind = get_type_from_node(node)
    if kind == BasicType.UNKNOWN.value:
        logger.warning("Unhandled type kind %s: %s", node.type, get_text(node))
        return unknown_type()

    if kind == BasicType.LITERAL.value:
        return TypeComposition(kind=kind, literal=get_text(node))

    nested = _type_arguments(node)
    if nested:
        return TypeComposition(kind=kind, args=[resolve_type(n, depth + 1) for n in nested])
    if node.type == "generic_type":
        return TypeComposition(kind=kind, args=[])
    return TypeComposition(kind=kind)


def resolve_type_arguments(type_arguments_node, depth: int = 0):
    if type_arguments_node is None:
        return None
    return [resolve_type(n, depth + 1) for n in named_children(type_arguments_node)]

