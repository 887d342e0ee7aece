"""Expression Resolver: classifies a value expression into ExpressionMetadata."""

import re

from ngtraverse.config import MAX_RESOLUTION_DEPTH
from ngtraverse.metadata.base import CAST_AS, THIS, BasicType, ObjectType
from ngtraverse.metadata.models import (
    CallExpression,
    NewExpression,
    ObjectMember,
    PropertyAccessExpression,
    TypeComposition,
    unknown_type,
)
from ngtraverse.metadata.types import resolve_type_arguments
from ngtraverse.utils.ast import call_arguments, get_text, named_children, property_key
from ngtraverse.utils.logger import get_logger

logger = get_logger("expressions")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(text: str):
    m = _LEADING_INT.match(text)
    if not m:
        logger.warning("Numeric literal %s has no base-10 integer prefix", text)
        return None
    return int(m.group(1))


def _array(node, depth):
    members = [ObjectMember(value=resolve_expression(el, depth + 1)) for el in named_children(node)]
    return TypeComposition(kind=ObjectType.ARRAY.value, members=members)


def _cast_as(node, depth):
    return TypeComposition(kind=CAST_AS, literal=get_text(node))


def _call(node, depth):
    callee = resolve_expression(node.child_by_field_name("function"), depth + 1)
    args = [resolve_expression(arg, depth + 1) for arg in call_arguments(node)]
    return CallExpression(expression=callee, args=args)


def _true(node, depth):
    return TypeComposition(kind=BasicType.BOOLEAN.value, literal=True)


def _false(node, depth):
    return TypeComposition(kind=BasicType.BOOLEAN.value, literal=False)


def _number(node, depth):
    return TypeComposition(kind=BasicType.NUMBER.value, literal=parse_int(get_text(node)))


def _identifier(node, depth):
    return TypeComposition(kind=get_text(node).strip())


def _new(node, depth):
    ctor = node.child_by_field_name("constructor")
    if ctor is not None and ctor.type == "identifier":
        kind = get_text(ctor).strip()
    else:
        kind = BasicType.UNKNOWN.value
    type_args = resolve_type_arguments(node.child_by_field_name("type_arguments"), depth)
    ctor_type = TypeComposition(kind=kind, args=type_args)
    args = [resolve_expression(arg, depth + 1) for arg in call_arguments(node)]
    return NewExpression(type=ctor_type, args=args)


def _null(node, depth):
    return TypeComposition(kind=BasicType.NULL.value)


def _undefined(node, depth):
    return TypeComposition(kind=BasicType.UNDEFINED.value)


def _this(node, depth):
    return TypeComposition(kind=THIS)


def _object(node, depth):
    members = []
    for prop in named_children(node):
        if prop.type != "pair":
            logger.warning("Skipping object literal member %s: %s", prop.type, get_text(prop))
            continue
        key = TypeComposition(kind=BasicType.STRING.value, literal=property_key(prop))
        value = resolve_expression(prop.child_by_field_name("value"), depth + 1)
        members.append(ObjectMember(key=key, value=value))
    return TypeComposition(kind=ObjectType.OBJECT.value, members=members)


def _string(node, depth):
    return TypeComposition(kind=BasicType.STRING.value, literal=get_text(node))


def _property_access(node, depth):
    obj = node.child_by_field_name("object")
    prop = node.child_by_field_name("property")
    return PropertyAccessExpression(identifier=get_text(obj).strip(), name=get_text(prop).strip())


EXPRESSION_HANDLERS = {
    "array": _array,
    "as_expression": _cast_as,
    "satisfies_expression": _cast_as,
    "call_expression": _call,
    "false": _false,
    "identifier": _identifier,
    "member_expression": _property_access,
    "new_expression": _new,
    "null": _null,
    "number": _number,
    "object": _object,
    "string": _string,
    "template_string": _string,
    "this": _this,
    "true": _true,
    "undefined": _undefined,
}


def resolve_expression(node, depth: int = 0):
    if node is None:
        return unknown_type()
    if depth > MAX_RESOLUTION_DEPTH:
        logger.warning("Expression nesting deeper than %d, stopping at %s", MAX_RESOLUTION_DEPTH, node.type)
        return unknown_type(f"unknown: {node.type}")

    handler = EXPRESSION_HANDLERS.get(node.type)
    if handler is None:
        logger.warning("Unhandled expression kind %s: %s", node.type, get_text(node))
        return unknown_type(f"unknown: {node.type}")
    return handler(node, depth)
