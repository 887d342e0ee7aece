from enum import Enum

from ngtraverse.metadata.expressions import resolve_expression
from ngtraverse.utils.ast import (
    get_text,
    map_to_array_of_strings,
    named_children,
    object_literal_properties_as_map,
    strip_quotes,
)


class NgClassDecorator(str, Enum):
    COMPONENT = "Component"
    DIRECTIVE = "Directive"
    INJECTABLE = "Injectable"
    NG_MODULE = "NgModule"
    PIPE = "Pipe"


class NgDirectiveClassMemberDecorator(str, Enum):
    ATTRIBUTE = "Attribute"
    CONTENT_CHILD = "ContentChild"
    CONTENT_CHILDREN = "ContentChildren"
    HOST_BINDING = "HostBinding"
    HOST_LISTENER = "HostListener"
    INPUT = "Input"
    OUTPUT = "Output"


class NgComponentClassMemberDecorator(str, Enum):
    VIEW_CHILD = "ViewChild"
    VIEW_CHILDREN = "ViewChildren"


def decorator_expression(decorator):
    inner = named_children(decorator)
    return inner[0] if inner else None


def decorator_call(decorator):
    expression = decorator_expression(decorator)
    if expression is not None and expression.type == "call_expression":
        return expression
    return None


def get_decorator_name(decorator) -> str:
    expression = decorator_expression(decorator)
    if expression is None:
        return ""
    if expression.type == "call_expression":
        expression = expression.child_by_field_name("function")
    return get_text(expression).strip()


def attached_decorators(node):
    """Decorators applying to `node`, in source order.

    The grammar hangs class decorators on an enclosing `export_statement` and
    method decorators on the class body as siblings preceding the method.
    """
    decorators = []
    parent = node.parent
    if parent is not None and parent.type == "export_statement":
        decorators.extend(c for c in parent.children if c.type == "decorator")
    if parent is not None and parent.type == "class_body":
        preceding = []
        sibling = node.prev_named_sibling
        while sibling is not None and sibling.type in ("decorator", "comment"):
            if sibling.type == "decorator":
                preceding.append(sibling)
            sibling = sibling.prev_named_sibling
        decorators.extend(reversed(preceding))
    decorators.extend(c for c in node.children if c.type == "decorator")
    return decorators


def get_decorator_map(node):
    decorator_map = {}
    for decorator in attached_decorators(node):
        decorator_map[get_decorator_name(decorator)] = decorator
    return decorator_map


def get_decorator_names(node):
    return set(get_decorator_map(node))


def has_decorator_with_name(node, name) -> bool:
    return getattr(name, "value", name) in get_decorator_names(node)


def argument_at(decorator, position):
    call = decorator_call(decorator) if decorator is not None else None
    if call is None:
        return None
    args = call.child_by_field_name("arguments")
    values = named_children(args) if args is not None else []
    return values[position] if position < len(values) else None


def first_argument(decorator):
    return argument_at(decorator, 0)


def config_object(decorator):
    arg = first_argument(decorator)
    if arg is not None and arg.type == "object":
        return arg
    return None


def decorator_properties(node, name):
    """Key to value-node map of the named decorator's configuration object."""
    decorator = get_decorator_map(node).get(getattr(name, "value", name))
    obj = config_object(decorator) if decorator is not None else None
    if obj is None:
        return {}
    return object_literal_properties_as_map(obj)


# --- Property readers -----------------------------------------------------------------
# Each takes the value node of one configuration key (or None) and returns the
# field value, None leaving the field unset.


def read_string(value):
    if value is None:
        return None
    return strip_quotes(value)


def read_string_array(value):
    if value is None or value.type != "array":
        return None
    return map_to_array_of_strings(value)


def read_boolean(value):
    if value is None:
        return None
    if value.type == "true":
        return True
    if value.type == "false":
        return False
    return None


def read_enum(prefix):
    def reader(value):
        if value is None or value.type != "member_expression":
            return None
        if get_text(value.child_by_field_name("object")).strip() != prefix:
            return None
        return get_text(value.child_by_field_name("property")).strip()

    return reader


def read_expression(value):
    if value is None:
        return None
    return resolve_expression(value)


def read_properties(props, rules):
    """Apply `rules` (key -> (attribute, reader)) to a decorator property map."""
    fields = {}
    for key, (attribute, reader) in rules.items():
        result = reader(props.get(key))
        if result is not None:
            fields[attribute] = result
    return fields
