import re

from ngtraverse.utils.logger import get_logger

logger = get_logger("ast")

STRIP_QUOTE_CHARS_REGEXP = re.compile(r"^[`'\"](.+)[`'\"]$", re.DOTALL)


def get_text(node) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def named_children(node):
    return [c for c in node.named_children if c.type != "comment"]


def first_child_of_type(node, *types):
    for c in node.children:
        if c.type in types:
            return c
    return None


def has_token(node, token: str) -> bool:
    return any(not c.is_named and c.type == token for c in node.children)


def extract_ident(node):
    name_node = node.child_by_field_name("name")
    if name_node is not None:
        return strip_quotes(name_node)
    for c in node.children:
        if c.type in ("identifier", "type_identifier", "property_identifier"):
            return get_text(c)
    return None


def strip_quotes(node_or_text) -> str:
    text = node_or_text if isinstance(node_or_text, str) else get_text(node_or_text)
    return STRIP_QUOTE_CHARS_REGEXP.sub(r"\1", text)


def unwrap_type_annotation(node):
    if node is not None and node.type == "type_annotation":
        inner = named_children(node)
        return inner[0] if inner else None
    return node


def property_key(pair_node):
    key = pair_node.child_by_field_name("key")
    if key is None:
        return None
    return strip_quotes(key)


def object_literal_properties_as_map(object_node):
    properties = {}
    for prop in named_children(object_node):
        if prop.type != "pair":
            logger.warning("Skipping object literal member %s: %s", prop.type, get_text(prop))
            continue
        key = property_key(prop)
        value = prop.child_by_field_name("value")
        if key is not None and value is not None:
            properties[key] = value
    return properties


def map_to_array_of_strings(array_node):
    return [strip_quotes(item) for item in named_children(array_node)]


def call_arguments(call_node):
    args = call_node.child_by_field_name("arguments")
    if args is None:
        return []
    return named_children(args)
