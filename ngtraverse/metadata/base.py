from enum import Enum


class BasicType(str, Enum):
    ANY = "any"
    BOOLEAN = "boolean"
    ENUM = "enum"
    FUNCTION = "function"
    INTERSECTION = "intersection"
    LITERAL = "literal"
    NULL = "null"
    NUMBER = "number"
    PARENTHESIZED = "parenthesized"
    STRING = "string"
    UNDEFINED = "undefined"
    UNION = "union"
    UNKNOWN = "[unknown]"
    VOID = "void"


class ObjectType(str, Enum):
    ARRAY = "Array"
    MAP = "Map"
    OBJECT = "Object"
    SET = "Set"


CAST_AS = "cast-as"
THIS = "this"


class ExpressionType(str, Enum):
    NEW = "new"
    CALL = "call"
    PROPERTY_ACCESS = "property-access"


# Keyed by Tree-sitter node type, or by keyword text for `predefined_type`
# and null/undefined `literal_type` nodes (see types.type_kind).
BASIC_TYPE_MAP = {
    "any": BasicType.ANY,
    "boolean": BasicType.BOOLEAN,
    "function_type": BasicType.FUNCTION,
    "intersection_type": BasicType.INTERSECTION,
    "literal_type": BasicType.LITERAL,
    "null": BasicType.NULL,
    "number": BasicType.NUMBER,
    "parenthesized_type": BasicType.PARENTHESIZED,
    "string": BasicType.STRING,
    "undefined": BasicType.UNDEFINED,
    "union_type": BasicType.UNION,
    "void": BasicType.VOID,
}

OBJECT_TYPE_MAP = {
    "array_type": ObjectType.ARRAY,
    "object_type": ObjectType.OBJECT,
}

REFERENCE_TYPE_NAMES = {
    "Set": ObjectType.SET,
    "Map": ObjectType.MAP,
}
