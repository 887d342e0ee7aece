from ngtraverse.metadata.base import BasicType
from ngtraverse.metadata.members import get_method_metadata, get_method_parameters
from ngtraverse.metadata.models import (
    FunctionMetadata,
    InterfacePropertyMetadata,
    InterfaceRecord,
    TypeComposition,
)
from ngtraverse.metadata.types import resolve_type
from ngtraverse.utils.ast import (
    extract_ident,
    first_child_of_type,
    has_token,
    named_children,
    unwrap_type_annotation,
)
from ngtraverse.utils.logger import get_logger

logger = get_logger("interfaces")

VOID = BasicType.VOID.value


def _void():
    return TypeComposition(kind=VOID)


def collect_property_signature(member) -> InterfacePropertyMetadata:
    type_node = member.child_by_field_name("type")
    return InterfacePropertyMetadata(
        identifier=extract_ident(member),
        optional=has_token(member, "?"),
        type=resolve_type(type_node) if type_node is not None else None,
    )


def collect_function_signature(member) -> FunctionMetadata:
    function_type = unwrap_type_annotation(member.child_by_field_name("type"))
    return_node = function_type.child_by_field_name("return_type")
    return FunctionMetadata(
        identifier=extract_ident(member),
        parameters=get_method_parameters(function_type),
        returns=resolve_type(return_node) if return_node is not None else _void(),
        optional=has_token(member, "?"),
    )


def _is_function_property(member) -> bool:
    type_node = unwrap_type_annotation(member.child_by_field_name("type"))
    return type_node is not None and type_node.type == "function_type"


def collect_interface(node, filepath: str) -> InterfaceRecord:
    record = InterfaceRecord(identifier=extract_ident(node), filepath=filepath)

    extends = first_child_of_type(node, "extends_type_clause")
    if extends is not None:
        record.extends = [resolve_type(t) for t in named_children(extends)]

    body = node.child_by_field_name("body")
    for member in named_children(body) if body is not None else []:
        if member.type == "property_signature":
            if _is_function_property(member):
                record.functions.append(collect_function_signature(member))
            else:
                record.properties.append(collect_property_signature(member))
        elif member.type == "method_signature":
            record.methods.append(get_method_metadata(extract_ident(member), member, default_return=_void()))
        else:
            logger.debug("Skipping interface member %s in %s", member.type, record.identifier)
    return record
