"""Declaration Member Distributor and the member-level metadata it feeds."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ngtraverse.metadata.decorators import get_decorator_map
from ngtraverse.metadata.models import (
    ConstructorMetadata,
    MethodMetadata,
    ParameterMetadata,
    PropertyMetadata,
    unknown_type,
)
from ngtraverse.metadata.types import resolve_type
from ngtraverse.utils.ast import extract_ident, get_text, has_token, named_children
from ngtraverse.utils.logger import get_logger

logger = get_logger("members")

FUNCTION_INITIALIZERS = ("arrow_function", "function_expression", "function")
PARAMETER_NODES = ("required_parameter", "optional_parameter")


class ClassMetadataGroup(str, Enum):
    CONSTRUCTOR = "constructor"
    PROPERTY = "property"
    FUNCTION = "function"
    METHOD = "method"
    GETTER = "getter"
    SETTER = "setter"


@dataclass
class MemberDistribution:
    constructor_node: Any = None
    properties: List[Any] = field(default_factory=list)
    functions: List[Any] = field(default_factory=list)
    methods: List[Any] = field(default_factory=list)
    get_accessors: List[Any] = field(default_factory=list)
    set_accessors: List[Any] = field(default_factory=list)
    unknown_distribution: List[str] = field(default_factory=list)


@dataclass
class Member:
    identifier: str
    in_: str
    member: Any
    decorators: Dict[str, Any]


def distribute_members(class_node) -> MemberDistribution:
    dist = MemberDistribution()
    body = class_node.child_by_field_name("body")
    if body is None:
        return dist

    for member in named_children(body):
        if member.type == "decorator":
            continue
        if member.type == "method_definition":
            if extract_ident(member) == "constructor":
                dist.constructor_node = member
            elif has_token(member, "get"):
                dist.get_accessors.append(member)
            elif has_token(member, "set"):
                dist.set_accessors.append(member)
            else:
                dist.methods.append(member)
        elif member.type == "public_field_definition":
            value = member.child_by_field_name("value")
            if value is not None and value.type in FUNCTION_INITIALIZERS:
                dist.functions.append(member)
            else:
                dist.properties.append(member)
        else:
            dist.unknown_distribution.append(member.type)

    if dist.unknown_distribution:
        logger.debug("Undistributed class members: %s", ", ".join(dist.unknown_distribution))
    return dist


def get_method_parameters(node) -> List[ParameterMetadata]:
    single = node.child_by_field_name("parameter")
    if single is not None:
        return [ParameterMetadata(identifier=get_text(single))]

    params_node = node.child_by_field_name("parameters")
    if params_node is None:
        return []
    params = []
    for param in named_children(params_node):
        if param.type not in PARAMETER_NODES:
            continue
        type_node = param.child_by_field_name("type")
        params.append(
            ParameterMetadata(
                identifier=get_text(param.child_by_field_name("pattern")),
                type=resolve_type(type_node) if type_node is not None else None,
                optional=param.type == "optional_parameter",
            )
        )
    return params


def get_method_metadata(identifier: str, node, default_return=None) -> MethodMetadata:
    return_node = node.child_by_field_name("return_type")
    if return_node is not None:
        returns = resolve_type(return_node)
    else:
        returns = default_return if default_return is not None else unknown_type()
    return MethodMetadata(identifier=identifier, parameters=get_method_parameters(node), returns=returns)


def collect_method_metadata(member) -> MethodMetadata:
    return get_method_metadata(extract_ident(member), member)


def collect_function_metadata(member) -> MethodMetadata:
    initializer = member.child_by_field_name("value")
    return get_method_metadata(extract_ident(member), initializer)


def collect_property_metadata(member) -> PropertyMetadata:
    type_node = member.child_by_field_name("type")
    return PropertyMetadata(
        identifier=extract_ident(member),
        type=resolve_type(type_node) if type_node is not None else None,
        optional=has_token(member, "?"),
        static=has_token(member, "static"),
        readonly=has_token(member, "readonly"),
    )


def is_injected_parameter(param) -> bool:
    return any(c.type == "accessibility_modifier" for c in param.children) or has_token(param, "readonly")


def collect_constructor_metadata(node) -> ConstructorMetadata:
    parameters = get_method_parameters(node)
    injected = []
    params_node = node.child_by_field_name("parameters")
    param_nodes = [p for p in named_children(params_node) if p.type in PARAMETER_NODES] if params_node else []
    for param, metadata in zip(param_nodes, parameters):
        if is_injected_parameter(param):
            injected.append(
                PropertyMetadata(
                    identifier=metadata.identifier,
                    type=metadata.type,
                    optional=metadata.optional,
                    readonly=has_token(param, "readonly"),
                )
            )
    return ConstructorMetadata(parameters=parameters, injected_properties=injected)


def members_with_groups(class_node, distribution: Optional[MemberDistribution] = None) -> List[Member]:
    dist = distribution or distribute_members(class_node)
    groups = [
        (ClassMetadataGroup.PROPERTY, dist.properties),
        (ClassMetadataGroup.METHOD, dist.methods),
        (ClassMetadataGroup.FUNCTION, dist.functions),
        (ClassMetadataGroup.GETTER, dist.get_accessors),
        (ClassMetadataGroup.SETTER, dist.set_accessors),
    ]
    members = [
        Member(identifier=extract_ident(node), in_=group.value, member=node, decorators=get_decorator_map(node))
        for group, nodes in groups
        for node in nodes
    ]
    if dist.constructor_node is not None:
        members.append(
            Member(
                identifier="constructor",
                in_=ClassMetadataGroup.CONSTRUCTOR.value,
                member=dist.constructor_node,
                decorators=get_decorator_map(dist.constructor_node),
            )
        )
    return members
