"""Metadata for the member and parameter decorators of @angular/core.

Directive and component collectors run these over the grouped class members
(see ``members_with_groups``) and over the constructor parameters.
"""

from enum import Enum

from ngtraverse.metadata.decorators import (
    NgComponentClassMemberDecorator,
    NgDirectiveClassMemberDecorator,
    argument_at,
    get_decorator_map,
)
from ngtraverse.metadata.expressions import resolve_expression
from ngtraverse.metadata.members import PARAMETER_NODES, ClassMetadataGroup
from ngtraverse.metadata.models import (
    BindingMemberMetadata,
    ConstructorParameterAttribute,
    ConstructorParameterMetadata,
    ConstructorParameterRef,
    HostBindingMemberMetadata,
    HostListenerMemberMetadata,
    QueryMemberMetadata,
)
from ngtraverse.metadata.types import resolve_type
from ngtraverse.utils.ast import (
    get_text,
    map_to_array_of_strings,
    named_children,
    object_literal_properties_as_map,
    strip_quotes,
)

STRING_NODES = ("string", "template_string")


class ConstructorParameterRefType(str, Enum):
    CHANGE_DETECTOR_REF = "ChangeDetectorRef"
    COMPONENT_REF = "ComponentRef"
    EMBEDDED_VIEW_REF = "EmbeddedViewRef"
    ELEMENT_REF = "ElementRef"
    TEMPLATE_REF = "TemplateRef"
    VIEW_REF = "ViewRef"
    VIEW_CONTAINER_REF = "ViewContainerRef"


REF_TYPES = {t.value for t in ConstructorParameterRefType}


def argument_as_string(decorator, position):
    arg = argument_at(decorator, position)
    if arg is None:
        return None
    return strip_quotes(arg) if arg.type in STRING_NODES else get_text(arg)


def argument_as_array_of_strings(decorator, position):
    arg = argument_at(decorator, position)
    if arg is None or arg.type != "array":
        return []
    return map_to_array_of_strings(arg)


def _decorated(members, name):
    return [(m, m.decorators[name]) for m in members if name in m.decorators]


def _binding_members(members, name):
    return [
        BindingMemberMetadata(identifier=m.identifier, in_=m.in_, binding_property_name=argument_as_string(d, 0))
        for m, d in _decorated(members, name)
    ]


def _query_options(decorator, *flags):
    """Resolve the options object of a query decorator: `read` plus boolean flags."""
    options = argument_at(decorator, 1)
    if options is None or options.type != "object":
        return {}
    props = object_literal_properties_as_map(options)
    resolved = {}
    if "read" in props:
        resolved["read"] = resolve_expression(props["read"])
    for flag in flags:
        value = props.get(flag)
        if value is not None and value.type in ("true", "false"):
            resolved[flag] = value.type == "true"
    return resolved


def _query_members(members, name, *flags):
    collected = []
    for member, decorator in _decorated(members, name):
        selector = argument_at(decorator, 0)
        collected.append(
            QueryMemberMetadata(
                identifier=member.identifier,
                in_=member.in_,
                selector=resolve_expression(selector) if selector is not None else None,
                **_query_options(decorator, *flags),
            )
        )
    return collected


def collect_member_decorator_metadata(members):
    """Return record field values keyed by attribute name."""
    members = [m for m in members if m.in_ != ClassMetadataGroup.CONSTRUCTOR.value]
    return {
        "input_members": _binding_members(members, NgDirectiveClassMemberDecorator.INPUT.value),
        "output_members": _binding_members(members, NgDirectiveClassMemberDecorator.OUTPUT.value),
        "host_binding_members": [
            HostBindingMemberMetadata(identifier=m.identifier, in_=m.in_, host_property_name=argument_as_string(d, 0))
            for m, d in _decorated(members, NgDirectiveClassMemberDecorator.HOST_BINDING.value)
        ],
        "host_listener_members": [
            HostListenerMemberMetadata(
                identifier=m.identifier,
                in_=m.in_,
                event_name=argument_as_string(d, 0),
                args=argument_as_array_of_strings(d, 1),
            )
            for m, d in _decorated(members, NgDirectiveClassMemberDecorator.HOST_LISTENER.value)
        ],
        "content_child_members": _query_members(members, NgDirectiveClassMemberDecorator.CONTENT_CHILD.value, "static"),
        "content_children_members": _query_members(
            members, NgDirectiveClassMemberDecorator.CONTENT_CHILDREN.value, "descendants"
        ),
        "view_child_members": _query_members(members, NgComponentClassMemberDecorator.VIEW_CHILD.value, "static"),
        "view_children_members": _query_members(members, NgComponentClassMemberDecorator.VIEW_CHILDREN.value),
    }


def collect_constructor_parameter_metadata(constructor_node):
    if constructor_node is None:
        return None

    metadata = ConstructorParameterMetadata()
    params_node = constructor_node.child_by_field_name("parameters")
    params = named_children(params_node) if params_node is not None else []
    for param in params:
        if param.type not in PARAMETER_NODES:
            continue
        identifier = get_text(param.child_by_field_name("pattern"))

        attribute = get_decorator_map(param).get(NgDirectiveClassMemberDecorator.ATTRIBUTE.value)
        if attribute is not None:
            metadata.attributes.append(
                ConstructorParameterAttribute(identifier=identifier, attribute_name=argument_as_string(attribute, 0))
            )

        type_node = param.child_by_field_name("type")
        if type_node is not None:
            kind = resolve_type(type_node).kind
            if kind in REF_TYPES:
                metadata.refs.append(ConstructorParameterRef(identifier=identifier, type=kind))
    return metadata
