from ngtraverse.metadata.angular_core import (
    collect_constructor_parameter_metadata,
    collect_member_decorator_metadata,
)
from ngtraverse.metadata.classes import collect_class
from ngtraverse.metadata.decorators import (
    NgClassDecorator,
    decorator_properties,
    read_expression,
    read_properties,
    read_string,
    read_string_array,
)
from ngtraverse.metadata.members import distribute_members, members_with_groups
from ngtraverse.metadata.models import DirectiveRecord, merge_records

DIRECTIVE_PROPERTY_RULES = {
    "selector": ("selector", read_string),
    "host": ("host", read_expression),
    "inputs": ("inputs", read_string_array),
    "outputs": ("outputs", read_string_array),
    "providers": ("providers", read_expression),
    "queries": ("queries", read_expression),
    "exportAs": ("export_as", read_string),
}


def collect_angular_member_fields(node):
    """Member and constructor-parameter decorator metadata shared by directives and components."""
    dist = distribute_members(node)
    fields = collect_member_decorator_metadata(members_with_groups(node, dist))
    fields["constructor_parameter_metadata"] = collect_constructor_parameter_metadata(dist.constructor_node)
    return fields


def collect_directive(node, filepath: str) -> DirectiveRecord:
    base = collect_class(node, filepath)
    props = decorator_properties(node, NgClassDecorator.DIRECTIVE)
    fields = read_properties(props, DIRECTIVE_PROPERTY_RULES)
    fields.update(collect_angular_member_fields(node))
    return merge_records(DirectiveRecord, base, fields)
