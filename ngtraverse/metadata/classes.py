from typing import Optional

from ngtraverse.metadata.members import (
    collect_constructor_metadata,
    collect_function_metadata,
    collect_method_metadata,
    collect_property_metadata,
    distribute_members,
)
from ngtraverse.metadata.models import ClassRecord, HeritageMetadata, TypeComposition
from ngtraverse.metadata.types import resolve_type, resolve_type_arguments
from ngtraverse.utils.ast import extract_ident, first_child_of_type, get_text, named_children


def _extends_clause(clause) -> Optional[TypeComposition]:
    # extends_clause holds `value` expressions each optionally followed by type_arguments
    extends_def = None
    for child in named_children(clause):
        if child.type == "type_arguments":
            if extends_def is not None:
                extends_def.args = resolve_type_arguments(child)
        elif extends_def is None and child.type == "instantiation_expression":
            base, *_ = named_children(child)
            extends_def = TypeComposition(
                kind=get_text(base).strip(),
                args=resolve_type_arguments(child.child_by_field_name("type_arguments")),
            )
        elif extends_def is None:
            extends_def = TypeComposition(kind=get_text(child).strip())
    return extends_def


def collect_heritage(node) -> Optional[HeritageMetadata]:
    heritage = first_child_of_type(node, "class_heritage")
    if heritage is None:
        return None

    metadata = HeritageMetadata()
    for clause in named_children(heritage):
        if clause.type == "extends_clause":
            metadata.extends_def = _extends_clause(clause)
        elif clause.type == "implements_clause":
            metadata.implements_def = [resolve_type(t) for t in named_children(clause)]
    return metadata


def collect_class(node, filepath: str) -> ClassRecord:
    """Project every member bucket of a class declaration onto a ClassRecord."""
    dist = distribute_members(node)
    return ClassRecord(
        identifier=extract_ident(node),
        filepath=filepath,
        heritage=collect_heritage(node),
        constructor_def=(
            collect_constructor_metadata(dist.constructor_node) if dist.constructor_node is not None else None
        ),
        properties=[collect_property_metadata(m) for m in dist.properties],
        functions=[collect_function_metadata(m) for m in dist.functions],
        methods=[collect_method_metadata(m) for m in dist.methods],
        getters=[collect_method_metadata(m) for m in dist.get_accessors],
        setters=[collect_method_metadata(m) for m in dist.set_accessors],
    )
