from ngtraverse.metadata.models import TypeAliasRecord
from ngtraverse.metadata.types import resolve_type
from ngtraverse.utils.ast import extract_ident


def collect_type_alias(node, filepath: str) -> TypeAliasRecord:
    composition = resolve_type(node.child_by_field_name("value"))
    return TypeAliasRecord(
        identifier=extract_ident(node),
        filepath=filepath,
        kind=composition.kind,
        args=composition.args,
        literal=composition.literal,
    )
