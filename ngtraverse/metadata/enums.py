from ngtraverse.metadata.base import BasicType
from ngtraverse.metadata.expressions import parse_int
from ngtraverse.metadata.models import EnumMemberMetadata, EnumRecord
from ngtraverse.utils.ast import extract_ident, get_text, named_children, strip_quotes


def _member_name(member) -> str:
    if member.type == "enum_assignment":
        return extract_ident(member)
    return strip_quotes(member)


def collect_enum_member(member, index: int) -> EnumMemberMetadata:
    """Numeric and string initializers are kept, anything else falls back to the index."""
    value, kind = index, BasicType.NUMBER.value
    initializer = member.child_by_field_name("value") if member.type == "enum_assignment" else None
    if initializer is not None:
        if initializer.type == "number":
            parsed = parse_int(get_text(initializer))
            if parsed is not None:
                value = parsed
        elif initializer.type == "string":
            value, kind = strip_quotes(initializer), BasicType.STRING.value
    return EnumMemberMetadata(identifier=_member_name(member), type=kind, value=value)


def collect_enum(node, filepath: str) -> EnumRecord:
    body = node.child_by_field_name("body")
    members = named_children(body) if body is not None else []
    return EnumRecord(
        identifier=extract_ident(node),
        filepath=filepath,
        members=[collect_enum_member(m, i) for i, m in enumerate(members)],
    )
