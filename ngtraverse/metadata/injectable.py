from ngtraverse.metadata.classes import collect_class
from ngtraverse.metadata.decorators import NgClassDecorator, decorator_properties, read_string
from ngtraverse.metadata.expressions import resolve_expression
from ngtraverse.metadata.models import InjectableRecord, ProvidedInMetadata, merge_records

ROOT = "root"


def read_provided_in(value):
    if value is None:
        return None
    if value.type in ("string", "template_string") and read_string(value) == ROOT:
        return ProvidedInMetadata(root=True)
    return ProvidedInMetadata(root=False, expression=resolve_expression(value))


def collect_injectable(node, filepath: str) -> InjectableRecord:
    base = collect_class(node, filepath)
    props = decorator_properties(node, NgClassDecorator.INJECTABLE)
    fields = {}
    provided_in = read_provided_in(props.get("providedIn"))
    if provided_in is not None:
        fields["provided_in"] = provided_in
    return merge_records(InjectableRecord, base, fields)
