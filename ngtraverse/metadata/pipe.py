from ngtraverse.metadata.classes import collect_class
from ngtraverse.metadata.decorators import (
    NgClassDecorator,
    decorator_properties,
    read_boolean,
    read_properties,
    read_string,
)
from ngtraverse.metadata.models import PipeRecord, merge_records

PIPE_PROPERTY_RULES = {
    "name": ("name", read_string),
    "pure": ("pure", read_boolean),
}


def collect_pipe(node, filepath: str) -> PipeRecord:
    base = collect_class(node, filepath)
    props = decorator_properties(node, NgClassDecorator.PIPE)
    return merge_records(PipeRecord, base, read_properties(props, PIPE_PROPERTY_RULES))
