from ngtraverse.metadata.classes import collect_class
from ngtraverse.metadata.decorators import (
    NgClassDecorator,
    decorator_properties,
    read_expression,
    read_properties,
    read_string,
)
from ngtraverse.metadata.models import ModuleRecord, merge_records

MODULE_PROPERTY_RULES = {
    "id": ("id", read_string),
    "bootstrap": ("bootstrap", read_expression),
    "declarations": ("declarations", read_expression),
    "entryComponents": ("entry_components", read_expression),
    "exports": ("exports", read_expression),
    "imports": ("imports", read_expression),
    "providers": ("providers", read_expression),
    "schemas": ("schemas", read_expression),
}


def collect_ng_module(node, filepath: str) -> ModuleRecord:
    base = collect_class(node, filepath)
    props = decorator_properties(node, NgClassDecorator.NG_MODULE)
    return merge_records(ModuleRecord, base, read_properties(props, MODULE_PROPERTY_RULES))
