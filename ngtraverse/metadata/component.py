from ngtraverse.metadata.classes import collect_class
from ngtraverse.metadata.decorators import (
    NgClassDecorator,
    decorator_properties,
    read_boolean,
    read_enum,
    read_expression,
    read_properties,
    read_string,
    read_string_array,
)
from ngtraverse.metadata.directive import DIRECTIVE_PROPERTY_RULES, collect_angular_member_fields
from ngtraverse.metadata.models import ComponentRecord, Interpolation, merge_records
from ngtraverse.utils.ast import get_text
from ngtraverse.utils.logger import get_logger

logger = get_logger("component")

CHANGE_DETECTION_STRATEGY = "ChangeDetectionStrategy"
VIEW_ENCAPSULATION = "ViewEncapsulation"
COMMONJS_MODULE = "module"
COMMONJS_MODULE_ID = "id"
COMMONJS = "CommonJS"
SYSTEMJS_MODULE_NAME = "__moduleName"
SYSTEMJS = "SystemJS"


def read_module_id(value):
    if value is None:
        return None
    if read_enum(COMMONJS_MODULE)(value) == COMMONJS_MODULE_ID:
        return COMMONJS
    if value.type == "identifier" and get_text(value) == SYSTEMJS_MODULE_NAME:
        return SYSTEMJS
    logger.warning("Unhandled moduleId initializer %s: %s", value.type, get_text(value))
    return None


def read_interpolation(value):
    items = read_string_array(value)
    if items is None or len(items) != 2:
        return None
    start, end = items
    return Interpolation(start=start, end=end)


COMPONENT_PROPERTY_RULES = {
    **DIRECTIVE_PROPERTY_RULES,
    "animations": ("animations", read_expression),
    "changeDetection": ("change_detection", read_enum(CHANGE_DETECTION_STRATEGY)),
    "encapsulation": ("encapsulation", read_enum(VIEW_ENCAPSULATION)),
    "entryComponents": ("entry_components", read_expression),
    "interpolation": ("interpolation", read_interpolation),
    "moduleId": ("module_id", read_module_id),
    "preserveWhitespaces": ("preserve_whitespaces", read_boolean),
    "styles": ("styles", read_string_array),
    "styleUrls": ("style_urls", read_string_array),
    "template": ("template", read_string),
    "templateUrl": ("template_url", read_string),
    "viewProviders": ("view_providers", read_expression),
}


def collect_component(node, filepath: str) -> ComponentRecord:
    """Class record plus the @Component configuration and member decorators."""
    base = collect_class(node, filepath)
    props = decorator_properties(node, NgClassDecorator.COMPONENT)
    fields = read_properties(props, COMPONENT_PROPERTY_RULES)
    fields.update(collect_angular_member_fields(node))
    return merge_records(ComponentRecord, base, fields)
