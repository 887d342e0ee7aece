"""Declaration records and their JSON representation.

Attribute names are snake_case; the serialized form uses the camelCase field
names downstream tooling reads (``styleUrls``, ``constructorDef``, ...).
Fields holding ``None`` are left out of the serialized form.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, List, Optional

from ngtraverse.metadata.base import BasicType, ExpressionType


def _decode(fn):
    return {"decode": fn}


def _list_of(fn):
    return lambda values: [fn(v) for v in values]


def _record(cls_name):
    return lambda data: from_dict(globals()[cls_name], data)


def _expression(data):
    return expression_from_dict(data)


# --- Type and expression metadata ---------------------------------------------------


@dataclass
class TypeComposition:
    kind: str
    args: Optional[List["TypeComposition"]] = field(default=None, metadata=_decode(_list_of(_record("TypeComposition"))))
    literal: Any = None
    members: Optional[List["ObjectMember"]] = field(default=None, metadata=_decode(_list_of(_record("ObjectMember"))))


@dataclass
class ObjectMember:
    value: Any = field(default=None, metadata=_decode(_expression))
    key: Optional[TypeComposition] = field(default=None, metadata=_decode(_record("TypeComposition")))


@dataclass
class CallExpression:
    expression: Any = field(default=None, metadata=_decode(_expression))
    args: List[Any] = field(default_factory=list, metadata=_decode(_list_of(_expression)))
    expression_type: str = ExpressionType.CALL.value


@dataclass
class NewExpression:
    type: TypeComposition = field(default=None, metadata=_decode(_record("TypeComposition")))
    args: List[Any] = field(default_factory=list, metadata=_decode(_list_of(_expression)))
    expression_type: str = ExpressionType.NEW.value


@dataclass
class PropertyAccessExpression:
    identifier: str = ""
    name: str = ""
    expression_type: str = ExpressionType.PROPERTY_ACCESS.value


_EXPRESSION_CLASSES = {
    ExpressionType.CALL.value: CallExpression,
    ExpressionType.NEW.value: NewExpression,
    ExpressionType.PROPERTY_ACCESS.value: PropertyAccessExpression,
}


def unknown_type(literal=None):
    return TypeComposition(kind=BasicType.UNKNOWN.value, literal=literal)


# --- Members ------------------------------------------------------------------------


@dataclass
class ParameterMetadata:
    identifier: str
    type: Optional[TypeComposition] = field(default=None, metadata=_decode(_record("TypeComposition")))
    optional: bool = False


@dataclass
class PropertyMetadata:
    identifier: str
    type: Optional[TypeComposition] = field(default=None, metadata=_decode(_record("TypeComposition")))
    optional: bool = False
    static: bool = False
    readonly: bool = False


@dataclass
class MethodMetadata:
    identifier: str
    parameters: List[ParameterMetadata] = field(default_factory=list, metadata=_decode(_list_of(_record("ParameterMetadata"))))
    returns: TypeComposition = field(default_factory=unknown_type, metadata=_decode(_record("TypeComposition")))


@dataclass
class FunctionMetadata(MethodMetadata):
    optional: bool = False


@dataclass
class ConstructorMetadata:
    parameters: List[ParameterMetadata] = field(default_factory=list, metadata=_decode(_list_of(_record("ParameterMetadata"))))
    injected_properties: List[PropertyMetadata] = field(default_factory=list, metadata=_decode(_list_of(_record("PropertyMetadata"))))


@dataclass
class HeritageMetadata:
    extends_def: Optional[TypeComposition] = field(default=None, metadata=_decode(_record("TypeComposition")))
    implements_def: List[TypeComposition] = field(default_factory=list, metadata=_decode(_list_of(_record("TypeComposition"))))


@dataclass
class BindingMemberMetadata:
    identifier: str
    in_: str
    binding_property_name: Optional[str] = None


@dataclass
class HostBindingMemberMetadata:
    identifier: str
    in_: str
    host_property_name: Optional[str] = None


@dataclass
class HostListenerMemberMetadata:
    identifier: str
    in_: str
    event_name: Optional[str] = None
    args: List[str] = field(default_factory=list)


@dataclass
class QueryMemberMetadata:
    """ContentChild(ren) / ViewChild(ren) member; unused options stay None."""

    identifier: str
    in_: str
    selector: Any = field(default=None, metadata=_decode(_expression))
    read: Any = field(default=None, metadata=_decode(_expression))
    static: Optional[bool] = None
    descendants: Optional[bool] = None


@dataclass
class ConstructorParameterAttribute:
    identifier: str
    attribute_name: Optional[str] = None


@dataclass
class ConstructorParameterRef:
    identifier: str
    type: str


@dataclass
class ConstructorParameterMetadata:
    attributes: List[ConstructorParameterAttribute] = field(
        default_factory=list, metadata=_decode(_list_of(_record("ConstructorParameterAttribute")))
    )
    refs: List[ConstructorParameterRef] = field(default_factory=list, metadata=_decode(_list_of(_record("ConstructorParameterRef"))))


@dataclass
class Interpolation:
    start: str
    end: str


@dataclass
class ProvidedInMetadata:
    root: bool = False
    expression: Any = field(default=None, metadata=_decode(_expression))


@dataclass
class EnumMemberMetadata:
    identifier: str
    type: str
    value: Any


@dataclass
class InterfacePropertyMetadata:
    identifier: str
    optional: bool = False
    type: Optional[TypeComposition] = field(default=None, metadata=_decode(_record("TypeComposition")))


@dataclass
class NamedBinding:
    name: str
    alias: Optional[str] = None


@dataclass
class ImportDeclarationMetadata:
    raw: str
    module_specifier: str
    module_resolution: str
    filepath: Optional[str] = None
    node_module: Optional[str] = None
    default_import: Optional[str] = None
    namespace_import: Optional[str] = None
    named_imports: List[NamedBinding] = field(default_factory=list, metadata=_decode(_list_of(_record("NamedBinding"))))


@dataclass
class ExportDeclarationMetadata:
    raw: str
    module_specifier: Optional[str] = None
    named_exports: List[NamedBinding] = field(default_factory=list, metadata=_decode(_list_of(_record("NamedBinding"))))
    declaration: Optional[str] = None


# --- Declaration records ------------------------------------------------------------


@dataclass
class DeclarationRecord:
    identifier: str
    filepath: str


@dataclass
class ClassRecord(DeclarationRecord):
    heritage: Optional[HeritageMetadata] = field(default=None, metadata=_decode(_record("HeritageMetadata")))
    constructor_def: Optional[ConstructorMetadata] = field(default=None, metadata=_decode(_record("ConstructorMetadata")))
    properties: List[PropertyMetadata] = field(default_factory=list, metadata=_decode(_list_of(_record("PropertyMetadata"))))
    functions: List[MethodMetadata] = field(default_factory=list, metadata=_decode(_list_of(_record("MethodMetadata"))))
    methods: List[MethodMetadata] = field(default_factory=list, metadata=_decode(_list_of(_record("MethodMetadata"))))
    getters: List[MethodMetadata] = field(default_factory=list, metadata=_decode(_list_of(_record("MethodMetadata"))))
    setters: List[MethodMetadata] = field(default_factory=list, metadata=_decode(_list_of(_record("MethodMetadata"))))


def _members_field(cls_name):
    return field(default_factory=list, metadata=_decode(_list_of(_record(cls_name))))


@dataclass
class DirectiveRecord(ClassRecord):
    selector: Optional[str] = None
    host: Any = field(default=None, metadata=_decode(_expression))
    inputs: Optional[List[str]] = None
    outputs: Optional[List[str]] = None
    providers: Any = field(default=None, metadata=_decode(_expression))
    queries: Any = field(default=None, metadata=_decode(_expression))
    export_as: Optional[str] = None
    constructor_parameter_metadata: Optional[ConstructorParameterMetadata] = field(
        default=None, metadata=_decode(_record("ConstructorParameterMetadata"))
    )
    input_members: List[BindingMemberMetadata] = _members_field("BindingMemberMetadata")
    output_members: List[BindingMemberMetadata] = _members_field("BindingMemberMetadata")
    host_binding_members: List[HostBindingMemberMetadata] = _members_field("HostBindingMemberMetadata")
    host_listener_members: List[HostListenerMemberMetadata] = _members_field("HostListenerMemberMetadata")
    content_child_members: List[QueryMemberMetadata] = _members_field("QueryMemberMetadata")
    content_children_members: List[QueryMemberMetadata] = _members_field("QueryMemberMetadata")
    view_child_members: List[QueryMemberMetadata] = _members_field("QueryMemberMetadata")
    view_children_members: List[QueryMemberMetadata] = _members_field("QueryMemberMetadata")


@dataclass
class ComponentRecord(DirectiveRecord):
    animations: Any = field(default=None, metadata=_decode(_expression))
    change_detection: Optional[str] = None
    encapsulation: Optional[str] = None
    entry_components: Any = field(default=None, metadata=_decode(_expression))
    interpolation: Optional[Interpolation] = field(default=None, metadata=_decode(_record("Interpolation")))
    module_id: Optional[str] = None
    preserve_whitespaces: Optional[bool] = None
    styles: Optional[List[str]] = None
    style_urls: Optional[List[str]] = None
    template: Optional[str] = None
    template_url: Optional[str] = None
    view_providers: Any = field(default=None, metadata=_decode(_expression))


@dataclass
class InjectableRecord(ClassRecord):
    provided_in: Optional[ProvidedInMetadata] = field(default=None, metadata=_decode(_record("ProvidedInMetadata")))


@dataclass
class ModuleRecord(ClassRecord):
    id: Optional[str] = None
    bootstrap: Any = field(default=None, metadata=_decode(_expression))
    declarations: Any = field(default=None, metadata=_decode(_expression))
    entry_components: Any = field(default=None, metadata=_decode(_expression))
    exports: Any = field(default=None, metadata=_decode(_expression))
    imports: Any = field(default=None, metadata=_decode(_expression))
    providers: Any = field(default=None, metadata=_decode(_expression))
    schemas: Any = field(default=None, metadata=_decode(_expression))


@dataclass
class PipeRecord(ClassRecord):
    name: Optional[str] = None
    pure: Optional[bool] = None


@dataclass
class EnumRecord(DeclarationRecord):
    members: List[EnumMemberMetadata] = field(default_factory=list, metadata=_decode(_list_of(_record("EnumMemberMetadata"))))


@dataclass
class InterfaceRecord(DeclarationRecord):
    extends: List[TypeComposition] = field(default_factory=list, metadata=_decode(_list_of(_record("TypeComposition"))))
    properties: List[InterfacePropertyMetadata] = field(
        default_factory=list, metadata=_decode(_list_of(_record("InterfacePropertyMetadata")))
    )
    methods: List[MethodMetadata] = field(default_factory=list, metadata=_decode(_list_of(_record("MethodMetadata"))))
    functions: List[FunctionMetadata] = field(default_factory=list, metadata=_decode(_list_of(_record("FunctionMetadata"))))


@dataclass
class TypeAliasRecord(DeclarationRecord):
    kind: str = BasicType.UNKNOWN.value
    args: Optional[List[TypeComposition]] = field(default=None, metadata=_decode(_list_of(_record("TypeComposition"))))
    literal: Any = None


@dataclass
class SourceFileRecord(DeclarationRecord):
    import_declarations: List[ImportDeclarationMetadata] = field(
        default_factory=list, metadata=_decode(_list_of(_record("ImportDeclarationMetadata")))
    )
    export_declarations: List[ExportDeclarationMetadata] = field(
        default_factory=list, metadata=_decode(_list_of(_record("ExportDeclarationMetadata")))
    )


def merge_records(record_cls, base, decorator_fields):
    """Build a decorated record: decorator fields are defaults, base fields win."""
    merged = dict(decorator_fields)
    merged.update({f.name: getattr(base, f.name) for f in fields(base)})
    return record_cls(**merged)


# --- Serialization ------------------------------------------------------------------


def _camel(name: str) -> str:
    head, *rest = name.rstrip("_").split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_dict(value):
    if is_dataclass(value) and not isinstance(value, type):
        out = {}
        for f in fields(value):
            item = getattr(value, f.name)
            if item is None:
                continue
            out[_camel(f.name)] = to_dict(item)
        return out
    if isinstance(value, (list, tuple)):
        return [to_dict(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    return value


def from_dict(cls, data):
    kwargs = {}
    for f in fields(cls):
        key = _camel(f.name)
        if key not in data:
            continue
        raw = data[key]
        decode = f.metadata.get("decode")
        kwargs[f.name] = decode(raw) if decode is not None and raw is not None else raw
    return cls(**kwargs)


def expression_from_dict(data):
    if data is None:
        return None
    expression_cls = _EXPRESSION_CLASSES.get(data.get("expressionType"))
    if expression_cls is not None:
        return from_dict(expression_cls, data)
    return from_dict(TypeComposition, data)
