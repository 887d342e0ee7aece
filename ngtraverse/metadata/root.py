"""Root Metadata Accumulator: category-keyed, ordered lists of declaration records."""

import json
from enum import Enum

from ngtraverse.metadata.models import (
    ClassRecord,
    ComponentRecord,
    DirectiveRecord,
    EnumRecord,
    InjectableRecord,
    InterfaceRecord,
    ModuleRecord,
    PipeRecord,
    SourceFileRecord,
    TypeAliasRecord,
    from_dict,
    to_dict,
)


class Category(str, Enum):
    CLASSES = "classes"
    COMPONENTS = "components"
    DIRECTIVES = "directives"
    INJECTABLES = "injectables"
    MODULES = "modules"
    PIPES = "pipes"
    ENUMS = "enums"
    INTERFACES = "interfaces"
    TYPE_ALIASES = "typeAliases"
    SOURCE_FILES = "sourceFiles"


RECORD_CLASSES = {
    Category.CLASSES.value: ClassRecord,
    Category.COMPONENTS.value: ComponentRecord,
    Category.DIRECTIVES.value: DirectiveRecord,
    Category.INJECTABLES.value: InjectableRecord,
    Category.MODULES.value: ModuleRecord,
    Category.PIPES.value: PipeRecord,
    Category.ENUMS.value: EnumRecord,
    Category.INTERFACES.value: InterfaceRecord,
    Category.TYPE_ALIASES.value: TypeAliasRecord,
    Category.SOURCE_FILES.value: SourceFileRecord,
}


def _category_key(category) -> str:
    key = getattr(category, "value", category)
    if key not in RECORD_CLASSES:
        raise ValueError(f"Unknown metadata category: {category!r}")
    return key


class RootMetadataModel:
    def __init__(self):
        self.records = {c.value: [] for c in Category}

    def __getitem__(self, category):
        return self.records[_category_key(category)]

    def __eq__(self, other):
        if not isinstance(other, RootMetadataModel):
            return NotImplemented
        return self.records == other.records

    def __repr__(self):
        counts = ", ".join(f"{k}={len(v)}" for k, v in self.records.items() if v)
        return f"RootMetadataModel({counts})"

    def append(self, category, record):
        self.records.setdefault(_category_key(category), []).append(record)

    def extend(self, other: "RootMetadataModel"):
        for key, records in other.records.items():
            self.records.setdefault(key, []).extend(records)
        return self

    def to_dict(self):
        return {key: to_dict(records) for key, records in self.records.items()}

    @classmethod
    def from_dict(cls, data):
        model = cls()
        for key, records in data.items():
            record_cls = RECORD_CLASSES[_category_key(key)]
            model.records[key] = [from_dict(record_cls, r) for r in records]
        return model


def create_empty_model() -> RootMetadataModel:
    return RootMetadataModel()


def append(model: RootMetadataModel, category, record):
    model.append(category, record)


def dumps(model: RootMetadataModel) -> str:
    return json.dumps(model.to_dict(), indent=2, ensure_ascii=False)


def loads(text: str) -> RootMetadataModel:
    return RootMetadataModel.from_dict(json.loads(text))
