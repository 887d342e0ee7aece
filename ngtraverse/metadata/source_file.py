"""Source-file metadata: the import and export statements of one file."""

import os
from enum import Enum

from ngtraverse.metadata.models import (
    ExportDeclarationMetadata,
    ImportDeclarationMetadata,
    NamedBinding,
    SourceFileRecord,
)
from ngtraverse.utils.ast import extract_ident, first_child_of_type, get_text, named_children, strip_quotes
from ngtraverse.utils.logger import get_logger

logger = get_logger("source_file")

TYPESCRIPT_FILE_EXTENSION = ".ts"
VARIABLE_DECLARATIONS = ("lexical_declaration", "variable_declaration")


class ModuleResolution(str, Enum):
    RELATIVE_FILEPATH = "relative-filepath"
    PATH_ALIAS = "path-alias"
    NODE_MODULES = "node_modules"


def _named_bindings(clause, specifier_type):
    bindings = []
    for spec in named_children(clause):
        if spec.type != specifier_type:
            continue
        alias = spec.child_by_field_name("alias")
        bindings.append(
            NamedBinding(
                name=strip_quotes(spec.child_by_field_name("name")),
                alias=strip_quotes(alias) if alias is not None else None,
            )
        )
    return bindings


def _import_source(node):
    source = node.child_by_field_name("source")
    if source is None:
        require = first_child_of_type(node, "import_require_clause")
        if require is not None:
            source = require.child_by_field_name("source")
    return source


def resolve_module(module_specifier, filepath, resolver=None):
    """Return (module_resolution, filepath, node_module) for an import specifier."""
    if module_specifier.startswith("."):
        target = os.path.join(os.path.dirname(filepath), module_specifier + TYPESCRIPT_FILE_EXTENSION)
        return ModuleResolution.RELATIVE_FILEPATH.value, os.path.normpath(target), None
    if resolver is not None:
        resolved = resolver.resolve(module_specifier, filepath)
        if resolved is not None:
            return ModuleResolution.PATH_ALIAS.value, resolved, None
    return ModuleResolution.NODE_MODULES.value, None, module_specifier


def collect_import_declaration(node, filepath, resolver=None):
    source = _import_source(node)
    if source is None:
        logger.warning("Import without a module specifier in %s: %s", filepath, get_text(node))
        return None

    module_specifier = strip_quotes(source)
    resolution, target, node_module = resolve_module(module_specifier, filepath, resolver)
    metadata = ImportDeclarationMetadata(
        raw=get_text(node),
        module_specifier=module_specifier,
        module_resolution=resolution,
        filepath=target,
        node_module=node_module,
    )

    clause = first_child_of_type(node, "import_clause")
    for part in named_children(clause) if clause is not None else []:
        if part.type == "identifier":
            metadata.default_import = get_text(part)
        elif part.type == "namespace_import":
            ident = first_child_of_type(part, "identifier")
            metadata.namespace_import = get_text(ident) if ident is not None else None
        elif part.type == "named_imports":
            metadata.named_imports = _named_bindings(part, "import_specifier")
    return metadata


def _declared_name(declaration):
    if declaration.type in VARIABLE_DECLARATIONS:
        names = [
            get_text(d.child_by_field_name("name"))
            for d in named_children(declaration)
            if d.type == "variable_declarator"
        ]
        return ", ".join(names) or None
    return extract_ident(declaration)


def collect_export_declaration(node):
    source = node.child_by_field_name("source")
    metadata = ExportDeclarationMetadata(
        raw=get_text(node),
        module_specifier=strip_quotes(source) if source is not None else None,
    )

    declaration = node.child_by_field_name("declaration")
    if declaration is not None:
        metadata.declaration = _declared_name(declaration)

    clause = first_child_of_type(node, "export_clause")
    if clause is not None:
        metadata.named_exports = _named_bindings(clause, "export_specifier")

    value = node.child_by_field_name("value")
    if value is not None:
        metadata.named_exports = [NamedBinding(name=get_text(value), alias="default")]
    return metadata


def collect_source_file(node, filepath: str, resolver=None) -> SourceFileRecord:
    record = SourceFileRecord(identifier=os.path.basename(filepath), filepath=filepath)
    for statement in named_children(node):
        if statement.type == "import_statement":
            metadata = collect_import_declaration(statement, filepath, resolver)
            if metadata is not None:
                record.import_declarations.append(metadata)
        elif statement.type == "export_statement":
            record.export_declarations.append(collect_export_declaration(statement))
    return record
