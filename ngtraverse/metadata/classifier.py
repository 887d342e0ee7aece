"""Node Classifier: routes declaration nodes of one tree to their collectors."""

from ngtraverse.metadata.classes import collect_class
from ngtraverse.metadata.component import collect_component
from ngtraverse.metadata.decorators import NgClassDecorator, get_decorator_names
from ngtraverse.metadata.directive import collect_directive
from ngtraverse.metadata.enums import collect_enum
from ngtraverse.metadata.injectable import collect_injectable
from ngtraverse.metadata.interfaces import collect_interface
from ngtraverse.metadata.ng_module import collect_ng_module
from ngtraverse.metadata.pipe import collect_pipe
from ngtraverse.metadata.root import Category, append as append_record
from ngtraverse.metadata.source_file import collect_source_file
from ngtraverse.metadata.type_alias import collect_type_alias

# Priority order: the first decorator present on a class selects its collector.
CLASS_DECORATOR_COLLECTORS = [
    (NgClassDecorator.COMPONENT.value, Category.COMPONENTS, collect_component),
    (NgClassDecorator.DIRECTIVE.value, Category.DIRECTIVES, collect_directive),
    (NgClassDecorator.INJECTABLE.value, Category.INJECTABLES, collect_injectable),
    (NgClassDecorator.NG_MODULE.value, Category.MODULES, collect_ng_module),
    (NgClassDecorator.PIPE.value, Category.PIPES, collect_pipe),
]


def classify_class(node, filepath, resolver=None):
    names = get_decorator_names(node)
    for name, category, collector in CLASS_DECORATOR_COLLECTORS:
        if name in names:
            return category, collector(node, filepath)
    return Category.CLASSES, collect_class(node, filepath)


def _route(category, collector):
    return lambda node, filepath, resolver=None: (category, collector(node, filepath))


NODE_HANDLERS = {
    "class_declaration": classify_class,
    "abstract_class_declaration": classify_class,
    "enum_declaration": _route(Category.ENUMS, collect_enum),
    "interface_declaration": _route(Category.INTERFACES, collect_interface),
    "type_alias_declaration": _route(Category.TYPE_ALIASES, collect_type_alias),
    "program": lambda node, filepath, resolver=None: (
        Category.SOURCE_FILES,
        collect_source_file(node, filepath, resolver=resolver),
    ),
}


def classify(tree, filepath, model, append=append_record, resolver=None):
    """Visit every node of `tree` in pre-order and append one record per declaration.

    `tree` may be a Tree-sitter ``Tree`` or any node. Each record goes through
    ``append(model, category, record)``; the traversal always continues into
    children, so nested declarations are found too.
    """
    root = getattr(tree, "root_node", tree)
    stack = [root]
    while stack:
        node = stack.pop()
        handler = NODE_HANDLERS.get(node.type)
        if handler is not None:
            category, record = handler(node, filepath, resolver=resolver)
            append(model, category, record)
        stack.extend(reversed(node.named_children))
    return model
