import textwrap

import pytest
import tree_sitter_typescript
from tree_sitter import Language, Parser

from ngtraverse.metadata.classifier import classify
from ngtraverse.metadata.root import create_empty_model

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())


@pytest.fixture(scope="session")
def parser():
    return Parser(TS_LANGUAGE)


@pytest.fixture
def parse(parser):
    def _parse(source):
        return parser.parse(textwrap.dedent(source).encode("utf-8"))

    return _parse


@pytest.fixture
def collect(parse):
    """Parse TypeScript source and run the classifier over it."""

    def _collect(source, filepath="src/app/example.ts", **kwargs):
        model = create_empty_model()
        classify(parse(source), filepath, model, **kwargs)
        return model

    return _collect


@pytest.fixture
def find_node(parse):
    """First node of `node_type` in pre-order."""

    def _find(source, node_type):
        stack = [parse(source).root_node]
        while stack:
            node = stack.pop()
            if node.type == node_type:
                return node
            stack.extend(reversed(node.named_children))
        raise AssertionError(f"no {node_type} node in source")

    return _find
