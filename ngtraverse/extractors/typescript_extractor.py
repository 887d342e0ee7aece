import os

import tree_sitter_typescript
from tree_sitter import Language, Parser

from ngtraverse.base.metadata_extractor import MetadataExtractor
from ngtraverse.metadata.classifier import classify
from ngtraverse.metadata.root import create_empty_model, dumps

LANGUAGES = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


class TypeScriptMetadataExtractor(MetadataExtractor):
    """Parses TypeScript files and accumulates their declaration metadata into one model."""

    def __init__(self, language: str = "typescript", resolver=None):
        factory = LANGUAGES.get(language)
        if factory is None:
            raise ValueError(f"No TypeScript grammar for language: {language}")
        self.language = Language(factory())
        self.parser = Parser(self.language)
        self.resolver = resolver
        self.model = create_empty_model()

    def parse_source(self, source):
        if isinstance(source, str):
            source = source.encode("utf-8")
        return self.parser.parse(source)

    def parse_file(self, file_path: str):
        with open(file_path, "r", encoding="utf-8") as f:
            code = f.read()
        return code, self.parse_source(code)

    def process_source(self, source, filepath: str):
        tree = self.parse_source(source)
        classify(tree, filepath, self.model, resolver=self.resolver)
        return self.model

    def process_file(self, file_path: str, filepath: str = None):
        # `filepath` is the path recorded in the records, defaulting to the path read
        _, tree = self.parse_file(file_path)
        classify(tree, filepath or file_path.replace("\\", "/"), self.model, resolver=self.resolver)
        return self.model

    def extract_model(self):
        return self.model

    def write_to_file(self, output_path: str):
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(dumps(self.model))
