import json
import os

import pytest

from ngtraverse.extractors.typescript_extractor import TypeScriptMetadataExtractor
from ngtraverse.metadata.root import loads
from ngtraverse.registry.extractor_registry import get_extractor

HERE = os.path.dirname(__file__)
APP_DIR = os.path.abspath(os.path.join(HERE, "..", "fixtures", "app"))


@pytest.fixture
def extractor():
    return TypeScriptMetadataExtractor()


def test_process_source_accumulates(extractor):
    extractor.process_source("export class A {}", "a.ts")
    extractor.process_source("export class B {}", "b.ts")
    model = extractor.extract_model()
    assert [r.identifier for r in model["classes"]] == ["A", "B"]
    assert [r.identifier for r in model["sourceFiles"]] == ["a.ts", "b.ts"]


def test_process_file_records_given_path(extractor):
    path = os.path.join(APP_DIR, "src", "app", "theme.ts")
    model = extractor.process_file(path, filepath="src/app/theme.ts")

    (theme,) = model["enums"]
    assert theme.filepath == "src/app/theme.ts"
    assert [(m.identifier, m.value) for m in theme.members] == [("Light", "light"), ("Dark", "dark")]
    assert model["typeAliases"][0].kind == "Map"


def test_process_file_defaults_to_read_path(extractor):
    path = os.path.join(APP_DIR, "src", "app", "app.module.ts")
    model = extractor.process_file(path)
    assert model["modules"][0].filepath == path.replace("\\", "/")


def test_write_to_file(extractor, tmp_path):
    extractor.process_file(os.path.join(APP_DIR, "src", "app", "core", "api.service.ts"), filepath="api.service.ts")
    out = tmp_path / "out" / "metadata.json"
    extractor.write_to_file(str(out))

    text = out.read_text(encoding="utf-8")
    data = json.loads(text)
    assert data["injectables"][0]["identifier"] == "ApiService"
    assert data["interfaces"][0]["properties"][1] == {"identifier": "error", "optional": True, "type": {"kind": "string"}}
    assert text.startswith('{\n  "classes"')
    assert loads(text) == extractor.extract_model()


def test_tsx_grammar():
    extractor = get_extractor("tsx")
    model = extractor.process_source("export const View = () => <div />;\nexport interface Props { a: string }", "view.tsx")
    assert [r.identifier for r in model["interfaces"]] == ["Props"]


def test_unknown_language():
    with pytest.raises(ValueError):
        get_extractor("rust")
    with pytest.raises(ValueError):
        TypeScriptMetadataExtractor("javascript")
