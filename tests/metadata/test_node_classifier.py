from ngtraverse.metadata.classifier import classify
from ngtraverse.metadata.root import Category, create_empty_model


def test_custom_append_receives_every_record(parse):
    seen = []

    def record_append(model, category, record):
        seen.append((category, record.identifier))

    classify(
        parse(
            """
            export class A {}
            @Component({}) export class B {}
            export enum C { X }
            """
        ),
        "src/file.ts",
        model=None,
        append=record_append,
    )
    assert seen == [
        (Category.SOURCE_FILES, "file.ts"),
        (Category.CLASSES, "A"),
        (Category.COMPONENTS, "B"),
        (Category.ENUMS, "C"),
    ]


def test_nested_declarations_are_found(collect):
    model = collect(
        """
        export namespace Shapes {
          export interface Circle { radius: number; }
          export class Square {}
        }

        function factory() {
          class Local {}
          return Local;
        }
        """
    )
    assert [r.identifier for r in model["interfaces"]] == ["Circle"]
    assert [r.identifier for r in model["classes"]] == ["Square", "Local"]


def test_accepts_a_node(parse):
    tree = parse("interface Only { a: string; }")
    model = classify(tree.root_node, "only.ts", create_empty_model())
    assert [r.identifier for r in model["interfaces"]] == ["Only"]
