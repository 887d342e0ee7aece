import json

import pytest

from ngtraverse.metadata.models import ClassRecord
from ngtraverse.metadata.root import Category, append, create_empty_model, dumps, loads

MIXED = """
import { Component, Injectable, NgModule, Pipe, Directive } from '@angular/core';

export enum Size { Small, Large = 'large' }
export interface Point { x: number; y?: number; move: (dx: number) => void; }
export type Pair = Map<string, Set<number>>;
export type Id = string | number;

export class First {}
export class Second extends First {
  get label(): string { return ''; }
}

@Component({ selector: 'app-root', template: '<p>hi</p>', styles: ['p {}'] })
export class AppComponent {
  @Input() name = 'x';
  @ViewChild('ref', { static: true }) ref;
  constructor(private cdr: ChangeDetectorRef) {}
}

@Directive({ selector: '[appDir]', host: { '[class.on]': 'on' } })
export class AppDirective {}

@Injectable({ providedIn: 'root' })
export class AppService {}

@Pipe({ name: 'upper', pure: true })
export class UpperPipe {}

@NgModule({ declarations: [AppComponent, AppDirective, UpperPipe], imports: [RouterModule.forRoot([])] })
export class AppModule {}

export class Third {}
"""


def test_empty_model_seeds_every_category():
    model = create_empty_model()
    assert list(model.records) == [c.value for c in Category]
    assert all(records == [] for records in model.records.values())
    assert json.loads(dumps(model)) == {c.value: [] for c in Category}


def test_append_and_unknown_category():
    model = create_empty_model()
    record = ClassRecord(identifier="A", filepath="a.ts")
    append(model, Category.CLASSES, record)
    append(model, "classes", record)
    assert model["classes"] == [record, record]
    with pytest.raises(ValueError):
        append(model, "widgets", record)


def test_counts_and_source_order(collect):
    model = collect(MIXED)
    assert [r.identifier for r in model["classes"]] == ["First", "Second", "Third"]
    assert [r.identifier for r in model["typeAliases"]] == ["Pair", "Id"]
    assert len(model["components"]) == 1
    assert len(model["directives"]) == 1
    assert len(model["injectables"]) == 1
    assert len(model["pipes"]) == 1
    assert len(model["modules"]) == 1
    assert len(model["enums"]) == 1
    assert len(model["interfaces"]) == 1
    assert len(model["sourceFiles"]) == 1


def test_runs_are_deterministic(collect):
    first, second = collect(MIXED), collect(MIXED)
    assert first == second
    assert dumps(first) == dumps(second)


def test_round_trip(collect):
    model = collect(MIXED)
    assert loads(dumps(model)) == model


def test_serialized_field_names(collect):
    data = json.loads(dumps(collect(MIXED)))
    component = data["components"][0]
    assert component["selector"] == "app-root"
    assert component["constructorDef"]["injectedProperties"][0]["identifier"] == "cdr"
    assert component["constructorParameterMetadata"]["refs"] == [{"identifier": "cdr", "type": "ChangeDetectorRef"}]
    assert component["inputMembers"] == [{"identifier": "name", "in": "property"}]
    assert component["viewChildMembers"][0]["static"] is True
    assert "templateUrl" not in component

    call = data["modules"][0]["imports"]["members"][0]["value"]
    assert call["expressionType"] == "call"
    assert call["expression"] == {"identifier": "RouterModule", "name": "forRoot", "expressionType": "property-access"}

    assert data["typeAliases"][0]["args"][1] == {"kind": "Set", "args": [{"kind": "number"}]}
    assert data["injectables"][0]["providedIn"] == {"root": True}


def test_extend_keeps_file_order(collect):
    merged = create_empty_model()
    merged.extend(collect("export class A {}", filepath="a.ts"))
    merged.extend(collect("export class B {}", filepath="b.ts"))
    assert [(r.identifier, r.filepath) for r in merged["classes"]] == [("A", "a.ts"), ("B", "b.ts")]
    assert [r.identifier for r in merged["sourceFiles"]] == ["a.ts", "b.ts"]
