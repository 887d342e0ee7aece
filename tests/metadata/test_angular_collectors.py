from ngtraverse.metadata.models import (
    BindingMemberMetadata,
    ComponentRecord,
    ConstructorParameterAttribute,
    ConstructorParameterRef,
    HostBindingMemberMetadata,
    HostListenerMemberMetadata,
    Interpolation,
    ObjectMember,
    PropertyAccessExpression,
    ProvidedInMetadata,
    TypeComposition,
)


def test_component_selector_and_styles(collect):
    model = collect(
        """
        @Component({ selector: 'foo-bar', styles: ['a{}', 'b{}'] })
        export class FooBarComponent {}
        """
    )
    assert model["classes"] == []
    record = model["components"][0]
    assert isinstance(record, ComponentRecord)
    assert record.identifier == "FooBarComponent"
    assert record.selector == "foo-bar"
    assert record.styles == ["a{}", "b{}"]


COMPONENT = """
import { Component, ChangeDetectionStrategy, ViewEncapsulation } from '@angular/core';

@Component({
  selector: 'app-panel',
  moduleId: module.id,
  templateUrl: './panel.component.html',
  styleUrls: ["./panel.component.css"],
  template: `
    <div>{{ title }}</div>
  `,
  changeDetection: ChangeDetectionStrategy.OnPush,
  encapsulation: ViewEncapsulation.None,
  preserveWhitespaces: false,
  interpolation: ['[[', ']]'],
  inputs: ['size'],
  outputs: ['closed'],
  exportAs: 'appPanel',
  host: { '(click)': 'toggle()' },
  providers: [PanelService],
  viewProviders: [{ provide: TOKEN, useValue: 1 }],
  entryComponents: [DialogComponent],
  animations: [fadeIn],
})
export class PanelComponent implements OnInit {
  @Input() title: string;
  @Input('panelSize') size: number;
  @Output() closed = new EventEmitter<void>();
  @HostBinding('class.open') open = false;
  @ViewChild('body', { static: true, read: ElementRef }) body: ElementRef;
  @ViewChildren(ItemComponent) items: QueryList<ItemComponent>;
  @ContentChild(HeaderDirective, { static: false }) header: HeaderDirective;
  @ContentChildren(TabDirective, { descendants: true }) tabs: QueryList<TabDirective>;

  constructor(
    @Attribute('role') role: string,
    private elementRef: ElementRef<HTMLElement>,
    private cdr: ChangeDetectorRef,
    private service: PanelService,
  ) {}

  @HostListener('window:resize', ['$event'])
  onResize(event) {}

  @Input()
  set disabled(value: boolean) {}

  ngOnInit(): void {}
}
"""


def component(collect):
    return collect(COMPONENT, filepath="src/app/panel.component.ts")["components"][0]


def test_component_decorator_properties(collect):
    record = component(collect)

    assert record.selector == "app-panel"
    assert record.module_id == "CommonJS"
    assert record.template_url == "./panel.component.html"
    assert record.style_urls == ["./panel.component.css"]
    assert record.template.strip() == "<div>{{ title }}</div>"
    assert record.change_detection == "OnPush"
    assert record.encapsulation == "None"
    assert record.preserve_whitespaces is False
    assert record.interpolation == Interpolation(start="[[", end="]]")
    assert record.inputs == ["size"]
    assert record.outputs == ["closed"]
    assert record.export_as == "appPanel"
    assert record.providers == TypeComposition(kind="Array", members=[ObjectMember(value=TypeComposition(kind="PanelService"))])
    assert record.entry_components.members[0].value == TypeComposition(kind="DialogComponent")
    assert record.animations.members[0].value == TypeComposition(kind="fadeIn")
    assert record.host.kind == "Object"
    assert record.host.members[0].key == TypeComposition(kind="string", literal="(click)")
    assert record.view_providers.members[0].value.kind == "Object"


def test_component_keeps_class_members(collect):
    record = component(collect)
    assert [p.identifier for p in record.properties] == [
        "title",
        "size",
        "closed",
        "open",
        "body",
        "items",
        "header",
        "tabs",
    ]
    assert [m.identifier for m in record.methods] == ["onResize", "ngOnInit"]
    assert record.heritage.implements_def == [TypeComposition(kind="OnInit")]
    assert [p.identifier for p in record.constructor_def.injected_properties] == ["elementRef", "cdr", "service"]


def test_binding_members(collect):
    record = component(collect)
    assert record.input_members == [
        BindingMemberMetadata(identifier="title", in_="property"),
        BindingMemberMetadata(identifier="size", in_="property", binding_property_name="panelSize"),
        BindingMemberMetadata(identifier="disabled", in_="setter"),
    ]
    assert record.output_members == [BindingMemberMetadata(identifier="closed", in_="property")]
    assert record.host_binding_members == [
        HostBindingMemberMetadata(identifier="open", in_="property", host_property_name="class.open")
    ]
    assert record.host_listener_members == [
        HostListenerMemberMetadata(identifier="onResize", in_="method", event_name="window:resize", args=["$event"])
    ]


def test_query_members(collect):
    record = component(collect)

    (view_child,) = record.view_child_members
    assert view_child.identifier == "body"
    assert view_child.selector == TypeComposition(kind="string", literal="'body'")
    assert view_child.static is True
    assert view_child.read == TypeComposition(kind="ElementRef")

    (view_children,) = record.view_children_members
    assert view_children.selector == TypeComposition(kind="ItemComponent")
    assert view_children.read is None

    (content_child,) = record.content_child_members
    assert content_child.static is False

    (content_children,) = record.content_children_members
    assert content_children.descendants is True
    assert content_children.static is None


def test_constructor_parameter_metadata(collect):
    metadata = component(collect).constructor_parameter_metadata
    assert metadata.attributes == [ConstructorParameterAttribute(identifier="role", attribute_name="role")]
    assert metadata.refs == [
        ConstructorParameterRef(identifier="elementRef", type="ElementRef"),
        ConstructorParameterRef(identifier="cdr", type="ChangeDetectorRef"),
    ]


def test_component_without_config_object(collect):
    record = collect("@Component() class Bare {}")["components"][0]
    assert record.selector is None
    assert record.styles is None
    assert record.constructor_parameter_metadata is None


def test_unrecognized_enum_prefix_is_unset(collect):
    record = collect(
        """
        @Component({ changeDetection: Strategy.OnPush, preserveWhitespaces: flag })
        class Loose {}
        """
    )["components"][0]
    assert record.change_detection is None
    assert record.preserve_whitespaces is None


def test_directive(collect):
    record = collect(
        """
        @Directive({ selector: '[appHighlight]', exportAs: 'highlight', inputs: ['color'] })
        export class HighlightDirective {
          @Input('appHighlight') highlightColor: string;
          constructor(private el: ElementRef) {}
        }
        """
    )["directives"][0]
    assert record.selector == "[appHighlight]"
    assert record.export_as == "highlight"
    assert record.inputs == ["color"]
    assert record.input_members == [
        BindingMemberMetadata(identifier="highlightColor", in_="property", binding_property_name="appHighlight")
    ]
    assert record.constructor_parameter_metadata.refs == [ConstructorParameterRef(identifier="el", type="ElementRef")]


def test_injectable_provided_in(collect):
    model = collect(
        """
        @Injectable({ providedIn: 'root' })
        export class RootService {}

        @Injectable({ providedIn: CoreModule })
        export class ScopedService {}

        @Injectable()
        export class PlainService {}
        """
    )
    root, scoped, plain = model["injectables"]
    assert root.provided_in == ProvidedInMetadata(root=True)
    assert scoped.provided_in == ProvidedInMetadata(root=False, expression=TypeComposition(kind="CoreModule"))
    assert plain.provided_in is None


def test_ng_module(collect):
    record = collect(
        """
        @NgModule({
          id: 'app',
          declarations: [AppComponent],
          imports: [BrowserModule, RouterModule.forRoot(routes)],
          exports: [],
          providers: [],
          bootstrap: [AppComponent],
          schemas: [CUSTOM_ELEMENTS_SCHEMA],
        })
        export class AppModule {}
        """
    )["modules"][0]
    assert record.identifier == "AppModule"
    assert record.id == "app"
    assert record.declarations.members[0].value == TypeComposition(kind="AppComponent")
    call = record.imports.members[1].value
    assert call.expression == PropertyAccessExpression(identifier="RouterModule", name="forRoot")
    assert call.args == [TypeComposition(kind="routes")]
    assert record.exports == TypeComposition(kind="Array", members=[])
    assert record.schemas.members[0].value == TypeComposition(kind="CUSTOM_ELEMENTS_SCHEMA")
    assert record.entry_components is None


def test_pipe(collect):
    model = collect(
        """
        @Pipe({ name: 'truncate', pure: false })
        export class TruncatePipe {
          transform(value: string, limit: number): string { return value; }
        }

        @Pipe({})
        export class EmptyPipe {}
        """
    )
    truncate, empty = model["pipes"]
    assert truncate.name == "truncate"
    assert truncate.pure is False
    assert truncate.methods[0].identifier == "transform"
    assert empty.name is None
    assert empty.pure is None


def test_decorator_priority(collect):
    model = collect(
        """
        @Injectable()
        @Component({ selector: 'both' })
        class Both {}
        """
    )
    assert [r.identifier for r in model["components"]] == ["Both"]
    assert model["injectables"] == []


def test_module_id_loaders(collect):
    model = collect(
        """
        @Component({ moduleId: __moduleName })
        class SystemPanel {}

        @Component({ moduleId: 'fixed' })
        class FixedPanel {}
        """
    )
    system, fixed = model["components"]
    assert system.module_id == "SystemJS"
    assert fixed.module_id is None
