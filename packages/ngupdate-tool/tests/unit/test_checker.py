from typing import Optional

from ngupdate.tool.typescript.nodes import SyntaxNode
from ngupdate.test_utils import create_program

CDK_OVERLAY = "/node_modules/@angular/cdk/overlay/index.d.ts"


def _find(program, path: str, kind: str, text: str) -> SyntaxNode:
    source_file = program.get_source_file(path)
    for node in source_file.root.descendants():
        if node.kind == kind and node.text == text:
            return node
    raise AssertionError(f"No {kind} '{text}' in {path}")


def _object_type(program, path: str, member_text: str) -> Optional[str]:
    member = _find(program, path, "member_expression", member_text)
    return program.get_type_checker().get_type_name_at_location(member.field("object"))


def test_inheritance_graph_follows_import_aliases():
    _, program = create_program(
        {
            "/src/a.ts": """
                import {Overlay as CdkOverlay} from '@angular/cdk/overlay';
                export class Base extends CdkOverlay {}
                export class Child extends Base implements Marker {}
                interface Marker {}
            """,
            CDK_OVERLAY: "export declare class Overlay {}",
        }
    )
    checker = program.get_type_checker()

    assert checker.get_ancestor_names("Child") == ["Base", "Marker", "Overlay"]
    assert checker.is_subtype_of("Child", "Overlay")
    assert not checker.is_subtype_of("Overlay", "Child")
    assert checker.get_ancestor_names("Unknown") == []


def test_types_from_annotations_initializers_and_members():
    _, program = create_program(
        {
            "/src/a.ts": """
                import {SelectionModel} from '@angular/cdk/collections';

                class Holder {
                  model = new SelectionModel();
                  constructor(private injected: SelectionModel, plain: Other) {}

                  run(param: SelectionModel) {
                    const local: SelectionModel = param;
                    const inferred = this.model;
                    param.a;
                    local.b;
                    inferred.c;
                    this.injected.d;
                    this.model.e;
                    (this.model as SelectionModel).f;
                    unknownThing.g;
                  }
                }
            """,
        }
    )

    assert _object_type(program, "/src/a.ts", "param.a") == "SelectionModel"
    assert _object_type(program, "/src/a.ts", "local.b") == "SelectionModel"
    assert _object_type(program, "/src/a.ts", "inferred.c") == "SelectionModel"
    assert _object_type(program, "/src/a.ts", "this.injected.d") == "SelectionModel"
    assert _object_type(program, "/src/a.ts", "this.model.e") == "SelectionModel"
    assert (
        _object_type(program, "/src/a.ts", "(this.model as SelectionModel).f")
        == "SelectionModel"
    )
    assert _object_type(program, "/src/a.ts", "unknownThing.g") is None


def test_method_return_types_and_inherited_members():
    _, program = create_program(
        {
            "/src/a.ts": """
                class Ref { drop(): void {} }
                class Base { protected ref: Ref; }
                class Service extends Base {
                  create(): Ref { return this.ref; }
                  use() {
                    this.create().drop;
                    this.ref.drop;
                  }
                }
            """,
        }
    )

    assert _object_type(program, "/src/a.ts", "this.create().drop") == "Ref"
    assert _object_type(program, "/src/a.ts", "this.ref.drop") == "Ref"


def test_construct_signatures():
    _, program = create_program(
        {
            "/src/a.ts": """
                import {Overlay} from '@angular/cdk/overlay';
                class Plain {}
                class Derived extends Overlay {}
                class Local { constructor(a: string, b?: number, ...rest: any[]) {} }
            """,
            CDK_OVERLAY: """
                export declare class Overlay {
                  constructor(a: Foo, b: Bar);
                  constructor(a: Foo, b: Bar, c: Baz);
                }
            """,
        }
    )
    checker = program.get_type_checker()

    overlay = checker.get_construct_signatures("Overlay")
    assert [s.describe("new Overlay") for s in overlay] == [
        "new Overlay(Foo, Bar)",
        "new Overlay(Foo, Bar, Baz)",
    ]
    assert not any(s.accepts(1) for s in overlay)
    assert overlay[1].accepts(3)

    derived = checker.get_construct_signatures("Derived")
    assert [s.owner for s in derived] == ["Overlay", "Overlay"]

    plain = checker.get_construct_signatures("Plain")
    assert len(plain) == 1 and plain[0].owner is None and plain[0].accepts(0)

    local = checker.get_construct_signatures("Local")[0]
    assert local.min_arguments == 1
    assert local.accepts(5)
    assert not local.accepts(0)

    assert checker.get_construct_signatures("Missing") == []
