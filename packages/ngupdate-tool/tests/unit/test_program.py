from ngupdate.tool.fs import MemoryFileSystem
from ngupdate.tool.typescript.program import Program, resolve_module_name
from ngupdate.test_utils import create_program


def test_relative_specifiers_resolve_to_sources():
    fs = MemoryFileSystem(
        {
            "/src/a.ts": "",
            "/src/lib/index.ts": "",
            "/src/legacy.js.ts": "",
            "/src/types.d.ts": "",
        }
    )

    assert resolve_module_name("./a", "/src/main.ts", fs) == "/src/a.ts"
    assert resolve_module_name("./a.js", "/src/main.ts", fs) == "/src/a.ts"
    assert resolve_module_name("./lib", "/src/main.ts", fs) == "/src/lib/index.ts"
    assert resolve_module_name("./types", "/src/main.ts", fs) == "/src/types.d.ts"
    assert resolve_module_name("./missing", "/src/main.ts", fs) is None


def test_bare_specifiers_resolve_to_declarations_in_node_modules():
    fs = MemoryFileSystem(
        {
            "/node_modules/@angular/cdk/overlay/index.d.ts": "",
            "/node_modules/@angular/cdk/package.json": '{"typings": "./cdk.d.ts"}',
            "/node_modules/@angular/cdk/cdk.d.ts": "",
            "/node_modules/plain.d.ts": "",
        }
    )

    assert (
        resolve_module_name("@angular/cdk/overlay", "/src/app/a.ts", fs)
        == "/node_modules/@angular/cdk/overlay/index.d.ts"
    )
    assert (
        resolve_module_name("@angular/cdk", "/src/app/a.ts", fs)
        == "/node_modules/@angular/cdk/cdk.d.ts"
    )
    assert resolve_module_name("plain", "/src/a.ts", fs) == "/node_modules/plain.d.ts"
    assert resolve_module_name("rxjs", "/src/a.ts", fs) is None


def test_program_follows_imports_and_re_exports():
    # 1. Arrange
    fs = MemoryFileSystem(
        {
            "/src/main.ts": "import {A} from './a';\nexport * from './b';",
            "/src/a.ts": "import {Overlay} from '@angular/cdk/overlay';",
            "/src/b.ts": "export const b = 1;",
            "/src/unrelated.ts": "",
            "/node_modules/@angular/cdk/overlay/index.d.ts": "export declare class Overlay {}",
        }
    )

    # 2. Act
    program = Program(["/src/main.ts"], fs)

    # 3. Assert
    names = [sf.file_name for sf in program.get_source_files()]
    assert names == [
        "/src/main.ts",
        "/src/a.ts",
        "/src/b.ts",
        "/node_modules/@angular/cdk/overlay/index.d.ts",
    ]
    external = program.get_source_file("/node_modules/@angular/cdk/overlay/index.d.ts")
    assert external.is_declaration_file
    assert program.is_source_file_from_external_library(external)
    assert not program.is_source_file_from_external_library(
        program.get_source_file("src/a.ts")
    )
    assert program.get_root_file_names() == ["/src/main.ts"]


def test_program_skips_unreadable_roots():
    fs, program = create_program({"/a.ts": "export class A {}"}, ["/a.ts", "/gone.ts"])

    assert [sf.file_name for sf in program.get_source_files()] == ["/a.ts"]


def test_source_file_offsets_are_character_based():
    _, program = create_program({"/a.ts": "const s = 'äö'; const t = 'x';"})
    source_file = program.get_source_file("/a.ts")

    strings = [n for n in source_file.root.descendants() if n.kind == "string"]

    assert [n.text for n in strings] == ["'äö'", "'x'"]
    assert strings[1].start == source_file.text.index("'x'")
