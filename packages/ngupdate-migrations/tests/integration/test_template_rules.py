from ngupdate.migrations.rules import (
    AttributeSelectorsMigration,
    CssSelectorsMigration,
    ElementSelectorsMigration,
    InputNamesMigration,
    MiscTemplateMigration,
    OutputNamesMigration,
)
from ngupdate.tool.target_version import TargetVersion
from ngupdate.test_utils import RecordingLogger, run_migrations


def _component(template: str = "", extra: str = "") -> str:
    return (
        "import {Component} from '@angular/core';\n"
        "\n"
        "@Component({\n"
        "  selector: 'app',\n"
        f"{template}"
        "  styleUrls: ['./app.css'],\n"
        "})\n"
        "export class App {\n"
        f"{extra}"
        "}\n"
    )


def test_attribute_selectors_in_calls_templates_and_stylesheets():
    # 1. Arrange
    source = _component(
        template="  template: '<div cdkPortalHost></div>',\n",
        extra="  find() { return document.querySelector('[cdkPortalHost]'); }\n"
        "  name = 'cdkPortalHost';\n",
    )
    data = {
        "attribute_selectors": {
            6: [{"changes": [{"replace": "cdkPortalHost", "replace_with": "cdkPortalOutlet"}]}]
        }
    }

    # 2. Act
    fs, result = run_migrations(
        {"/src/app.ts": source, "/src/app.css": "[cdkPortalHost] {}\n.cdkPortalHost {}\n"},
        [AttributeSelectorsMigration],
        data,
        target=TargetVersion.V6,
    )

    # 3. Assert
    assert not result.has_failures
    assert fs.read("/src/app.ts") == _component(
        template="  template: '<div cdkPortalOutlet></div>',\n",
        extra="  find() { return document.querySelector('[cdkPortalOutlet]'); }\n"
        "  name = 'cdkPortalHost';\n",
    )
    assert fs.read("/src/app.css") == "[cdkPortalOutlet] {}\n.cdkPortalHost {}\n"


def test_attribute_selectors_disabled_for_other_versions():
    source = _component(template="  template: '<div cdkPortalHost></div>',\n")
    data = {
        "attribute_selectors": {
            6: [{"changes": [{"replace": "cdkPortalHost", "replace_with": "cdkPortalOutlet"}]}]
        }
    }

    fs, _ = run_migrations(
        {"/src/app.ts": source, "/src/app.css": ""},
        [AttributeSelectorsMigration],
        data,
        target=TargetVersion.V9,
    )

    assert fs.read("/src/app.ts") == source


def test_css_selectors_respect_replace_in():
    # 1. Arrange
    source = _component(
        template="  template: '<div class=\"mat-old only-css\"></div>',\n",
        extra="  find() { return document.querySelector('.mat-old.only-css'); }\n",
    )
    data = {
        "css_selectors": {
            9: [
                {
                    "changes": [
                        {"replace": "mat-old", "replace_with": "mat-new"},
                        {
                            "replace": "only-css",
                            "replace_with": "css-ok",
                            "replace_in": {"stylesheet": True},
                        },
                    ]
                }
            ]
        }
    }

    # 2. Act
    fs, _ = run_migrations(
        {"/src/app.ts": source, "/src/app.css": ".mat-old .only-css {}"},
        [CssSelectorsMigration],
        data,
    )

    # 3. Assert
    assert fs.read("/src/app.ts") == _component(
        template="  template: '<div class=\"mat-new only-css\"></div>',\n",
        extra="  find() { return document.querySelector('.mat-new.only-css'); }\n",
    )
    assert fs.read("/src/app.css") == ".mat-new .css-ok {}"


def test_element_selectors_everywhere():
    source = _component(
        template="  template: '<cdk-old></cdk-old>',\n",
        extra="  find() { return document.querySelector('cdk-old'); }\n",
    )
    data = {
        "element_selectors": {
            9: [{"changes": [{"replace": "cdk-old", "replace_with": "cdk-new"}]}]
        }
    }

    fs, _ = run_migrations(
        {"/src/app.ts": source, "/src/app.css": "cdk-old { display: block; }"},
        [ElementSelectorsMigration],
        data,
    )

    assert fs.read("/src/app.ts") == _component(
        template="  template: '<cdk-new></cdk-new>',\n",
        extra="  find() { return document.querySelector('cdk-new'); }\n",
    )
    assert fs.read("/src/app.css") == "cdk-new { display: block; }"


def test_input_names_in_external_template():
    # 1. Arrange
    source = _component(template="  templateUrl: './app.html',\n")
    template = (
        '<ng-template cdkConnectedOverlay [origin]="trigger" origin="x"></ng-template>\n'
        '<div [origin]="y"></div>\n'
    )
    data = {
        "input_names": {
            6: [
                {
                    "changes": [
                        {
                            "replace": "origin",
                            "replace_with": "cdkConnectedOverlayOrigin",
                            "limited_to": {"attributes": ["cdkConnectedOverlay"]},
                        }
                    ]
                }
            ]
        }
    }

    # 2. Act
    fs, _ = run_migrations(
        {"/src/app.ts": source, "/src/app.html": template, "/src/app.css": "[origin] {}"},
        [InputNamesMigration],
        data,
        target=TargetVersion.V6,
    )

    # 3. Assert
    assert fs.read("/src/app.html") == (
        "<ng-template cdkConnectedOverlay"
        ' [cdkConnectedOverlayOrigin]="trigger" cdkConnectedOverlayOrigin="x">'
        "</ng-template>\n"
        '<div [origin]="y"></div>\n'
    )
    assert fs.read("/src/app.css") == "[cdkConnectedOverlayOrigin] {}"
    assert fs.read("/src/app.ts") == source


def test_output_names_in_inline_template():
    source = _component(
        template="  template: '<button cdkCopyToClipboard=\"t\" (copied)=\"done()\">"
        "</button><a (copied)=\"x()\"></a>',\n"
    )
    data = {
        "output_names": {
            10: [
                {
                    "changes": [
                        {
                            "replace": "copied",
                            "replace_with": "cdkCopyToClipboardCopied",
                            "limited_to": {"attributes": ["cdkCopyToClipboard"]},
                        }
                    ]
                }
            ]
        }
    }

    fs, _ = run_migrations(
        {"/src/app.ts": source, "/src/app.css": ""},
        [OutputNamesMigration],
        data,
        target=TargetVersion.V10,
    )

    assert fs.read("/src/app.ts") == _component(
        template="  template: '<button cdkCopyToClipboard=\"t\""
        " (cdkCopyToClipboardCopied)=\"done()\"></button><a (copied)=\"x()\"></a>',\n"
    )


def test_misc_template_reports_focus_trap_for_version_6():
    # 1. Arrange
    source = _component(template="  template: '<cdk-focus-trap></cdk-focus-trap>',\n")
    logger = RecordingLogger()

    # 2. Act
    _, result = run_migrations(
        {"/src/app.ts": source, "/src/app.css": ""},
        [MiscTemplateMigration],
        target=TargetVersion.V6,
        logger=logger,
    )
    _, later = run_migrations(
        {"/src/app.ts": source, "/src/app.css": ""},
        [MiscTemplateMigration],
        target=TargetVersion.V9,
    )

    # 3. Assert
    assert len(result.failures) == 2
    first = result.failures[0]
    line = source.splitlines()[first.position.line]
    assert first.position.character == line.index("cdk-focus-trap")
    assert '"[cdkTrapFocus]"' in first.message
    assert len(logger.lines["warn"]) == 2
    assert later.failures == []
