import unittest

from ngdesugar.compiler.ast_nodes import (
    ASTWithSource,
    EmptyExpr,
    ParseSpan,
    TemplateBinding,
)
from ngdesugar.compiler.codegen.classifier import classify
from ngdesugar.compiler.codegen.directive import (
    render_context,
    render_directive_source,
    render_inputs,
    ucfirst,
)
from ngdesugar.compiler.codegen.skeleton import render_skeleton

SPAN = ParseSpan(0, 0)


def var(key, name="$implicit"):
    return TemplateBinding(SPAN, key, True, name)


def inp(key, source):
    return TemplateBinding(SPAN, key, False, None, ASTWithSource(EmptyExpr(SPAN), source))


def flag(key):
    return TemplateBinding(SPAN, key, False)


class TestClassifier(unittest.TestCase):
    def test_partition_keeps_order(self):
        bindings = [
            flag("ngFor"),
            var("item"),
            inp("ngForOf", "items"),
            var("i", "index"),
            inp("ngForTrackBy", "fn"),
        ]
        result = classify(bindings)
        self.assertEqual([b.key for b in result.variable_bindings], ["item", "i"])
        self.assertEqual([b.key for b in result.input_bindings], ["ngForOf", "ngForTrackBy"])
        self.assertEqual([b.key for b in result.flag_bindings], ["ngFor"])
        self.assertTrue(result.has_variables)
        self.assertTrue(result.has_inputs)

    def test_partition_is_complete(self):
        bindings = [flag("a"), var("b"), inp("c", "x"), flag("d"), var("e", "f")]
        result = classify(bindings)
        total = (
            len(result.variable_bindings)
            + len(result.input_bindings)
            + len(result.flag_bindings)
        )
        self.assertEqual(total, len(bindings))

    def test_empty(self):
        result = classify([])
        self.assertFalse(result.has_variables)
        self.assertFalse(result.has_inputs)

    def test_does_not_mutate_input(self):
        bindings = [var("item"), flag("ngFor")]
        before = list(bindings)
        classify(bindings)
        self.assertEqual(bindings, before)


class TestSkeleton(unittest.TestCase):
    def test_ng_for(self):
        bindings = [var("ngFor"), inp("ngForOf", "items")]
        self.assertEqual(
            render_skeleton("li", bindings),
            '<ng-template let-ngFor [ngForOf]="items">\n  <li></li>\n</ng-template>',
        )

    def test_all_attribute_forms_in_order(self):
        bindings = [flag("ngFor"), var("item"), inp("ngForOf", "  items  "), var("i", "index")]
        skeleton = render_skeleton("div", bindings)
        self.assertEqual(
            skeleton.splitlines()[0],
            '<ng-template [ngFor] let-item [ngForOf]="items" let-i="index">',
        )

    def test_empty_bindings(self):
        self.assertEqual(
            render_skeleton("span", []),
            "<ng-template>\n  <span></span>\n</ng-template>",
        )

    def test_flag_only(self):
        self.assertEqual(
            render_skeleton("p", [flag("ngIf")]),
            "<ng-template [ngIf]>\n  <p></p>\n</ng-template>",
        )

    def test_multiline_expression(self):
        self.assertEqual(
            render_skeleton("li", [inp("ngIf", "a &&\nb")]),
            '<ng-template [ngIf]="a &&\nb">\n  <li></li>\n</ng-template>',
        )


class TestDirectiveSource(unittest.TestCase):
    def test_full_directive(self):
        bindings = [flag("ngFor"), var("item"), inp("ngForOf", "items"), var("i", "index")]
        source = render_directive_source("ngFor", "li", bindings)
        self.assertEqual(
            source,
            "import { Directive, Input, TemplateRef } from '@angular/core'\n"
            "\n"
            "export interface NgForContext {\n"
            "  $implicit: any;\n"
            "  index: any;\n"
            "}\n"
            "\n"
            "@Directive({\n"
            "  selector: '[ngFor]'\n"
            "})\n"
            "export class NgFor {\n"
            "  @Input() ngForOf: any = null;\n"
            "\n"
            "  constructor(templateRef: TemplateRef<NgForContext>) {}\n"
            "}",
        )

    def test_no_bindings(self):
        source = render_directive_source("myDir", "div", [])
        self.assertEqual(
            source,
            "import { Directive, Input, TemplateRef } from '@angular/core'\n"
            "\n"
            "@Directive({\n"
            "  selector: '[myDir]'\n"
            "})\n"
            "export class MyDir {\n"
            "  constructor(templateRef: TemplateRef<any>) {}\n"
            "}",
        )

    def test_variables_without_inputs(self):
        source = render_directive_source("ngFor", "li", [var("item", "item")])
        self.assertIn("export interface NgForContext {\n  item: any;\n}", source)
        self.assertIn("TemplateRef<NgForContext>", source)
        self.assertNotIn("@Input()", source)

    def test_inputs_without_variables(self):
        source = render_directive_source("ngIf", "div", [inp("ngIf", "cond")])
        self.assertNotIn("interface", source)
        self.assertIn("TemplateRef<any>", source)
        self.assertIn(
            "export class NgIf {\n  @Input() ngIf: any = null;\n\n  constructor(", source
        )

    def test_flags_contribute_nothing(self):
        with_flag = render_directive_source("ngIf", "div", [flag("ngIf"), flag("ngIfElse")])
        without = render_directive_source("ngIf", "div", [])
        self.assertEqual(with_flag, without)

    def test_duplicate_variable_names_pass_through(self):
        source = render_directive_source("ngFor", "li", [var("a", "x"), var("b", "x")])
        self.assertIn("  x: any;\n  x: any;", source)

    def test_class_name_only_uppercases_first_character(self):
        self.assertEqual(ucfirst("ngFor"), "NgFor")
        self.assertEqual(ucfirst("x"), "X")
        self.assertEqual(ucfirst(""), "")
        source = render_directive_source("myHTMLDir", "div", [])
        self.assertIn("export class MyHTMLDir {", source)


class TestSubRenderers(unittest.TestCase):
    def test_render_context(self):
        self.assertEqual(
            render_context("NgFor", [var("item"), var("i", "index")]),
            "export interface NgForContext {\n  $implicit: any;\n  index: any;\n}",
        )

    def test_render_inputs(self):
        self.assertEqual(
            render_inputs([inp("ngForOf", "items"), inp("ngForTrackBy", "fn")]),
            "@Input() ngForOf: any = null;\n@Input() ngForTrackBy: any = null;",
        )

    def test_render_inputs_empty(self):
        self.assertEqual(render_inputs([]), "")


if __name__ == "__main__":
    unittest.main()
