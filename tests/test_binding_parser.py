import unittest

from ngdesugar.compiler.ast_nodes import (
    BindingPipe,
    Conditional,
    EmptyExpr,
    LiteralMap,
    MethodCall,
    PropertyRead,
    SafePropertyRead,
)
from ngdesugar.compiler.parser import HASH_DEPRECATION_WARNING, BindingParser


def summarize(bindings):
    return [
        (
            b.key,
            b.key_is_var,
            b.name,
            b.expression.source if b.expression is not None else None,
        )
        for b in bindings
    ]


class TestTemplateBindings(unittest.TestCase):
    def setUp(self) -> None:
        self.parser = BindingParser()

    def parse(self, directive: str, text: str, location=None):
        return self.parser.parse_template_bindings(directive, text, location)

    def test_ng_for(self):
        result = self.parse("ngFor", "let item of items; index as i; trackBy: trackById")
        self.assertEqual(result.errors, [])
        self.assertEqual(result.warnings, [])
        self.assertEqual(
            summarize(result.template_bindings),
            [
                ("ngFor", False, None, None),
                ("item", True, "$implicit", None),
                ("ngForOf", False, None, "items"),
                ("i", True, "index", None),
                ("ngForTrackBy", False, None, "trackById"),
            ],
        )

    def test_let_with_explicit_name(self):
        result = self.parse("ngFor", "let item of items, let i = index")
        self.assertEqual(
            summarize(result.template_bindings)[-1], ("i", True, "index", None)
        )

    def test_ng_if_as_and_else(self):
        result = self.parse("ngIf", "cond as value; else elseBlock")
        self.assertEqual(result.errors, [])
        self.assertEqual(
            summarize(result.template_bindings),
            [
                ("ngIf", False, None, "cond "),
                ("value", True, "ngIf", None),
                ("ngIfElse", False, None, "elseBlock"),
            ],
        )

    def test_expression_source_keeps_trailing_whitespace(self):
        result = self.parse("ngFor", "let x of  items  ; index as i")
        self.assertEqual(result.template_bindings[2].expression.source, "items  ")

    def test_empty_input_is_single_flag(self):
        result = self.parse("ngIf", "")
        self.assertEqual(summarize(result.template_bindings), [("ngIf", False, None, None)])
        self.assertEqual(result.errors, [])

    def test_pipe_with_arguments(self):
        result = self.parse("ngFor", "let item of items | slice:0:2; let i = index")
        binding = result.template_bindings[2]
        self.assertEqual(binding.expression.source, "items | slice:0:2")
        ast = binding.expression.ast
        self.assertIsInstance(ast, BindingPipe)
        self.assertEqual(ast.name, "slice")
        self.assertEqual(len(ast.args), 2)
        self.assertIsInstance(ast.exp, PropertyRead)

    def test_async_pipe_with_alias(self):
        result = self.parse("ngIf", "user$ | async as user")
        self.assertEqual(
            summarize(result.template_bindings),
            [("ngIf", False, None, "user$ | async "), ("user", True, "ngIf", None)],
        )

    def test_expression_shapes(self):
        result = self.parse("ngIf", "a?.b")
        self.assertIsInstance(result.template_bindings[0].expression.ast, SafePropertyRead)

        result = self.parse("ngIf", "ok ? yes : no")
        self.assertIsInstance(result.template_bindings[0].expression.ast, Conditional)

        result = self.parse("ngIf", "svc.check(a, 'b')")
        ast = result.template_bindings[0].expression.ast
        self.assertIsInstance(ast, MethodCall)
        self.assertEqual(ast.name, "check")
        self.assertEqual(len(ast.args), 2)

        result = self.parse("ngTemplateOutlet", "tpl; context: {$implicit: item, a: 1}")
        ast = result.template_bindings[1].expression.ast
        self.assertIsInstance(ast, LiteralMap)
        self.assertEqual(ast.keys, ["$implicit", "a"])

    def test_dashed_key(self):
        result = self.parse("myDir", "x; foo-bar: y")
        self.assertEqual(
            summarize(result.template_bindings)[1], ("myDirFoo-bar", False, None, "y")
        )

    def test_string_key(self):
        result = self.parse("myDir", "x; 'label': y")
        self.assertEqual(result.template_bindings[1].key, "myDirLabel")

    def test_hash_is_deprecated_let(self):
        result = self.parse("ngFor", "let item of items; #i = index")
        self.assertEqual(result.warnings, [HASH_DEPRECATION_WARNING])
        self.assertEqual(
            summarize(result.template_bindings)[-1], ("i", True, "index", None)
        )

    def test_dangling_of_is_a_flag(self):
        result = self.parse("ngFor", "let item of")
        self.assertEqual(result.errors, [])
        self.assertEqual(
            summarize(result.template_bindings)[-1], ("ngForOf", False, None, None)
        )


class TestTemplateBindingErrors(unittest.TestCase):
    def setUp(self) -> None:
        self.parser = BindingParser()

    def test_missing_pipe_name(self):
        result = self.parser.parse_template_bindings("ngFor", "let item of items | ")
        self.assertEqual(len(result.errors), 1)
        self.assertEqual(
            result.errors[0].message,
            "Parser Error: Unexpected end of input, expected identifier or keyword "
            "at the end of the expression [let item of items | ]",
        )
        # The binding survives with the text that was consumed.
        binding = result.template_bindings[2]
        self.assertEqual(binding.key, "ngForOf")
        self.assertIsInstance(binding.expression.ast, EmptyExpr)
        self.assertEqual(binding.expression.source.strip(), "items |")

    def test_location_in_message(self):
        result = self.parser.parse_template_bindings("ngIf", "a +", "AppComponent@3:4")
        self.assertEqual(len(result.errors), 1)
        self.assertEqual(
            result.errors[0].message,
            "Parser Error: Unexpected end of expression: a + "
            "at the end of the expression [a +] in AppComponent@3:4",
        )

    def test_assignment_rejected(self):
        result = self.parser.parse_template_bindings("ngIf", "a = b")
        self.assertEqual(len(result.errors), 1)
        self.assertIn("Bindings cannot contain assignments", result.errors[0].message)
        self.assertIn("at column 3 in", result.errors[0].message)

    def test_recovers_at_next_binding(self):
        result = self.parser.parse_template_bindings(
            "ngFor", "let item of items; let ) ; index as i"
        )
        self.assertEqual(len(result.errors), 1)
        self.assertIn(
            "Unexpected token ), expected identifier, keyword, or string",
            result.errors[0].message,
        )
        self.assertEqual(
            summarize(result.template_bindings),
            [
                ("ngFor", False, None, None),
                ("item", True, "$implicit", None),
                ("ngForOf", False, None, "items"),
                ("i", True, "index", None),
            ],
        )

    def test_lexer_error_is_reported(self):
        result = self.parser.parse_template_bindings("ngFor", "let item of items; @foo")
        self.assertEqual(len(result.errors), 1)
        self.assertIn("Unexpected character [@]", result.errors[0].message)
        self.assertEqual(len(result.template_bindings), 3)

    def test_conditional_needs_three_parts(self):
        result = self.parser.parse_template_bindings("ngIf", "a ? b")
        self.assertEqual(len(result.errors), 1)
        self.assertIn("requires all 3 expressions", result.errors[0].message)

    def test_parse_never_raises_on_garbage(self):
        for text in ["))))", ";;;", "let", "let =", "as", "[1, 2", "{a 1}", "'x"]:
            result = self.parser.parse_template_bindings("ngIf", text)
            self.assertEqual(result.template_bindings[0].key, "ngIf")


if __name__ == "__main__":
    unittest.main()
