"""Tests for structural classification of functions, declarations and modules."""


class TestFunctionsAndClasses:
    def test_function_categories(self, analyze):
        source = (
            "function a() {}\n"
            "function* g() { yield 1; }\n"
            "const b = function () {};\n"
            "const c = () => 1;\n"
            "class D { m() {} static s() {} }\n"
            "const o = { k() {} };\n"
            "const E = class {};\n"
        )
        s = analyze(source).structure
        assert s.named_functions == 2
        assert s.anonymous_functions == 1
        assert s.arrow_functions == 1
        assert s.total_functions == 4
        assert s.methods == 2  # object-literal k() is not a method
        assert s.classes == 1  # class expressions are not counted

    def test_total_functions_is_sum_of_categories(self, analyze):
        s = analyze("const f = () => () => function () {};").structure
        assert s.total_functions == s.named_functions + s.anonymous_functions + s.arrow_functions
        assert s.arrow_functions == 2
        assert s.anonymous_functions == 1

    def test_typescript_class(self, analyze):
        source = (
            "class A {\n"
            "  private x: number = 1;\n"
            "  value(): number { return this.x; }\n"
            "}\n"
            "export function f(a: string): string { return a; }\n"
        )
        s = analyze(source, "a.ts").structure
        assert s.classes == 1
        assert s.methods == 1
        assert s.named_functions == 1
        assert s.exports == 1

    def test_default_exported_anonymous_class_is_a_class(self, analyze):
        s = analyze("class Base {}\nexport default class extends Base { m() {} }\n").structure
        assert s.classes == 2
        assert s.methods == 1
        assert s.exports == 1

    def test_default_exported_anonymous_function_is_named(self, analyze):
        s = analyze("export default function () { return 1; }\n").structure
        assert s.named_functions == 1
        assert s.anonymous_functions == 0

    def test_parenthesized_default_export_stays_an_expression(self, analyze):
        s = analyze("export default (function () {});\n").structure
        assert s.named_functions == 0
        assert s.anonymous_functions == 1

    def test_ast_nodes_dominates_counters(self, analyze):
        s = analyze("function a(x) { if (x) { return x; } }").structure
        counters = [v for k, v in s.to_dict().items() if k != "astNodes"]
        assert all(s.ast_nodes >= v for v in counters)


class TestDeclarations:
    def test_one_count_per_declarator(self, analyze):
        s = analyze("let a = 1, b = 2;\nvar c;\nconst d = 1, e = 2, f = 3;").structure
        assert s.variables == 3
        assert s.constants == 3

    def test_destructuring_is_one_declarator(self, analyze):
        s = analyze("const { a, b } = obj;").structure
        assert s.constants == 1

    def test_loop_bindings(self, analyze):
        source = (
            "for (const x of xs) {}\n"
            "for (let k in obj) {}\n"
            "for (y of ys) {}\n"
            "for (let i = 0; i < 3; i++) {}\n"
            "while (a) {}\n"
            "do {} while (b);\n"
        )
        s = analyze(source).structure
        assert s.loops == 6
        assert s.constants == 1  # x
        assert s.variables == 2  # k, i
        assert s.conditionals == 0


class TestModules:
    def test_imports_and_exports_count_per_statement(self, analyze):
        source = (
            "import a from 'a';\n"
            "import { b, c } from 'bc';\n"
            "export const d = 1;\n"
            "export default d;\n"
            "export * from 'e';\n"
            "export * as f from 'f';\n"
            "export { b, c };\n"
        )
        s = analyze(source).structure
        assert s.imports == 2
        # bare `export * from` is not counted
        assert s.exports == 4
        assert s.constants == 1


class TestConditionals:
    def test_if_counts_once_per_statement(self, analyze):
        s = analyze("if (a) {} else if (b) {} else {}").structure
        # else-if is a nested if_statement
        assert s.conditionals == 2

    def test_ternary_is_not_a_conditional(self, analyze):
        s = analyze("const v = a ? 1 : 2;").structure
        assert s.conditionals == 0
