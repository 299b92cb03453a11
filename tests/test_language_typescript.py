"""Tests for the TypeScript / JavaScript language plugin."""

import textwrap

from contextit.languages.typescript import TypeScriptLanguage
from contextit.models import Parameter


def make_source(code: str) -> str:
    return textwrap.dedent(code).strip() + "\n"


class TestTypeScriptLanguage:
    def setup_method(self):
        self.lang = TypeScriptLanguage()

    def test_name(self):
        assert self.lang.name == "typescript"
        assert self.lang.markdown_language_id == "typescript"

    def test_suffixes(self):
        for suffix in (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"):
            assert suffix in self.lang.suffixes

    def test_ignore_dirs(self):
        assert "node_modules" in self.lang.ignore_dirs


class TestFunctionDeclarations:
    def setup_method(self):
        self.lang = TypeScriptLanguage()

    def test_simple_function(self):
        sigs = self.lang.extract("function sum(a: number, b: number): number { return a+b; }")
        assert len(sigs) == 1
        assert sigs[0].name == "sum"
        assert sigs[0].parameters == (Parameter("a", "number"), Parameter("b", "number"))
        assert sigs[0].return_type == "number"
        assert not sigs[0].is_async

    def test_async_function(self):
        sigs = self.lang.extract(make_source("""
            async function fetchData(url: string): Promise<any> {
              return fetch(url).then(res => res.json());
            }
        """))
        assert len(sigs) == 1
        assert sigs[0].name == "fetchData"
        assert sigs[0].parameters == (Parameter("url", "string"),)
        assert sigs[0].return_type == "Promise<any>"
        assert sigs[0].is_async

    def test_generic_function_keeps_type_parameters_in_name(self):
        sigs = self.lang.extract("function identity<T>(value: T): T {\n  return value;\n}\n")
        assert sigs[0].name == "identity<T>"
        assert sigs[0].parameters == (Parameter("value", "T"),)
        assert sigs[0].return_type == "T"

    def test_default_values_are_dropped(self):
        sigs = self.lang.extract(make_source("""
            function greet(name: string, greeting: string = "Hello"): string {
              return greeting + name;
            }
        """))
        assert sigs[0].parameters == (Parameter("name", "string"), Parameter("greeting", "string"))
        assert sigs[0].return_type == "string"

    def test_export_default_function(self):
        sigs = self.lang.extract("export default function App(props: Props) {\n  return null;\n}\n")
        assert [s.name for s in sigs] == ["App"]
        assert sigs[0].return_type is None

    def test_nested_functions_are_skipped(self):
        sigs = self.lang.extract(make_source("""
            function outer() {
              function inner(x: number) { return x; }
              return inner(1);
            }
        """))
        assert [s.name for s in sigs] == ["outer"]

    def test_comments_are_ignored(self):
        sigs = self.lang.extract(make_source("""
            // function commented(a: number) {}
            /* function alsoCommented() {} */
            function real() {}
        """))
        assert [s.name for s in sigs] == ["real"]


class TestArrowFunctions:
    def setup_method(self):
        self.lang = TypeScriptLanguage()

    def test_arrow_function(self):
        sigs = self.lang.extract("const multiply = (a: number, b: number): number => a * b;\n")
        assert len(sigs) == 1
        assert sigs[0].name == "multiply"
        assert sigs[0].parameters == (Parameter("a", "number"), Parameter("b", "number"))
        assert sigs[0].return_type == "number"

    def test_exported_async_arrow(self):
        sigs = self.lang.extract("export const load = async (id: string) => {\n  return id;\n};\n")
        assert sigs[0].name == "load"
        assert sigs[0].is_async
        assert sigs[0].return_type is None

    def test_parenthesized_expression_is_not_an_arrow(self):
        assert self.lang.extract("const total = (a + b) * 2;\n") == []

    def test_forward_ref_component(self):
        sigs = self.lang.extract(make_source("""
            const Button = React.forwardRef<HTMLButtonElement, ButtonProps>((props, ref) => {
              return null;
            });
        """))
        assert len(sigs) == 1
        assert sigs[0].name == "Button"
        assert sigs[0].parameters == (Parameter("props"), Parameter("ref"))

    def test_member_alias(self):
        sigs = self.lang.extract("const Select = SelectPrimitive.Root;\n")
        assert len(sigs) == 1
        assert sigs[0].name == "Select"
        assert sigs[0].parameters == ()

    def test_alias_requires_statement_end(self):
        assert self.lang.extract("const value = config.items.map(fn);\n") == []


class TestClassMethods:
    def setup_method(self):
        self.lang = TypeScriptLanguage()

    def test_methods_carry_class_name(self):
        sigs = self.lang.extract(make_source("""
            class Calculator {
              add(a: number, b: number): number {
                return a + b;
              }

              async compute(operation: string, values: number[]): Promise<number> {
                return Promise.resolve(0);
              }
            }
        """))
        assert len(sigs) == 2
        add, compute = sigs
        assert add.name == "add"
        assert add.parameters == (Parameter("a", "number"), Parameter("b", "number"))
        assert add.return_type == "number"
        assert add.class_name == "Calculator"
        assert compute.name == "compute"
        assert compute.parameters == (Parameter("operation", "string"), Parameter("values", "number[]"))
        assert compute.return_type == "Promise<number>"
        assert compute.class_name == "Calculator"
        assert compute.is_async

    def test_constructor(self):
        sigs = self.lang.extract(make_source("""
            class Person {
              constructor(name: string, age: number) {
                this.name = name;
                this.age = age;
              }
            }
        """))
        assert len(sigs) == 1
        assert sigs[0].name == "constructor"
        assert sigs[0].parameters == (Parameter("name", "string"), Parameter("age", "number"))
        assert sigs[0].class_name == "Person"

    def test_parameter_properties_lose_modifiers(self):
        sigs = self.lang.extract(make_source("""
            class Service {
              constructor(private readonly http: HttpClient, public name: string) {}
            }
        """))
        assert sigs[0].parameters == (Parameter("http", "HttpClient"), Parameter("name", "string"))

    def test_generic_method_with_function_type(self):
        sigs = self.lang.extract(make_source("""
            class Container<T> {
              map<U>(fn: (value: T) => U): U {
                return fn(this.value);
              }
            }
        """))
        assert len(sigs) == 1
        assert sigs[0].name == "map<U>"
        assert sigs[0].parameters == (Parameter("fn", "(value: T) => U"),)
        assert sigs[0].return_type == "U"
        assert sigs[0].class_name == "Container"

    def test_control_flow_is_not_a_method(self):
        sigs = self.lang.extract(make_source("""
            class Loop {
              run() {
                if (this.ready) {
                  return;
                }
                while (true) {}
              }
            }
        """))
        assert [s.name for s in sigs] == ["run"]

    def test_multiline_field_initializer_is_not_a_method(self):
        sigs = self.lang.extract(make_source("""
            class A {
              private x = compute(
                other(1));
              private table = [
                build(2),
              ];
              foo(a: string): void {}
            }
        """))
        assert [(s.name, s.class_name) for s in sigs] == [("foo", "A")]

    def test_precedence_functions_then_arrows_then_methods(self):
        sigs = self.lang.extract(make_source("""
            class Math {
              multiply(a: number, b: number): number { return a * b; }
            }
            const subtract = (a: number, b: number): number => a - b;
            function add(a: number, b: number): number { return a + b; }
        """))
        assert [s.name for s in sigs] == ["add", "subtract", "multiply"]
        assert sigs[2].class_name == "Math"


class TestParseParameters:
    def setup_method(self):
        self.lang = TypeScriptLanguage()

    def test_typed(self):
        assert self.lang.parse_parameters("a: number, b: string") == [
            Parameter("a", "number"),
            Parameter("b", "string"),
        ]

    def test_complex_types(self):
        assert self.lang.parse_parameters("arr: Array<number>, map: Record<string, boolean>") == [
            Parameter("arr", "Array<number>"),
            Parameter("map", "Record<string, boolean>"),
        ]

    def test_function_type(self):
        assert self.lang.parse_parameters("callback: (err: Error, data: string) => void") == [
            Parameter("callback", "(err: Error, data: string) => void"),
        ]

    def test_nested_generics_and_callbacks_split_in_two(self):
        params = self.lang.parse_parameters("callback: (x: number) => string, data: Map<string, number[]>")
        assert params == [
            Parameter("callback", "(x: number) => string"),
            Parameter("data", "Map<string, number[]>"),
        ]

    def test_untyped_and_optional(self):
        assert self.lang.parse_parameters("a, b?: string") == [
            Parameter("a"),
            Parameter("b?", "string"),
        ]

    def test_default_with_arrow_is_kept(self):
        params = self.lang.parse_parameters("cb: () => void = () => {}")
        assert params[0].name == "cb"
