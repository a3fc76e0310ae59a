#!/usr/bin/env python3
"""
Tests for the wider syntax inside bindings: async functions, nested and
tagged templates, object methods, array holes, shorthand defaults and the
statement forms allowed in function bodies.
"""

import pytest
from tmplexpr.shared import ErrorCode, ExpressionSyntaxError
from tmplexpr.shared.estree import (
    ArrayExpression,
    ArrayPattern,
    ArrowFunctionExpression,
    AssignmentPattern,
    AwaitExpression,
    CatchClause,
    ForOfStatement,
    ForStatement,
    FunctionExpression,
    ObjectPattern,
    Property,
    TaggedTemplateExpression,
    TemplateLiteral,
    ThrowStatement,
    TryStatement,
)
from tmplexpr.shared.scope import scope_names


class TestAsync:
    def test_async_arrow_with_await(self, rewritten):
        assert rewritten("async () => await save(id)") == "async () => await _ctx.save(_ctx.id)"

    def test_async_arrow_block_body(self, rewritten):
        assert rewritten("async (e) => { await submit(e) }") == "async (e) => { await _ctx.submit(e) }"

    def test_async_function_expression(self, rewritten):
        assert (
            rewritten("async function (x) { return await load(x) }")
            == "async function (x) { return await _ctx.load(x) }"
        )

    def test_async_and_await_shapes(self, parser):
        node = parser.parse("async x => await x")
        assert isinstance(node, ArrowFunctionExpression)
        assert node.is_async
        assert isinstance(node.body, AwaitExpression)

    def test_plain_arrow_is_not_async(self, parser):
        assert parser.parse("x => x").is_async is False

    def test_async_as_a_name(self, rewritten):
        assert rewritten("async + await") == "_ctx.async + _ctx.await"


class TestTemplates:
    def test_nested_template_in_placeholder(self, rewritten):
        assert rewritten("`${ok ? `yes ${a}` : 'no'}`") == "`${_ctx.ok ? `yes ${_ctx.a}` : 'no'}`"

    def test_nested_template_shape(self, parser):
        node = parser.parse("`a${`b${c}`}d`")
        assert isinstance(node, TemplateLiteral)
        assert node.quasis == ["a", "d"]
        inner = node.expressions[0]
        assert isinstance(inner, TemplateLiteral)
        assert inner.quasis == ["b", ""]

    def test_tagged_template(self, rewritten):
        assert rewritten("tag`hello ${name}`") == "_ctx.tag`hello ${_ctx.name}`"

    def test_tagged_template_shape(self, parser):
        node = parser.parse("fmt.money`${n}`")
        assert isinstance(node, TaggedTemplateExpression)
        assert isinstance(node.quasi, TemplateLiteral)
        assert node.quasi.expressions[0].name == "n"

    def test_dollar_without_brace_is_text(self, parser):
        node = parser.parse("`$5 ${a}`")
        assert node.quasis == ["$5 ", ""]


class TestObjectMethods:
    def test_method(self, rewritten):
        assert rewritten("{ handler() { return x } }") == "{ handler() { return _ctx.x } }"

    def test_getter_and_setter(self, rewritten):
        assert (
            rewritten("{ get total() { return a + b }, set total(v) { sum = v } }")
            == "{ get total() { return _ctx.a + _ctx.b }, set total(v) { _ctx.sum = v } }"
        )

    def test_async_method(self, rewritten):
        assert (
            rewritten("{ async load(id) { return fetchItem(id) } }")
            == "{ async load(id) { return _ctx.fetchItem(id) } }"
        )

    def test_computed_method_key(self, rewritten):
        assert rewritten("{ [key](v) { return v } }") == "{ [_ctx.key](v) { return v } }"

    def test_accessor_shape(self, parser):
        node = parser.parse("{ get size() { return 1 }, count() {} }")
        getter, method = node.properties
        assert isinstance(getter, Property)
        assert getter.kind == "get" and not getter.method
        assert isinstance(getter.value, FunctionExpression)
        assert method.kind == "init" and method.method

    def test_get_as_plain_key(self, rewritten):
        assert rewritten("{ get: fetch, set }") == "{ get: _ctx.fetch, set: _ctx.set }"

    def test_method_is_not_a_destructuring_target(self, parser):
        with pytest.raises(ExpressionSyntaxError, match="destructuring"):
            parser.parse("({ f() {} }) => 1")


class TestArrayHoles:
    def test_hole_in_assignment_target(self, rewritten):
        assert rewritten("[a, , b] = c") == "[a, , b] = _ctx.c"

    def test_leading_hole(self, rewritten):
        assert rewritten("[, second] = pair") == "[, second] = _ctx.pair"

    def test_hole_in_array_literal(self, rewritten):
        assert rewritten("[a, , b]") == "[_ctx.a, , _ctx.b]"

    def test_hole_shapes(self, parser):
        node = parser.parse("[a, , b] = c")
        assert isinstance(node.left, ArrayPattern)
        assert [e.name if e is not None else None for e in node.left.elements] == ["a", None, "b"]

    def test_single_trailing_comma_is_not_a_hole(self, parser):
        node = parser.parse("[a, b,]")
        assert isinstance(node, ArrayExpression)
        assert len(node.elements) == 2

    def test_double_trailing_comma_leaves_one_hole(self, parser):
        node = parser.parse("[a, ,]")
        assert len(node.elements) == 2
        assert node.elements[1] is None

    def test_hole_in_arrow_param(self, rewritten):
        assert rewritten("([, y]) => y + x") == "([, y]) => y + _ctx.x"


class TestShorthandDefaults:
    def test_default_in_parameter_pattern(self, rewritten):
        assert rewritten("({ a = 1, b }) => a + b + c") == "({ a = 1, b }) => a + b + _ctx.c"

    def test_default_value_is_a_reference(self, rewritten):
        assert rewritten("({ a = fallback }) => a") == "({ a = _ctx.fallback }) => a"

    def test_default_in_assignment_target(self, rewritten):
        assert rewritten("({ a = 1 } = obj)") == "({ a: _ctx.a = 1 } = _ctx.obj)"

    def test_pattern_shape(self, parser):
        node = parser.parse("({ a = 1 }) => a")
        pattern = node.params[0]
        assert isinstance(pattern, ObjectPattern)
        assert isinstance(pattern.properties[0].value, AssignmentPattern)
        assert pattern.properties[0].value.left is pattern.properties[0].key

    def test_default_outside_pattern_is_rejected(self, parser):
        with pytest.raises(ExpressionSyntaxError, match="Shorthand default"):
            parser.parse("({ a = 1 })")

    def test_default_outside_pattern_is_reported(self, rewrite):
        node, context = rewrite("({ a = 1 })")
        assert len(context.reporter.errors) == 1
        assert context.reporter.errors[0].code is ErrorCode.X_INVALID_EXPRESSION
        assert node.children is None


class TestStatements:
    """Statement forms and line-break separation in function bodies"""

    def test_newline_separates_statements(self, rewritten):
        assert rewritten("x => { a = 1\n b = 2 }") == "x => { _ctx.a = 1\n _ctx.b = 2 }"

    def test_blank_lines_and_semicolons(self, rewritten):
        assert rewritten("() => {\n  a()\n\n  b();\n}") == "() => {\n  _ctx.a()\n\n  _ctx.b();\n}"

    def test_missing_separator_is_an_error(self, parser):
        with pytest.raises(ExpressionSyntaxError):
            parser.parse("x => { a = 1 b = 2 }")

    def test_throw(self, rewritten):
        assert rewritten("x => { throw err }") == "x => { throw _ctx.err }"

    def test_throw_shape(self, parser):
        node = parser.parse("() => { throw new Error(msg) }")
        assert isinstance(node.body.body[0], ThrowStatement)

    def test_for_loop(self, rewritten):
        assert (
            rewritten("list => { for (let i = 0; i < list.length; i++) { total += list[i] } }")
            == "list => { for (let i = 0; i < list.length; i++) { _ctx.total += list[i] } }"
        )

    def test_for_loop_with_empty_parts(self, rewritten):
        assert rewritten("() => { for (;;) { if (done) break } }") == "() => { for (;;) { if (_ctx.done) break } }"

    def test_for_of(self, rewritten):
        assert (
            rewritten("() => { for (const item of items) { use(item) } }")
            == "() => { for (const item of _ctx.items) { _ctx.use(item) } }"
        )

    def test_for_in_without_declaration(self, rewritten):
        assert (
            rewritten("() => { for (key in obj) { log(key) } }")
            == "() => { for (_ctx.key in _ctx.obj) { _ctx.log(_ctx.key) } }"
        )

    def test_while(self, rewritten):
        assert rewritten("() => { while (busy) { tick() } }") == "() => { while (_ctx.busy) { _ctx.tick() } }"

    def test_while_with_continue(self, rewritten):
        assert rewritten("() => { while (next()) continue }") == "() => { while (_ctx.next()) continue }"

    def test_try_catch_finally(self, rewritten):
        assert (
            rewritten("() => { try { run() } catch (e) { report(e) } finally { done() } }")
            == "() => { try { _ctx.run() } catch (e) { _ctx.report(e) } finally { _ctx.done() } }"
        )

    def test_catch_without_binding(self, rewritten):
        assert (
            rewritten("() => { try { run() } catch { fail() } }")
            == "() => { try { _ctx.run() } catch { _ctx.fail() } }"
        )

    def test_try_shape(self, parser):
        node = parser.parse("() => { try { a() } catch ({ code }) {} }")
        statement = node.body.body[0]
        assert isinstance(statement, TryStatement)
        assert isinstance(statement.handler, CatchClause)
        assert isinstance(statement.handler.param, ObjectPattern)
        assert statement.finalizer is None

    def test_for_shapes(self, parser):
        node = parser.parse("() => { for (const a of b) {} for (let i = 0; i; i++) {} }")
        loop_of, loop = node.body.body
        assert isinstance(loop_of, ForOfStatement)
        assert loop_of.left.kind == "const"
        assert isinstance(loop, ForStatement)
        assert loop.init.kind == "let"


class TestStatementScopes:
    """Loop heads and catch parameters bind only inside their statement"""

    def test_let_head_does_not_leak(self, rewritten):
        assert (
            rewritten("() => { for (let i = 0; i < 3; i++) {} return i }")
            == "() => { for (let i = 0; i < 3; i++) {} return _ctx.i }"
        )

    def test_var_head_is_function_scoped(self, rewritten):
        assert (
            rewritten("() => { for (var j = 0; j < 2; j++) {} return j }")
            == "() => { for (var j = 0; j < 2; j++) {} return j }"
        )

    def test_catch_param_does_not_leak(self, rewritten):
        assert (
            rewritten("() => { try { a() } catch (err) { log(err) } return err }")
            == "() => { try { _ctx.a() } catch (err) { _ctx.log(err) } return _ctx.err }"
        )

    def test_destructured_catch_param(self, rewritten):
        assert (
            rewritten("() => { try {} catch ({ code }) { show(code) } }")
            == "() => { try {} catch ({ code }) { _ctx.show(code) } }"
        )

    def test_loop_body_declarations_stay_in_function(self, rewritten):
        assert (
            rewritten("() => { while (more) { const n = pop() } return n }")
            == "() => { while (_ctx.more) { const n = _ctx.pop() } return n }"
        )

    def test_scope_names_per_node(self, parser):
        node = parser.parse("() => { for (let i of xs) {} try {} catch (e) {} while (x) {} }")
        loop, attempt, other = node.body.body
        assert scope_names(loop) == frozenset({"i"})
        assert scope_names(attempt.handler) == frozenset({"e"})
        assert scope_names(other) is None
        assert scope_names(node) == frozenset()
