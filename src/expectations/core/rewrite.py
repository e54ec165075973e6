"""AST rewriting of ``expect`` calls in discovered ``expect_*.py`` modules.

Both arguments of an expectation must be evaluated lazily, each inside its own
fault-catching boundary, and their source text is shown when the expectation
fails. Discovered modules are therefore rewritten at load time::

    expect(3, add(1, 2))
    # becomes
    expect(lambda: 3, __expectations_bind_names(lambda add: add(1, 2), (lambda: add,)),
           raw=("3", "add(1, 2)"))

    expect(is_ready())
    # becomes
    expect(__expectations_bind_names(lambda is_ready: is_ready(), (lambda: is_ready,)),
           raw=(None, "is_ready()"))

Names an argument reads are looked up when the expectation is declared, so an
expectation declared in a loop sees the loop variable's value at that
iteration. Calls that already pass ``raw=`` are left alone.

The shorthand ``given(actual, (len, 3), (str.upper, "ABC"))`` gets the same
treatment for its first argument.
"""

from __future__ import annotations

import ast
from collections.abc import Callable, Sequence
from typing import Any

REWRITTEN_NAMES = frozenset({"expect", "expect_focused"})
GIVEN_NAME = "given"
BIND_NAME = "__expectations_bind_names"


def __expectations_bind_names(fn: Callable[..., Any], getters: Sequence[Callable[[], Any]]) -> Callable[[], Any]:
    """Snapshot the names a thunk reads and return a zero-argument thunk.

    Each getter returns the current value of one name. Names that are not
    bound yet are looked up again when the thunk runs, so a ``NameError``
    still surfaces inside the thunk's fault boundary.
    """
    bound: list[tuple[bool, Any]] = []
    for getter in getters:
        try:
            bound.append((True, getter()))
        except NameError:
            bound.append((False, None))

    def thunk() -> Any:
        args = [value if ok else getter() for (ok, value), getter in zip(bound, getters)]
        return fn(*args)

    return thunk


def build_injected_globals() -> dict[str, Any]:
    """Names available to discovered modules without importing them."""

    # Local imports to avoid import cycles during package initialization.
    from expectations.classify import TRUE, in_  # noqa: PLC0415
    from expectations.testing.declare import expect, expect_focused, given  # noqa: PLC0415

    return {
        "expect": expect,
        "expect_focused": expect_focused,
        "given": given,
        "in_": in_,
        "TRUE": TRUE,
        BIND_NAME: __expectations_bind_names,
    }


def _called_name(node: ast.Call) -> str | None:
    match node.func:
        case ast.Name(id=name):
            return name
        case ast.Attribute(attr=attr):
            return attr
        case _:
            return None


def _free_names(expr: ast.expr) -> list[str]:
    """Names ``expr`` reads from its surroundings, in order of first use.

    Names bound inside the expression (comprehension targets, walrus targets,
    lambda parameters) are left out; those keep their late lookup.
    """
    bound: set[str] = set()
    loads: list[str] = []
    for node in ast.walk(expr):
        match node:
            case ast.Name(id=name, ctx=ast.Load()):
                if name not in loads:
                    loads.append(name)
            case ast.Name(id=name):
                bound.add(name)
            case ast.arg(arg=name):
                bound.add(name)
    return [name for name in loads if name not in bound and name != BIND_NAME]


def _no_args(names: Sequence[str] = ()) -> ast.arguments:
    return ast.arguments(
        posonlyargs=[],
        args=[ast.arg(arg=name) for name in names],
        vararg=None,
        kwonlyargs=[],
        kw_defaults=[],
        kwarg=None,
        defaults=[],
    )


def _thunk(body: ast.expr) -> ast.expr:
    names = _free_names(body)
    if not names:
        return ast.copy_location(ast.Lambda(args=_no_args(), body=body), body)

    fn = ast.Lambda(args=_no_args(names), body=body)
    getters = ast.Tuple(
        elts=[ast.Lambda(args=_no_args(), body=ast.Name(id=name, ctx=ast.Load())) for name in names],
        ctx=ast.Load(),
    )
    call = ast.Call(func=ast.Name(id=BIND_NAME, ctx=ast.Load()), args=[fn, getters], keywords=[])
    return ast.copy_location(call, body)


def _is_given_shorthand(node: ast.Call) -> bool:
    # The template form always starts with argument names: a string or a list/tuple of them.
    if len(node.args) < 2 or node.keywords:
        return False
    first, pairs = node.args[0], node.args[1:]
    if isinstance(first, (ast.Constant, ast.List, ast.Tuple, ast.Starred)):
        return False
    return all(isinstance(pair, ast.Tuple) and len(pair.elts) == 2 for pair in pairs)


class ExpectRewriteTransformer(ast.NodeTransformer):
    """Wrap ``expect`` arguments in thunks and attach their source text."""

    def __init__(self, source: str, *, filename: str) -> None:
        self._source = source
        self._filename = filename

    def _source_of(self, node: ast.expr) -> str:
        text = ast.get_source_segment(self._source, node)
        if text is None:
            text = ast.unparse(node)
        return " ".join(text.split())

    def visit_Call(self, node: ast.Call) -> ast.expr:  # noqa: N802 - ast API
        self.generic_visit(node)
        name = _called_name(node)
        if name == GIVEN_NAME and _is_given_shorthand(node):
            return self._rewrite_given(node)
        if name not in REWRITTEN_NAMES:
            return node
        if any(kw.arg == "raw" for kw in node.keywords):
            return node
        if any(isinstance(arg, ast.Starred) for arg in node.args):
            return node
        if len(node.args) not in (1, 2):
            return node

        if len(node.args) == 1:
            raw: list[ast.expr] = [ast.Constant(None), ast.Constant(self._source_of(node.args[0]))]
        else:
            raw = [ast.Constant(self._source_of(arg)) for arg in node.args]

        node.args = [_thunk(arg) for arg in node.args]
        node.keywords.append(ast.keyword(arg="raw", value=ast.Tuple(elts=raw, ctx=ast.Load())))
        return node

    def _rewrite_given(self, node: ast.Call) -> ast.Call:
        actual = node.args[0]
        node.keywords.append(ast.keyword(arg="raw", value=ast.Constant(self._source_of(actual))))
        node.args[0] = _thunk(actual)
        return node


def rewrite(source: str, *, filename: str) -> ast.Module:
    """Parse ``source`` and rewrite its expectations."""
    tree = ast.parse(source, filename=filename)
    transformed = ExpectRewriteTransformer(source, filename=filename).visit(tree)
    return ast.fix_missing_locations(transformed)
