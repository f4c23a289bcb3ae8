"""Structured Move items and the printer that renders them.

Emitters describe functions as :class:`MoveFunction` values instead of
splicing raw strings, so parameter lists, call sites and indentation are
formatted in exactly one place.

Body blocks are written with zero base indentation; nested lines use four
spaces per level.  :meth:`MoveFunction.render` shifts everything to module
indentation and separates blocks with a blank line.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

INDENT = "    "
TX_CONTEXT = "&mut sui::tx_context::TxContext"


@dataclass(frozen=True)
class MoveParam:
    name: str
    type: str

    def render(self) -> str:
        return f"{self.name}: {self.type}"


@dataclass(frozen=True)
class MoveFunction:
    """A Move function definition."""

    name: str
    params: tuple[MoveParam, ...] = ()
    body: tuple[str, ...] = ()
    returns: str | None = None
    public: bool = False
    entry: bool = False
    attributes: tuple[str, ...] = field(default=())

    @property
    def arity(self) -> int:
        return len(self.params)

    def param_names(self) -> list[str]:
        return [param.name for param in self.params]

    def render(self) -> str:
        lines = [f"{INDENT}{attribute}" for attribute in self.attributes]

        modifiers = ("public " if self.public else "") + ("entry " if self.entry else "")
        returns = f": {self.returns}" if self.returns else ""

        if self.params:
            lines.append(f"{INDENT}{modifiers}fun {self.name}(")
            lines.extend(f"{INDENT * 2}{param.render()}," for param in self.params)
            lines.append(f"{INDENT}){returns} {{")
        else:
            lines.append(f"{INDENT}{modifiers}fun {self.name}(){returns} {{")

        lines.append(indent_block("\n\n".join(part for part in self.body if part), 2))
        lines.append(f"{INDENT}}}")
        return "\n".join(line for line in lines if line)


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


def call(function: str, args: Sequence[str] = (), *, multiline: bool | None = None) -> str:
    """Render a call expression.

    Calls with more than two arguments (or any multi-line argument) are
    broken over several lines with a trailing comma, the rest stay inline.
    """
    if multiline is None:
        multiline = len(args) > 2 or any("\n" in arg for arg in args)
    if not multiline:
        return f"{function}({', '.join(args)})"
    inner = "\n".join(f"{indent_block(arg, 1)}," for arg in args)
    return f"{function}(\n{inner}\n)"


def statement(expression: str) -> str:
    return f"{expression};"


def let(binding: str, expression: str) -> str:
    return f"let {binding} = {expression};"


def utf8(text: str) -> str:
    """``std::string::String`` literal; *text* must already be sanitised."""
    return f'std::string::utf8(b"{text}")'


def ascii_string(text: str) -> str:
    return f'std::ascii::string(b"{text}")'


def address_literal(address: object) -> str:
    return f"@{address}"


def sender() -> str:
    return "sui::tx_context::sender(ctx)"


def public_transfer(obj: str, recipient: str | None = None) -> str:
    return statement(call("sui::transfer::public_transfer", [obj, recipient or sender()]))


def public_share(obj: str) -> str:
    return statement(call("sui::transfer::public_share_object", [obj]))


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def indent_block(text: str, levels: int) -> str:
    """Indent every non-empty line of *text* by *levels* of four spaces."""
    prefix = INDENT * levels
    return "\n".join(prefix + line if line else line for line in text.split("\n"))


def block(*parts: str | None) -> str:
    """Join the non-empty parts into one block, one per line."""
    return "\n".join(part for part in parts if part)
