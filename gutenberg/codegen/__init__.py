"""Move source generation.

One emitter module per schema feature; :mod:`gutenberg.codegen.assembler`
stitches their output into a single module.
"""

from gutenberg.codegen.assembler import ContractFile, render_module, write_definitions, write_move
from gutenberg.codegen.move import MoveFunction, MoveParam
from gutenberg.codegen.templates import TemplateRenderer

__all__ = [
    "ContractFile",
    "MoveFunction",
    "MoveParam",
    "TemplateRenderer",
    "render_module",
    "write_definitions",
    "write_move",
]
