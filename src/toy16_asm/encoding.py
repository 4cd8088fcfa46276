# src/toy16_asm/encoding.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .ast import Instruction, Operation, OperandKind
from .isa import spec as isa_spec, OPCODE_FIELD, RD_FIELD, RS_FIELD, IMM_FLAG_BIT, IMM_FIELD, REG_FIELD
from .regs import resolve
from .utils import u16
from .diagnostics import Diagnostic, error, warning, has_errors

# ---------------- Resultados de codificación ----------------

@dataclass(frozen=True)
class Encoded:
    word: int     # u16
    index: int    # posición de la instrucción en el programa
    line: int
    col: int
    op: Operation
    mode: OperandKind

@dataclass(frozen=True)
class EncodeResult:
    words: List[Encoded]
    diagnostics: List[Diagnostic]

    @property
    def ok(self) -> bool:
        return not has_errors(self.diagnostics)

# ---------------- Helpers de empaquetado de bits ----------------

def _field(value: int, field: Tuple[int, int]) -> int:
    shift, bits = field
    return (value & ((1 << bits) - 1)) << shift

def _pack_RI(opc: int, rd: int, rs: int, imm5: int) -> int:
    return u16(_field(opc, OPCODE_FIELD) |
               _field(rd, RD_FIELD) |
               _field(rs, RS_FIELD) |
               1 << IMM_FLAG_BIT |
               _field(imm5, IMM_FIELD))

def _pack_RR(opc: int, rd: int, rs: int, rt: int) -> int:
    # bits 5..3 reservados a cero
    return u16(_field(opc, OPCODE_FIELD) |
               _field(rd, RD_FIELD) |
               _field(rs, RS_FIELD) |
               _field(rt, REG_FIELD))

# Regla de codificación y modo -> empaquetador. Toda regla de isa.SPEC
# tiene que cubrir los dos modos.
_PACKERS: Dict[Tuple[str, OperandKind], Callable[[int, int, int, int], int]] = {
    ("RI", "immediate"): _pack_RI,
    ("RI", "register"):  _pack_RR,
}

# ---------------- Codificador ----------------

def encode_instruction(ins: Instruction, *, filename: str | None = None) -> Tuple[Optional[int], List[Diagnostic]]:
    """Codifica una instrucción. Devuelve (palabra o None, diagnósticos).

    La palabra sólo se devuelve si no hubo ningún error: nunca se emite una
    palabra a medio resolver.
    """
    diags: List[Diagnostic] = []
    sp = isa_spec(ins.op)
    mnem = ins.op.lower()

    if len(ins.operands) != sp.arity:
        diags.append(error(f"{mnem} espera {sp.arity} operandos, recibió {len(ins.operands)}",
                           line=ins.line, col=ins.col, file=filename,
                           hint="forma: rd rs (rt | $imm);", kind="arity"))
        return None, diags

    mode = ins.mode
    last_field = IMM_FIELD if mode == "immediate" else REG_FIELD
    slots = (("rd", RD_FIELD), ("rs", RS_FIELD), ("último operando", last_field))

    values: List[int] = []
    for operand, (slot, (_, bits)) in zip(ins.operands, slots):
        if operand.is_immediate and slot in ("rd", "rs"):
            diags.append(warning(f"Inmediato ${operand.name} usado como registro {slot}",
                                 line=ins.line, col=ins.col, file=filename))
        try:
            values.append(resolve(operand, bits))
        except ValueError as ex:
            diags.append(error(f"{mnem}: {slot} no resoluble: {ex}",
                               line=ins.line, col=ins.col, file=filename, kind="resolution"))

    if len(values) != sp.arity:
        return None, diags

    rd, rs, last = values
    return _PACKERS[(sp.itype, mode)](sp.opcode, rd, rs, last), diags

def encode(program: Iterable[Instruction], *, filename: str | None = None) -> EncodeResult:
    """Codifica cada instrucción de forma independiente, en orden de fuente.

    Las instrucciones rechazadas no producen palabra pero no detienen al
    resto, así se reportan todos los errores de una vez.
    """
    diags: List[Diagnostic] = []
    words: List[Encoded] = []
    for index, ins in enumerate(program):
        word, ins_diags = encode_instruction(ins, filename=filename)
        diags.extend(ins_diags)
        if word is not None:
            words.append(Encoded(word=word, index=index, line=ins.line, col=ins.col,
                                 op=ins.op, mode=ins.mode))
    return EncodeResult(words=words, diagnostics=diags)
