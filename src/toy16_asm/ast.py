'''
dataclases de AST (Instruction, Operand) y tipos de operación/operando
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Literal, Tuple

# Operaciones del procesador (conjunto cerrado; ver isa.SPEC)
Operation = Literal["ADD", "LOAD", "STORE"]

# Clase de operando: registro salvo que lleve el prefijo '$'
OperandKind = Literal["register", "immediate"]

# ---- Operandos ----

@dataclass(frozen=True)
class Operand:
    """Operando tal como aparece en el fuente (sin el '$' de los inmediatos)."""
    name: str
    kind: OperandKind = "register"

    @property
    def is_immediate(self) -> bool:
        return self.kind == "immediate"

# ---- Instrucciones ----

@dataclass(frozen=True)
class Instruction:
    """Instrucción con operación y operandos en orden de fuente.

    El modo no se guarda: se deriva de los operandos, así nunca queda
    desincronizado con la lista.
    """
    op: Operation
    operands: Tuple[Operand, ...]
    line: int = 1
    col: int = 1

    @property
    def mode(self) -> OperandKind:
        """'immediate' si algún operando es inmediato, si no 'register'."""
        if any(o.is_immediate for o in self.operands):
            return "immediate"
        return "register"

Program = List[Instruction]
