'''
tabla de registros y resolución de operandos a valores de campo
'''

from __future__ import annotations
from typing import Dict

from .ast import Operand
from .utils import is_unsigned_nbit

# Nombres de registro conocidos -> índice
REGS: Dict[str, int] = {
    "r1": 1, "r2": 2, "r3": 3, "r4": 4, "r5": 5,
}

def _parse_unsigned(token: str) -> int:
    # sólo decimal sin signo; int() aceptaría '+5' o '1_0'
    if not token.isascii() or not token.isdigit():
        raise ValueError(f"No es un entero sin signo: {token}")
    return int(token)

def is_reg(token: str) -> bool:
    """Indica si el token se resuelve como registro (por nombre o índice numérico)."""
    try:
        reg_num(token)
        return True
    except ValueError:
        return False

def reg_num(token: str) -> int:
    """Devuelve el índice de un registro: primero la tabla, luego el índice numérico crudo."""
    if token in REGS:
        return REGS[token]
    try:
        return _parse_unsigned(token)
    except ValueError:
        raise ValueError(f"Registro inválido: {token}") from None

def resolve(operand: Operand, bits: int) -> int:
    """Resuelve un operando al valor de un campo de 'bits' bits.

    Los registros pasan por la tabla (o el índice numérico); los inmediatos
    ya vienen sin '$' y se leen como entero sin signo. Lanza ValueError si no
    se puede resolver o si el valor no cabe en el campo.
    """
    if operand.kind == "immediate":
        try:
            value = _parse_unsigned(operand.name)
        except ValueError:
            raise ValueError(f"Inmediato inválido: ${operand.name}") from None
    else:
        value = reg_num(operand.name)
    if not is_unsigned_nbit(value, bits):
        raise ValueError(f"{value} no cabe en {bits} bits (0..{(1 << bits) - 1})")
    return value
