'''
tabla formal del conjunto de instrucciones (opcodes, mnemónicos, campos)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .ast import Operation

@dataclass(frozen=True)
class ISpec:
    """Especificación de una operación.

    - opcode: campo de 4 bits (15..12)
    - itype: regla de codificación; 'RI' = rd, rs y un último operando que
      es registro o inmediato según el modo de la instrucción
    - arity: número de operandos que exige la regla
    """
    opcode: int
    itype: str = "RI"
    arity: int = 3

# Posiciones de los campos de la palabra de 16 bits: (shift, bits)
OPCODE_FIELD = (12, 4)
RD_FIELD     = (9, 3)
RS_FIELD     = (6, 3)
IMM_FLAG_BIT = 5
IMM_FIELD    = (0, 5)
REG_FIELD    = (0, 3)

# Rangos (hi, lo) para inspección de palabras ya codificadas
IMM_LAYOUT: Tuple[Tuple[int, int], ...] = ((15, 12), (11, 9), (8, 6), (5, 5), (4, 0))
REG_LAYOUT: Tuple[Tuple[int, int], ...] = ((15, 12), (11, 9), (8, 6), (5, 3), (2, 0))

SPEC: Dict[str, ISpec] = {
    "ADD":   ISpec(0b0001),
    "LOAD":  ISpec(0b0010),
    "STORE": ISpec(0b0011),
}

# Mnemónico en el fuente -> operación
MNEMONICS: Dict[str, Operation] = {
    "add":   "ADD",
    "ld":    "LOAD",
    "store": "STORE",
}

# Se prueban de más largo a más corto: si un mnemónico llega a ser prefijo
# de otro, gana siempre el más específico.
_BY_LENGTH = sorted(MNEMONICS, key=len, reverse=True)

def spec(op: str) -> ISpec:
    """Devuelve la especificación de una operación."""
    if op not in SPEC:
        raise KeyError(f"Operación desconocida: {op}")
    return SPEC[op]

def match_mnemonic(text: str, pos: int = 0) -> Optional[Tuple[Operation, int]]:
    """Reconoce un mnemónico en text[pos:]. Devuelve (operación, nueva_pos) o None."""
    for name in _BY_LENGTH:
        if text.startswith(name, pos):
            return MNEMONICS[name], pos + len(name)
    return None
