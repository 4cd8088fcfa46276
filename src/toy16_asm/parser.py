# src/toy16_asm/parser.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .lexer import match_alnum, match_tag, skip_whitespace, line_col, newline_offsets
from .ast import Instruction, Operand, Program
from .isa import match_mnemonic
from .diagnostics import error, has_errors, Diagnostic

SIGIL = "$"

# ---------------- Resultados ----------------

@dataclass(frozen=True)
class ParseResult:
    program: Program
    diagnostics: List[Diagnostic]
    consumed: int     # caracteres consumidos por el programa reconocido

    @property
    def ok(self) -> bool:
        return not has_errors(self.diagnostics)

@dataclass(frozen=True)
class _Failure:
    """Fallo de una instrucción: dónde, por qué y si llegó a reconocer el mnemónico."""
    pos: int
    message: str
    after_mnemonic: bool
    hint: Optional[str] = None

# ---------------- Operandos ----------------

def parse_operand(text: str, pos: int) -> Optional[Tuple[Operand, int]]:
    """Consume un operando en text[pos:]. Devuelve (operando, nueva_pos) o None.

    Las alternativas se prueban en orden: primero registro (run alfanumérico),
    después inmediato ('$' + run alfanumérico). El '$' hace que sean
    excluyentes, pero si la sintaxis crece el orden decide qué se acepta.
    """
    m = match_alnum(text, pos)
    if m:
        name, end = m
        return Operand(name, "register"), end
    after = match_tag(text, pos, SIGIL)
    if after is not None:
        m = match_alnum(text, after)
        if m:
            name, end = m
            return Operand(name, "immediate"), end
    return None

def _parse_operand_list(text: str, pos: int):
    """Lista de operandos separados por un espacio y terminada en ';'.

    Devuelve (operandos, nueva_pos) o un _Failure. La lista vacía es válida
    aquí; la aridad se comprueba al codificar.
    """
    operands: List[Operand] = []
    first = parse_operand(text, pos)
    if first:
        op, pos = first
        operands.append(op)
        while True:
            after_sep = match_tag(text, pos, " ")
            if after_sep is None:
                break
            nxt = parse_operand(text, after_sep)
            if nxt is None:
                # el separador no se consume; el ';' fallará justo en él
                break
            op, pos = nxt
            operands.append(op)
    end = match_tag(text, pos, ";")
    if end is None:
        if pos >= len(text):
            return _Failure(pos, "Falta ';' al final de la instrucción", True)
        if text[pos] == SIGIL or (text[pos] == " " and operands):
            return _Failure(pos, f"Operando mal formado cerca de {text[pos:pos + 8]!r}", True,
                            hint="operandos: registro (r1..r5 o índice) o $inmediato, separados por un espacio")
        return _Failure(pos, f"Se esperaba operando o ';', se encontró {text[pos]!r}", True)
    return operands, end

# ---------------- Instrucciones ----------------

def _parse_instruction(text: str, pos: int, newlines: Optional[List[int]] = None):
    start = pos
    m = match_mnemonic(text, pos)
    if m is None:
        return _Failure(pos, "No se reconoce ningún mnemónico", False)
    op, pos = m
    after_space = match_tag(text, pos, " ")
    if after_space is None:
        return _Failure(pos, "Se esperaba un espacio tras el mnemónico", True)
    res = _parse_operand_list(text, after_space)
    if isinstance(res, _Failure):
        return res
    operands, end = res
    line, col = line_col(text, start, newlines)
    return Instruction(op=op, operands=tuple(operands), line=line, col=col), end

def parse_instruction(text: str, pos: int = 0) -> Optional[Tuple[Instruction, int]]:
    """Reconoce una instrucción en text[pos:]. Devuelve (instrucción, nueva_pos) o None."""
    res = _parse_instruction(text, pos)
    if isinstance(res, _Failure):
        return None
    return res

# ---------------- Programa ----------------

def _stop_diagnostic(text: str, fail: _Failure, stop: int, filename: Optional[str],
                     newlines: List[int]) -> Diagnostic:
    """Clasifica por qué se detuvo el programa antes del final del texto."""
    if fail.after_mnemonic:
        line, col = line_col(text, fail.pos, newlines)
        return error(fail.message, line=line, col=col, file=filename, hint=fail.hint, kind="syntax")
    line, col = line_col(text, stop, newlines)
    word = match_alnum(text, stop)
    if word:
        return error(f"Mnemónico desconocido: '{word[0]}'", line=line, col=col, file=filename,
                     hint="mnemónicos válidos: add, ld, store", kind="syntax")
    hint = None
    if text[stop].isspace():
        hint = "no se admiten separadores entre instrucciones"
    return error(f"Entrada sobrante sin reconocer desde el carácter {stop}: {text[stop:stop + 8]!r}",
                 line=line, col=col, file=filename, hint=hint, kind="trailing-input")

def parse(text: str, *, filename: Optional[str] = None, allow_whitespace: bool = False) -> ParseResult:
    """
    Aplica el reconocedor de instrucciones hasta que no pueda avanzar.

    Reglas:
      - instrucción := mnemónico ' ' operandos ';'   (mnemónicos: add, ld, store)
      - operandos   := operando (' ' operando)*       (puede ser vacía)
      - operando    := registro | '$' alfanumérico
      - Estricto por defecto: ningún separador entre instrucciones. Con
        allow_whitespace=True se saltan espacios, tabuladores y saltos de
        línea antes, entre y después de las instrucciones.
      - Si queda texto sin consumir se reporta un error: 'syntax' si ya se
        había reconocido el mnemónico (o parece uno desconocido),
        'trailing-input' en cualquier otro caso. Las instrucciones anteriores
        se conservan en el resultado.
    """
    program: Program = []
    diags: List[Diagnostic] = []
    newlines = newline_offsets(text)
    pos = 0

    while True:
        if allow_whitespace:
            pos = skip_whitespace(text, pos)
        if pos >= len(text):
            break
        res = _parse_instruction(text, pos, newlines)
        if isinstance(res, _Failure):
            diags.append(_stop_diagnostic(text, res, pos, filename, newlines))
            break
        ins, pos = res
        program.append(ins)

    return ParseResult(program=program, diagnostics=diags, consumed=pos)

parse_program = parse
