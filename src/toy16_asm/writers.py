from __future__ import annotations
from typing import Iterable, List
from .utils import to_hex16, to_bin16, split_bits
from .isa import IMM_LAYOUT, REG_LAYOUT
from .encoding import Encoded

WORD_BYTES = 2

def to_bytes(words: Iterable[Encoded]) -> bytes:
    """Concatena las palabras en big-endian, 2 bytes cada una, sin cabecera."""
    out = bytearray()
    for w in words:
        out.extend(w.word.to_bytes(WORD_BYTES, "big"))
    return bytes(out)

def write_bytes(data: bytes, path: str) -> None:
    with open(path, "wb") as f:
        f.write(data)

def read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()

def to_hex_lines(words: Iterable[Encoded]) -> List[str]:
    return [to_hex16(w.word) for w in words]

def to_bin_lines(words: Iterable[Encoded]) -> List[str]:
    return [to_bin16(w.word) for w in words]

def write_hex(words: Iterable[Encoded], path: str) -> None:
    lines = to_hex_lines(words)
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")

def write_bin(words: Iterable[Encoded], path: str) -> None:
    lines = to_bin_lines(words)
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")

def format_fields(w: Encoded) -> str:
    """Palabra en binario separada por campos, p.ej. '0001 001 010 1 00100'."""
    layout = IMM_LAYOUT if w.mode == "immediate" else REG_LAYOUT
    parts = split_bits(w.word, layout)
    return " ".join(format(v, f"0{hi - lo + 1}b") for v, (hi, lo) in zip(parts, layout))

def format_dump(data: bytes) -> str:
    """Volcado crudo de bytes: '0x12 0xA4 ...' (vacío si no hay bytes)."""
    return " ".join(f"0x{b:02X}" for b in data)
