from __future__ import annotations
import argparse, os, sys
from typing import Tuple

from .parser import parse, ParseResult
from .encoding import encode, EncodeResult
from .diagnostics import has_errors, note
from .writers import to_bytes, write_bytes, read_bytes, write_hex, write_bin, format_fields, format_dump
from .utils import to_hex16

def assemble_text(text: str, *, filename: str | None = None,
                  allow_whitespace: bool = False) -> Tuple[ParseResult, list, EncodeResult]:
    """Parsea y codifica.
    Devuelve (parse_result, diagnostics_totales, enc_result).

    Si el parseo deja texto sin consumir se codifica igualmente lo reconocido,
    pero el error queda en los diagnósticos y el llamador no debe escribir la salida."""
    parsed = parse(text, filename=filename, allow_whitespace=allow_whitespace)
    enc = encode(parsed.program, filename=filename)
    diags = list(parsed.diagnostics) + list(enc.diagnostics)
    return parsed, diags, enc

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Ensamblador de 16 bits (add/ld/store)")
    ap.add_argument("source", help="archivo de entrada ('-' para stdin)")
    ap.add_argument("out_bin", help="archivo binario de salida (big-endian, 2 bytes por instrucción)")
    ap.add_argument("--hex", dest="out_hex", help="listado opcional con palabras en hexadecimal")
    ap.add_argument("--bin-text", dest="out_bin_text", help="listado opcional con palabras en binario ASCII")
    ap.add_argument("--lenient", action="store_true",
                    help="admite espacios y saltos de línea entre instrucciones")
    ap.add_argument("--verbose", action="store_true", help="imprime cada palabra codificada por campos")
    ap.add_argument("--dump", action="store_true", help="relee el binario escrito y muestra sus bytes")
    args = ap.parse_args(argv)

    try:
        if args.source == "-":
            text = sys.stdin.read()
        else:
            with open(args.source, "r", encoding="utf-8") as f:
                text = f.read()
    except (OSError, UnicodeDecodeError) as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    filename = "<stdin>" if args.source == "-" else args.source
    parsed, diags, enc = assemble_text(text, filename=filename, allow_whitespace=args.lenient)

    for d in diags:
        print(d, file=sys.stderr)
    if not args.lenient and any(d.kind == "trailing-input" and d.hint for d in diags):
        print(note("el modo estricto no admite separadores entre instrucciones",
                   file=filename, hint="use --lenient para saltar espacios y saltos de línea"),
              file=sys.stderr)
    if has_errors(diags):
        return 1

    if args.verbose:
        for w in enc.words:
            print(f"{w.line}:{w.col}  {w.op.lower():<5} {to_hex16(w.word)}  {format_fields(w)}")

    data = to_bytes(enc.words)
    outputs = [(args.out_bin, lambda p: write_bytes(data, p))]
    if args.out_hex:
        outputs.append((args.out_hex, lambda p: write_hex(enc.words, p)))
    if args.out_bin_text:
        outputs.append((args.out_bin_text, lambda p: write_bin(enc.words, p)))
    written = []
    try:
        for path, write in outputs:
            write(path)
            written.append(path)
    except OSError as ex:
        print(f"ERROR al escribir salidas: {ex}", file=sys.stderr)
        # todas las salidas o ninguna
        for path in written:
            try:
                os.remove(path)
            except OSError as rm_ex:
                print(f"ERROR: no pude borrar {path}: {rm_ex}", file=sys.stderr)
        return 3

    if args.dump:
        try:
            print(format_dump(read_bytes(args.out_bin)))
        except OSError as ex:
            print(f"ERROR al releer {args.out_bin}: {ex}", file=sys.stderr)
            return 3

    print(f"OK: {len(enc.words)} instrucciones → {args.out_bin} ({len(data)} bytes)")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
