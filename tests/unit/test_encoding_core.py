import pytest
from toy16_asm.parser import parse
from toy16_asm import isa
from toy16_asm.encoding import encode, encode_instruction, _PACKERS
from toy16_asm.ast import Instruction, Operand
from toy16_asm.utils import split_bits, to_hex16

def _pipe(src: str):
    res = parse(src, filename="<mem>")
    assert res.ok, res.diagnostics
    enc = encode(res.program)
    assert not enc.diagnostics
    return enc

def test_add_immediate_form():
    enc = _pipe("add r1 r2 $4;")
    w = enc.words[0].word
    # 0001 001 010 1 00100
    assert w == 0b0001_001_010_1_00100 == 0x12A4
    assert split_bits(w, ((15, 12), (11, 9), (8, 6), (5, 5), (4, 0))) == (0b0001, 0b001, 0b010, 1, 0b00100)

def test_add_register_form():
    enc = _pipe("add r2 r3 r5;")
    w = enc.words[0].word
    opc, rd, rs, zero, rt = split_bits(w, ((15, 12), (11, 9), (8, 6), (5, 3), (2, 0)))
    assert (opc, rd, rs, zero, rt) == (0b0001, 0b010, 0b011, 0b000, 0b101)
    assert w == 0x14C5

def test_program_words_in_order():
    enc = _pipe("add r1 r2 $4;add r2 r3 r5;ld r1 r2 r3;store r4 r5 $31;")
    words_hex = [to_hex16(w.word) for w in enc.words]
    assert words_hex == ["0x12a4", "0x14c5", "0x2283", "0x397f"]
    assert [w.index for w in enc.words] == [0, 1, 2, 3]

def test_raw_numeric_registers():
    enc = _pipe("add 7 0 1;")
    assert enc.words[0].word == 0x1E01

@pytest.mark.parametrize("src, count", [
    ("add ;", 0),
    ("add r1;", 1),
    ("add r1 r2;", 2),
    ("store r1 r2 r3 r4;", 4),
])
def test_arity_errors(src, count):
    res = parse(src)
    assert res.ok
    enc = encode(res.program)
    assert enc.words == []
    [d] = enc.diagnostics
    assert d.kind == "arity"
    assert f"recibió {count}" in d.message

@pytest.mark.parametrize("src", [
    "add r1 r2 $32;",    # inmediato de más de 5 bits
    "add r1 r2 8;",      # índice de registro de más de 3 bits
    "add r9 r2 r3;",     # registro desconocido y no numérico
    "ld r1 r2 $abc;",    # inmediato no numérico
])
def test_resolution_errors(src):
    res = parse(src)
    assert res.ok
    enc = encode(res.program)
    assert enc.words == []
    assert [d.kind for d in enc.diagnostics] == ["resolution"]
    assert not enc.ok

def test_rejected_instruction_does_not_stop_the_rest():
    res = parse("add r1 r2 $99;add r2 r3 r5;")
    enc = encode(res.program)
    assert [w.word for w in enc.words] == [0x14C5]
    assert [w.index for w in enc.words] == [1]
    assert len(enc.diagnostics) == 1

def test_immediate_in_register_slot_warns():
    word, diags = encode_instruction(Instruction("ADD", (Operand("1", "immediate"), Operand("r2"), Operand("r3"))))
    # modo inmediato: el último operando va en los 5 bits bajos
    assert word == 0x1000 | 1 << 9 | 2 << 6 | 1 << 5 | 3
    assert [d.severity for d in diags] == ["advertencia"]

def test_encode_instruction_positions():
    res = parse("add r1 r2 r3;ld r1 r2;", filename="x.s")
    enc = encode(res.program, filename="x.s")
    [d] = enc.diagnostics
    assert (d.file, d.line, d.col) == ("x.s", 1, 14)

def test_every_rule_covers_both_modes():
    for sp in isa.SPEC.values():
        assert (sp.itype, "immediate") in _PACKERS
        assert (sp.itype, "register") in _PACKERS

def test_ok_follows_error_diagnostics():
    # una advertencia sola no invalida el resultado
    enc = encode([Instruction("ADD", (Operand("1", "immediate"), Operand("r2"), Operand("r3")))])
    assert enc.ok and len(enc.words) == 1
    assert not encode(parse("add r1;").program).ok
