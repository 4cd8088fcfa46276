import pytest
from toy16_asm.ast import Operand
from toy16_asm.regs import reg_num, is_reg, resolve

@pytest.mark.parametrize("name, num", [("r1", 1), ("r2", 2), ("r3", 3), ("r4", 4), ("r5", 5)])
def test_named_registers(name, num):
    assert reg_num(name) == num
    assert is_reg(name)

def test_numeric_fallback():
    assert reg_num("0") == 0
    assert reg_num("7") == 7
    assert reg_num("42") == 42   # la comprobación de ancho es de resolve()

@pytest.mark.parametrize("token", ["r6", "r0", "x1", "foo", "R1", "", "0x1"])
def test_invalid(token):
    assert not is_reg(token)
    with pytest.raises(ValueError):
        reg_num(token)

def test_resolve_immediate():
    assert resolve(Operand("4", "immediate"), 5) == 4
    assert resolve(Operand("31", "immediate"), 5) == 31
    with pytest.raises(ValueError):
        resolve(Operand("32", "immediate"), 5)
    with pytest.raises(ValueError):
        resolve(Operand("r1", "immediate"), 5)

def test_resolve_register_width():
    assert resolve(Operand("r5"), 3) == 5
    assert resolve(Operand("7"), 3) == 7
    with pytest.raises(ValueError):
        resolve(Operand("8"), 3)
    with pytest.raises(ValueError):
        resolve(Operand("zz"), 3)
