import pytest

from calcir.codegen import CodeGen, compile_to_ir
from calcir.nodes import BinaryOp, Factor, Operator, ValueKind
from calcir.parser import parse


def ir(text):
    return compile_to_ir(parse(text))


def test_module_for_single_variable():
    expected = (
        "; ModuleID = 'calc'\n"
        'source_filename = "calc"\n'
        "\n"
        '@a.str = private constant [2 x i8] c"a\\00"\n'
        "\n"
        "define i32 @main(i32 %0, ptr %1) {\n"
        "entry:\n"
        "  %2 = call i32 @calc_read(ptr @a.str)\n"
        "  %3 = add nsw i32 %2, 1\n"
        "  call void @calc_write(i32 %3)\n"
        "  ret i32 0\n"
        "}\n"
        "\n"
        "declare i32 @calc_read(ptr)\n"
        "\n"
        "declare void @calc_write(i32)\n"
    )
    assert ir("with a: a+1") == expected


def test_codegen_class_matches_function():
    tree = parse("with x, y: (x + y) * 3")
    assert CodeGen().compile(tree) == compile_to_ir(tree)


def test_constant_expressions_are_folded():
    assert ir("2*3") == ir("6")
    assert ir("1 + 2 * 3") == ir("(3 + 4)")
    output = ir("1 + 2 * 3")
    assert "nsw" not in output
    assert "calc_read" not in output


def test_division_truncates_toward_zero():
    assert ir("(0-7)/2") == ir("0-3")
    assert ir("7/(0-2)") == ir("0-3")
    assert ir("7/2") == ir("3")


def test_arithmetic_wraps_at_32_bits():
    assert ir("2147483647+1") == ir("0-2147483647-1")
    assert ir("65536*65536") == ir("0")


def test_division_by_zero_is_poison():
    assert ir("1/0") == ir("5/0")
    assert ir("(1/0)+3") == ir("1/0")
    assert ir("(0-2147483647-1)/(0-1)") == ir("1/0")
    assert ir("1/0") != ir("1/1")


def test_each_variable_is_read_in_order():
    output = ir("with a, b: a*b")
    assert output.count("call i32 @calc_read") == 2
    assert output.index("@a.str)") < output.index("@b.str)")
    assert "mul nsw i32 %2, %3" in output
    assert output.count("private constant") == 2


def test_division_with_variable_emits_sdiv():
    output = ir("with x: x/2")
    assert "sdiv i32 %2, 2" in output
    assert "nsw" not in output


def test_read_declared_only_with_variables():
    assert "declare i32 @calc_read(ptr)" not in ir("4")
    assert "declare i32 @calc_read(ptr)" in ir("with q: q")


def test_undeclared_variable_raises():
    with pytest.raises(ValueError):
        ir("x")


def test_missing_operand_raises():
    tree = BinaryOp(Operator.MUL, Factor(ValueKind.NUMBER, "2"), None)
    with pytest.raises(ValueError):
        compile_to_ir(tree)