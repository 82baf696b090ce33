import io

import pytest

from tomic.asm.printer import (
    StandardAsmPrinter,
    VerboseAsmPrinter,
    print_asm,
    print_name,
    print_use,
)
from tomic.asm.writer import StandardAsmWriter
from tomic.ir.instructions import (
    AllocaInst,
    BinaryOperator,
    BinaryOpType,
    CallInst,
    InputInst,
    LoadInst,
    OutputInst,
    ReturnInst,
    StoreInst,
    UnaryOperator,
    UnaryOpType,
)
from tomic.ir.module import Module
from tomic.ir.values import (
    Argument,
    ConstantData,
    Function,
    GlobalString,
    GlobalVariable,
    Value,
)

DECLARATIONS = (
    "declare i32 @getint()\n"
    "declare void @putint(i32)\n"
    "declare void @putstr(i8*)\n"
    "\n"
)


def render(module, printer=None):
    out = io.StringIO()
    (printer or StandardAsmPrinter()).print(module, out)
    return out.getvalue()


def render_value(fn, value):
    out = io.StringIO()
    fn(value, StandardAsmWriter(out))
    return out.getvalue()


def make_main(module):
    ctx = module.context
    main = Function(ctx.int32_type, "main")
    block = main.new_basic_block()
    module.set_main_function(main)
    return ctx, main, block


def test_empty_module_prints_only_declarations():
    assert render(Module("empty")) == DECLARATIONS


def test_main_returning_constant():
    module = Module("m")
    ctx, main, block = make_main(module)
    block.insert_instruction(ReturnInst(ctx, ConstantData(ctx.int32_type, 0)))
    text = render(module)
    assert text.startswith(DECLARATIONS)
    body = text[len(DECLARATIONS):]
    assert body == "\ndefine dso_local i32 @main() {\n    ret i32 0\n}\n"


def test_standard_printer_drops_function_type_comment():
    module = Module("m")
    ctx, main, block = make_main(module)
    block.insert_instruction(ReturnInst(ctx, ConstantData(ctx.int32_type, 1)))
    assert "Function type" not in render(module)
    assert ";" not in render(module)


def test_local_variable_sequence_numbers_slots():
    module = Module("m")
    ctx, main, block = make_main(module)
    alloca = AllocaInst(ctx.int32_type)
    block.insert_instruction(alloca)
    block.insert_instruction(StoreInst(ConstantData(ctx.int32_type, 5), alloca))
    load = LoadInst(alloca)
    block.insert_instruction(load)
    add = BinaryOperator(BinaryOpType.ADD, load, ConstantData(ctx.int32_type, 7))
    block.insert_instruction(add)
    block.insert_instruction(ReturnInst(ctx, add))
    lines = render(module).splitlines()
    assert "    %1 = alloca i32" in lines
    assert "    store i32 5, i32* %1" in lines
    assert "    %2 = load i32, i32* %1" in lines
    assert "    %3 = add nsw i32 %2, 7" in lines
    assert "    ret i32 %3" in lines
    assert main.slot_tracker.slot(block) == 0
    assert main.slot_tracker.slot(add) == 3


@pytest.mark.parametrize(
    "op, mnemonic",
    [
        (BinaryOpType.SUB, "sub nsw"),
        (BinaryOpType.MUL, "mul nsw"),
        (BinaryOpType.DIV, "sdiv"),
        (BinaryOpType.MOD, "srem"),
    ],
)
def test_binary_operator_mnemonics(op, mnemonic):
    module = Module("m")
    ctx, main, block = make_main(module)
    lhs = InputInst(ctx)
    block.insert_instruction(lhs)
    inst = BinaryOperator(op, lhs, ConstantData(ctx.int32_type, 2))
    block.insert_instruction(inst)
    block.insert_instruction(ReturnInst(ctx, inst))
    text = render(module)
    assert f" = {mnemonic} i32 %1, 2\n" in text


def test_unary_negation_and_input():
    module = Module("m")
    ctx, main, block = make_main(module)
    read = InputInst(ctx)
    block.insert_instruction(read)
    neg = UnaryOperator(UnaryOpType.NEG, read)
    block.insert_instruction(neg)
    block.insert_instruction(ReturnInst(ctx, neg))
    text = render(module)
    assert "    %1 = call i32 @getint()\n" in text
    assert "    %2 = sub nsw i32 0, %1\n" in text


def test_unsupported_unary_operator_raises():
    module = Module("m")
    ctx, main, block = make_main(module)
    read = InputInst(ctx)
    block.insert_instruction(read)
    block.insert_instruction(UnaryOperator(UnaryOpType.NOT, read))
    printer = StandardAsmPrinter()
    with pytest.raises(ValueError):
        printer.print(module, io.StringIO())


def test_void_function_gets_implicit_return():
    module = Module("m")
    ctx = module.context
    func = Function(ctx.void_type, "f")
    block = func.new_basic_block()
    module.add_function(func)
    text = render(module)
    assert "    ret void\n" in text
    assert block.instruction_count == 1
    assert isinstance(block.last_instruction, ReturnInst)
    # Printing again must not add a second return.
    render(module)
    assert block.instruction_count == 1


def test_void_function_after_output_gets_return():
    module = Module("m")
    ctx = module.context
    func = Function(ctx.void_type, "f")
    block = func.new_basic_block()
    block.insert_instruction(OutputInst(ConstantData(ctx.int32_type, 3)))
    module.add_function(func)
    text = render(module)
    assert "    call void @putint(i32 3)\n    ret void\n" in text


def test_function_with_argument_and_call():
    module = Module("m")
    ctx = module.context
    arg = Argument(ctx.int32_type, "x", 0)
    func = Function(ctx.int32_type, "f", [arg])
    fblock = func.new_basic_block()
    fblock.insert_instruction(ReturnInst(ctx, ConstantData(ctx.int32_type, 1)))
    module.add_function(func)
    _, main, block = make_main(module)
    call = CallInst(func, [ConstantData(ctx.int32_type, 5)])
    block.insert_instruction(call)
    block.insert_instruction(ReturnInst(ctx, call))
    text = render(module)
    assert "define dso_local i32 @f(i32 %0) {\n" in text
    assert "    %1 = call i32 @f(i32 5)\n" in text
    assert text.index("@f(i32 %0)") < text.index("@main()")
    assert render_value(print_use, arg) == render_value(print_asm, arg)


def test_global_variables():
    module = Module("m")
    ctx = module.context
    i32 = ctx.int32_type
    plain = GlobalVariable(i32, False, "a")
    zeros = GlobalVariable(
        ctx.get_array_type(i32, 2),
        True,
        "b",
        ConstantData.array([ConstantData(i32, 0), ConstantData(i32, 0)]),
    )
    values = GlobalVariable(
        ctx.get_array_type(i32, 2),
        False,
        "c",
        ConstantData.array([ConstantData(i32, 1), ConstantData(i32, 2)]),
    )
    for variable in (plain, zeros, values):
        module.add_global_variable(variable)
    lines = render(module).splitlines()
    assert "@a = dso_local global i32 0" in lines
    assert "@b = dso_local constant [2 x i32] zeroinitializer" in lines
    assert "@c = dso_local global [2 x i32] [i32 1, i32 2]" in lines


def test_uninitialized_global_array_is_zeroinitializer():
    module = Module("m")
    ctx = module.context
    variable = GlobalVariable(ctx.get_array_type(ctx.int32_type, 3), False, "arr")
    text = render_value(print_asm, variable)
    assert text.startswith("@arr")
    assert text.endswith("zeroinitializer\n")


def test_global_string_and_putstr():
    module = Module("m")
    ctx, main, block = make_main(module)
    string = GlobalString(ctx, "hi\n")
    module.add_global_string(string)
    block.insert_instruction(OutputInst(string))
    block.insert_instruction(ReturnInst(ctx, ConstantData(ctx.int32_type, 0)))
    text = render(module)
    expected = '@.str = private unnamed_addr constant [4 x i8] c"hi\\0A\\00", align 1\n'
    assert "\n" + expected + "\n" in text
    assert (
        "call void @putstr(i8* getelementptr inbounds "
        "([4 x i8], [4 x i8]* @.str, i64 0, i64 0))" in text
    )


def test_constant_name_and_use():
    module = Module("m")
    ctx = module.context
    constant = ConstantData(ctx.int32_type, 42)
    assert render_value(print_name, constant) == "42"
    assert render_value(print_use, constant) == "i32 " + render_value(print_name, constant)


def test_global_value_name_and_use():
    module = Module("m")
    ctx = module.context
    variable = GlobalVariable(ctx.int32_type, False, "g")
    assert render_value(print_name, variable) == "@g"
    assert render_value(print_use, variable).endswith(" @g")


def test_void_instruction_has_no_name():
    module = Module("m")
    ctx, main, block = make_main(module)
    alloca = AllocaInst(ctx.int32_type)
    store = StoreInst(ConstantData(ctx.int32_type, 1), alloca)
    block.insert_instruction(alloca)
    block.insert_instruction(store)
    main.slot_tracker.trace(main)
    with pytest.raises(ValueError):
        render_value(print_name, store)
    with pytest.raises(ValueError):
        render_value(print_use, store)


def test_plain_value_cannot_be_printed():
    module = Module("m")
    value = Value(module.context.int32_type)
    with pytest.raises(TypeError):
        render_value(print_asm, value)
    with pytest.raises(TypeError):
        render_value(print_name, value)


def test_second_basic_block_is_labelled():
    module = Module("m")
    ctx, main, first = make_main(module)
    first.insert_instruction(InputInst(ctx))
    second = main.new_basic_block()
    second.insert_instruction(ReturnInst(ctx, ConstantData(ctx.int32_type, 0)))
    text = render(module)
    label = f"{main.slot_tracker.slot(second)}:\n"
    assert label in text
    assert main.slot_tracker.slot(second) == 2
    assert render_value(print_name, second) == "%2"


def test_verbose_printer_layout():
    module = Module("demo")
    ctx, main, block = make_main(module)
    block.insert_instruction(ReturnInst(ctx, ConstantData(ctx.int32_type, 0)))
    text = render(module, VerboseAsmPrinter(version="9.9", llvm_version="1.2"))
    assert "; LLVM IR Version: 1.2\n" in text
    assert "; Module ID = 'demo'\n" in text
    assert 'source_filename = "demo"\n\n' + DECLARATIONS in text
    assert "; Function type: i32 ()\ndefine dso_local i32 @main() {\n" in text
    assert text.endswith("\n; End of LLVM IR\n")


def test_verbose_and_standard_share_the_code():
    def build():
        module = Module("same")
        ctx, main, block = make_main(module)
        read = InputInst(ctx)
        block.insert_instruction(read)
        block.insert_instruction(OutputInst(read))
        block.insert_instruction(ReturnInst(ctx, ConstantData(ctx.int32_type, 0)))
        return module

    standard = render(build())
    verbose = render(build(), VerboseAsmPrinter())
    code_lines = [line for line in verbose.splitlines() if not line.startswith(";")]
    assert [line for line in code_lines if line.startswith("    ")] == [
        line for line in standard.splitlines() if line.startswith("    ")
    ]
    assert "    call void @putint(i32 %1)" in standard.splitlines()


def test_default_module_name_in_verbose_output():
    text = render(Module(), VerboseAsmPrinter())
    assert 'source_filename = "Default LLVM Module"' in text