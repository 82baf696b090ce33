"""Textual output of IR values and whole modules."""

from __future__ import annotations

from functools import singledispatch
from typing import TextIO

from tomic.asm.writer import StandardAsmWriter, VerboseAsmWriter
from tomic.ir.instructions import (
    AllocaInst,
    BinaryOperator,
    BinaryOpType,
    CallInst,
    InputInst,
    Instruction,
    LoadInst,
    OutputInst,
    ReturnInst,
    StoreInst,
    UnaryOperator,
    UnaryOpType,
)
from tomic.ir.values import (
    Argument,
    BasicBlock,
    ConstantData,
    Function,
    GlobalString,
    GlobalValue,
    GlobalVariable,
    Value,
)

TOMIC_VERSION = "1.0.0"
LLVM_VERSION = "10.0.0"

_BINARY_OPS = {
    BinaryOpType.ADD: "add nsw",
    BinaryOpType.SUB: "sub nsw",
    BinaryOpType.MUL: "mul nsw",
    BinaryOpType.DIV: "sdiv",
    BinaryOpType.MOD: "srem",
}

_UNARY_OPS = {
    UnaryOpType.POS: "add nsw",
    UnaryOpType.NEG: "sub nsw",
}


def _unsupported(value, what: str):
    return TypeError(f"cannot print {what} of {type(value).__name__}")


def _instruction_slot(inst: Instruction) -> int:
    return inst.parent_function.slot_tracker.slot(inst)


def _require_non_void(inst: Instruction) -> None:
    if inst.type.is_void:
        raise ValueError("a void instruction has no name")


# ---------------------------------------------------------------- print_asm


@singledispatch
def print_asm(value, writer) -> None:
    """Write the full definition of ``value``."""
    raise _unsupported(value, "definition")


@print_asm.register
def _(value: ConstantData, writer) -> None:
    value.type.print_asm(writer)
    if value.is_array:
        if value.is_all_zero:
            writer.push_next("zeroinitializer")
        else:
            writer.push_next("[")
            for index, element in enumerate(value.values):
                if index:
                    writer.push(", ")
                print_asm(element, writer)
            writer.push("]")
    else:
        writer.push_next(str(value.value))


@print_asm.register
def _(value: GlobalVariable, writer) -> None:
    print_name(value, writer)
    writer.push_next("=")
    writer.push_next("dso_local")
    writer.push_next("constant" if value.is_constant else "global")
    writer.push_space()
    if value.initializer is not None:
        print_asm(value.initializer, writer)
    else:
        element_type = value.type.element_type
        element_type.print_asm(writer)
        writer.push_next("zeroinitializer" if element_type.is_array else "0")
    writer.push_new_line()


@print_asm.register
def _(value: GlobalString, writer) -> None:
    print_name(value, writer)
    writer.push_next("=")
    writer.push_next("private unnamed_addr constant ")
    value.type.element_type.print_asm(writer)
    writer.push_space()
    writer.push("c")
    writer.push('"')
    for ch in value.value:
        writer.push("\\0A" if ch == "\n" else ch)
    writer.push("\\00")
    writer.push('"')
    writer.push(", align 1")
    writer.push_new_line()


@print_asm.register
def _(function: Function, writer) -> None:
    function_type = function.type
    if not function_type.is_function:
        raise TypeError("function must have a function type")

    function.slot_tracker.trace(function)

    if function_type.return_type.is_void:
        block = function.last_basic_block
        if block is None:
            raise ValueError(f"function {function.name} has no basic block")
        last = block.last_instruction
        if last is None or not isinstance(last, ReturnInst):
            block.insert_instruction(ReturnInst(function.context))

    writer.push_new_line()

    writer.comment_begin()
    writer.push("Function type: ")
    function_type.print_asm(writer)
    writer.comment_end()

    writer.push("define dso_local ")
    function_type.return_type.print_asm(writer)
    writer.push_space()
    print_name(function, writer)

    writer.push("(")
    for index, arg in enumerate(function.args):
        if index:
            writer.push(", ")
        arg.type.print_asm(writer)
        writer.push_next("%")
        writer.push(str(function.slot_tracker.slot(arg)))
    writer.push(")")

    writer.push_next("{")
    writer.push_new_line()
    for block in function.basic_blocks:
        print_asm(block, writer)
    writer.push("}")
    writer.push_new_line()


@print_asm.register
def _(arg: Argument, writer) -> None:
    arg.type.print_asm(writer)
    writer.push_next("%")
    writer.push(str(arg.parent.slot_tracker.slot(arg)))


@print_asm.register
def _(block: BasicBlock, writer) -> None:
    function = block.parent
    if function.basic_blocks and block is not function.basic_blocks[0]:
        writer.push(str(function.slot_tracker.slot(block)))
        writer.push(":")
        writer.push_new_line()
    for inst in block.instructions:
        writer.push_spaces(4)
        print_asm(inst, writer)


@print_asm.register
def _(inst: AllocaInst, writer) -> None:
    print_name(inst, writer)
    writer.push_next("=")
    writer.push_next("alloca")
    writer.push_space()
    inst.allocated_type.print_asm(writer)
    writer.push_new_line()


@print_asm.register
def _(inst: StoreInst, writer) -> None:
    writer.push("store")
    writer.push_space()
    print_use(inst.operand_at(0), writer)
    writer.push(", ")
    print_use(inst.operand_at(1), writer)
    writer.push_new_line()


@print_asm.register
def _(inst: LoadInst, writer) -> None:
    print_name(inst, writer)
    writer.push_next("= load ")
    inst.type.print_asm(writer)
    writer.push(", ")
    print_use(inst.address, writer)
    writer.push_new_line()


@print_asm.register
def _(inst: ReturnInst, writer) -> None:
    writer.push("ret")
    if inst.value is not None and not inst.value.type.is_void:
        writer.push_space()
        print_use(inst.value, writer)
    else:
        writer.push_next("void")
    writer.push_new_line()


@print_asm.register
def _(inst: CallInst, writer) -> None:
    if not inst.type.is_void:
        print_name(inst, writer)
        writer.push(" = ")
    writer.push("call ")
    inst.function.return_type.print_asm(writer)
    writer.push_space()
    print_name(inst.function, writer)
    writer.push("(")
    for index, param in enumerate(inst.parameters):
        if index:
            writer.push(", ")
        print_use(param, writer)
    writer.push(")")
    writer.push_new_line()


@print_asm.register
def _(inst: BinaryOperator, writer) -> None:
    print_name(inst, writer)
    writer.push_next("=")
    writer.push_next(_BINARY_OPS[inst.op_type])
    writer.push_space()
    inst.type.print_asm(writer)
    writer.push_space()
    print_name(inst.left_operand, writer)
    writer.push(", ")
    print_name(inst.right_operand, writer)
    writer.push_new_line()


@print_asm.register
def _(inst: UnaryOperator, writer) -> None:
    op = _UNARY_OPS.get(inst.op_type)
    if op is None:
        raise ValueError(f"unary operator {inst.op_type.value} is not supported")
    print_name(inst, writer)
    writer.push_next("=")
    writer.push_next(op)
    writer.push_space()
    inst.type.print_asm(writer)
    writer.push_next("0")
    writer.push(", ")
    print_name(inst.operand, writer)
    writer.push_new_line()


@print_asm.register
def _(inst: InputInst, writer) -> None:
    print_name(inst, writer)
    writer.push_next("= call ")
    inst.type.print_asm(writer)
    writer.push_next("@")
    writer.push(inst.name)
    writer.push("()")
    writer.push_new_line()


@print_asm.register
def _(inst: OutputInst, writer) -> None:
    writer.push("call ")
    inst.type.print_asm(writer)
    writer.push_space()
    writer.push("@")
    writer.push(inst.name)
    writer.push("(")
    if inst.is_integer:
        print_use(inst.value, writer)
    else:
        writer.push("i8* getelementptr inbounds (")
        inst.value.type.element_type.print_asm(writer)
        writer.push(", ")
        print_use(inst.value, writer)
        writer.push(", i64 0, i64 0)")
    writer.push(")")
    writer.push_new_line()


# ---------------------------------------------------------------- print_name


@singledispatch
def print_name(value, writer) -> None:
    """Write the name by which ``value`` is referred to."""
    raise _unsupported(value, "name")


@print_name.register
def _(value: ConstantData, writer) -> None:
    if value.is_array:
        writer.push("[")
        for index, element in enumerate(value.values):
            if index:
                writer.push(", ")
            print_asm(element, writer)
        writer.push("]")
    else:
        writer.push(str(value.value))


@print_name.register
def _(value: GlobalValue, writer) -> None:
    writer.push("@")
    writer.push(value.name)


@print_name.register
def _(block: BasicBlock, writer) -> None:
    writer.push("%")
    writer.push(str(block.parent.slot_tracker.slot(block)))


@print_name.register
def _(inst: Instruction, writer) -> None:
    _require_non_void(inst)
    writer.push("%")
    writer.push(str(_instruction_slot(inst)))


# ---------------------------------------------------------------- print_use


@singledispatch
def print_use(value, writer) -> None:
    """Write ``value`` as an operand: its type followed by its name."""
    raise _unsupported(value, "use")


@print_use.register
def _(value: ConstantData, writer) -> None:
    value.type.print_asm(writer)
    writer.push_space()
    print_name(value, writer)


@print_use.register
def _(value: GlobalValue, writer) -> None:
    value.type.print_asm(writer)
    writer.push_space()
    print_name(value, writer)


@print_use.register
def _(arg: Argument, writer) -> None:
    print_asm(arg, writer)


@print_use.register
def _(block: BasicBlock, writer) -> None:
    block.type.print_asm(writer)
    writer.push_space()
    print_name(block, writer)


@print_use.register
def _(inst: Instruction, writer) -> None:
    _require_non_void(inst)
    inst.type.print_asm(writer)
    writer.push_next("%")
    writer.push(str(_instruction_slot(inst)))


# ---------------------------------------------------------------- modules


def _print_declarations(writer) -> None:
    writer.push("declare i32 @getint()")
    writer.push_new_line()
    writer.push("declare void @putint(i32)")
    writer.push_new_line()
    writer.push("declare void @putstr(i8*)")
    writer.push_new_line()
    writer.push_new_line()


def _print_module_body(writer, module) -> None:
    _print_declarations(writer)
    for variable in module.global_variables:
        print_asm(variable, writer)
    if module.global_strings:
        writer.push_new_line()
        for string in module.global_strings:
            print_asm(string, writer)
        writer.push_new_line()
    for function in module.functions:
        print_asm(function, writer)
    if module.main_function is not None:
        print_asm(module.main_function, writer)


class StandardAsmPrinter:
    """Prints a module as plain IR without comments."""

    def print(self, module, out: TextIO) -> None:
        _print_module_body(StandardAsmWriter(out), module)


class VerboseAsmPrinter:
    """Prints a module with a commented header, module id and footer."""

    def __init__(self, version: str = TOMIC_VERSION, llvm_version: str = LLVM_VERSION) -> None:
        self.version = version
        self.llvm_version = llvm_version

    def print(self, module, out: TextIO) -> None:
        writer = VerboseAsmWriter(out)
        self._print_header(writer)
        self._print_module(writer, module)
        self._print_footer(writer)

    def _print_header(self, writer) -> None:
        writer.comment_begin()
        writer.push("Mini Compiler (ToMiC) [Version ")
        writer.push(self.version)
        writer.push("]")
        writer.comment_end()
        writer.push_comment("")
        writer.comment_begin()
        writer.push("LLVM IR Version: ")
        writer.push(self.llvm_version)
        writer.comment_end()
        writer.push_new_line()

    @staticmethod
    def _print_footer(writer) -> None:
        writer.push_new_line()
        writer.push_comment("End of LLVM IR")

    @staticmethod
    def _print_module(writer, module) -> None:
        writer.comment_begin()
        writer.push("Module ID = ")
        writer.push("'")
        writer.push(module.name)
        writer.push("'")
        writer.comment_end()
        writer.push("source_filename = ")
        writer.push('"')
        writer.push(module.name)
        writer.push('"')
        writer.push_new_line()
        writer.push_new_line()
        _print_module_body(writer, module)