"""IR instructions."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from tomic.ir.types import Type
from tomic.ir.values import User, Value


class UnaryOpType(Enum):
    POS = "pos"
    NEG = "neg"
    NOT = "not"


class BinaryOpType(Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"


class Instruction(User):
    """An instruction; its parent is the basic block holding it."""

    def __init__(self, type_: Type, name: str = "") -> None:
        super().__init__(type_, name)
        self.parent = None

    @property
    def parent_function(self):
        return self.parent.parent

    @property
    def parent_module(self):
        return self.parent_function.parent


class UnaryInstruction(Instruction):
    """An instruction with a single operand."""

    def __init__(self, type_: Type, operand: Value, name: str = "") -> None:
        super().__init__(type_, name)
        self.operand = operand
        self.add_operand(operand)


class UnaryOperator(UnaryInstruction):
    def __init__(self, op_type: UnaryOpType, operand: Value) -> None:
        super().__init__(operand.type, operand)
        self.op_type = op_type


class BinaryOperator(Instruction):
    def __init__(self, op_type: BinaryOpType, lhs: Value, rhs: Value) -> None:
        super().__init__(lhs.type)
        self.op_type = op_type
        self.left_operand = lhs
        self.right_operand = rhs
        self.add_operand(lhs)
        self.add_operand(rhs)


class AllocaInst(Instruction):
    """Stack allocation; its type is a pointer to the allocated type."""

    def __init__(self, allocated_type: Type, alignment: int = 4) -> None:
        super().__init__(allocated_type.context.get_pointer_type(allocated_type))
        self.allocated_type = allocated_type
        self.alignment = alignment


class LoadInst(UnaryInstruction):
    def __init__(self, address: Value, type_: Optional[Type] = None) -> None:
        if type_ is None:
            if not address.type.is_pointer:
                raise ValueError("address must be a pointer")
            type_ = address.type.element_type
        super().__init__(type_, address)

    @property
    def address(self) -> Value:
        return self.operand


class StoreInst(Instruction):
    def __init__(self, value: Value, address: Value) -> None:
        super().__init__(value.context.void_type)
        self.add_operand(value)
        self.add_operand(address)

    @property
    def value(self) -> Value:
        return self.operand_at(0)

    @property
    def address(self) -> Value:
        return self.operand_at(1)


class ReturnInst(Instruction):
    def __init__(self, context, value: Optional[Value] = None) -> None:
        super().__init__(Type.get_void(context))
        self.value = value
        if value is not None and not value.type.is_void:
            self.add_operand(value)


class CallInst(Instruction):
    def __init__(self, function, parameters: Iterable[Value] = ()) -> None:
        super().__init__(function.return_type)
        self.function = function
        self.parameters = list(parameters)
        self.add_operand(function)
        for param in self.parameters:
            self.add_operand(param)


class InputInst(Instruction):
    """Reads an integer through the ``getint`` library call."""

    def __init__(self, context) -> None:
        super().__init__(context.int32_type, "getint")


class OutputInst(UnaryInstruction):
    """Writes an integer via ``putint`` or a string via ``putstr``."""

    def __init__(self, value: Value) -> None:
        name = "putint" if value.type.is_integer else "putstr"
        super().__init__(value.context.void_type, value, name)

    @property
    def value(self) -> Value:
        return self.operand

    @property
    def is_integer(self) -> bool:
        return self.value.type.is_integer