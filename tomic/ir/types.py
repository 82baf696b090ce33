"""IR types and their textual form."""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class TypeID(Enum):
    """Category of an IR type."""

    VOID = "void"
    LABEL = "label"
    INTEGER = "integer"
    FUNCTION = "function"
    ARRAY = "array"
    POINTER = "pointer"


class Type:
    """Base IR type; instances are owned and interned by a context."""

    def __init__(self, context, type_id: TypeID) -> None:
        self.context = context
        self.type_id = type_id

    @property
    def is_void(self) -> bool:
        return self.type_id is TypeID.VOID

    @property
    def is_label(self) -> bool:
        return self.type_id is TypeID.LABEL

    @property
    def is_integer(self) -> bool:
        return self.type_id is TypeID.INTEGER

    @property
    def is_function(self) -> bool:
        return self.type_id is TypeID.FUNCTION

    @property
    def is_array(self) -> bool:
        return self.type_id is TypeID.ARRAY

    @property
    def is_pointer(self) -> bool:
        return self.type_id is TypeID.POINTER

    @staticmethod
    def get_void(context) -> "Type":
        return context.void_type

    @staticmethod
    def get_label(context) -> "Type":
        return context.label_type

    def print_asm(self, writer) -> None:
        if self.type_id is TypeID.VOID:
            writer.push("void")
        elif self.type_id is TypeID.LABEL:
            writer.push("label")
        else:
            raise ValueError(f"cannot print type {self.type_id.value}")


class IntegerType(Type):
    """Integer of a fixed bit width."""

    def __init__(self, context, bit_width: int) -> None:
        super().__init__(context, TypeID.INTEGER)
        self.bit_width = bit_width

    @staticmethod
    def get(context, bit_width: int) -> "IntegerType":
        if bit_width == 8:
            return context.int8_type
        if bit_width == 32:
            return context.int32_type
        raise ValueError(f"unsupported bit width {bit_width}")

    def print_asm(self, writer) -> None:
        writer.push(f"i{self.bit_width}")


class FunctionType(Type):
    """Function signature: return type followed by parameter types."""

    def __init__(self, return_type: Type, param_types: Iterable[Type] = ()) -> None:
        super().__init__(return_type.context, TypeID.FUNCTION)
        self.contained_types: tuple[Type, ...] = (return_type, *param_types)

    @property
    def return_type(self) -> Type:
        return self.contained_types[0]

    @property
    def param_types(self) -> tuple[Type, ...]:
        return self.contained_types[1:]

    @property
    def param_count(self) -> int:
        return len(self.contained_types) - 1

    @staticmethod
    def get(return_type: Type, param_types: Iterable[Type] = ()) -> "FunctionType":
        return return_type.context.get_function_type(return_type, param_types)

    def equals(self, return_type: Type, param_types: Iterable[Type] = ()) -> bool:
        """True if this signature is made of exactly these type objects."""
        params = tuple(param_types)
        if return_type is not self.return_type or len(params) != self.param_count:
            return False
        return all(mine is theirs for mine, theirs in zip(self.param_types, params))

    def print_asm(self, writer) -> None:
        self.return_type.print_asm(writer)
        writer.push_next("(")
        for index, param in enumerate(self.param_types):
            if index:
                writer.push(", ")
            param.print_asm(writer)
        writer.push(")")


class ArrayType(Type):
    """Fixed-length array of one element type."""

    def __init__(self, element_type: Type, element_count: int) -> None:
        super().__init__(element_type.context, TypeID.ARRAY)
        self.element_type = element_type
        self.element_count = element_count

    @staticmethod
    def get(element_type: Type, element_count: int) -> "ArrayType":
        return element_type.context.get_array_type(element_type, element_count)

    def print_asm(self, writer) -> None:
        writer.push("[")
        writer.push(str(self.element_count))
        writer.push_next("x")
        writer.push_space()
        self.element_type.print_asm(writer)
        writer.push("]")


class PointerType(Type):
    """Pointer to an element type."""

    def __init__(self, element_type: Type) -> None:
        super().__init__(element_type.context, TypeID.POINTER)
        self.element_type = element_type

    @staticmethod
    def get(element_type: Type) -> "PointerType":
        return element_type.context.get_pointer_type(element_type)

    def print_asm(self, writer) -> None:
        self.element_type.print_asm(writer)
        writer.push("*")