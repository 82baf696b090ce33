"""Owner of the interned IR types."""

from __future__ import annotations

from typing import Iterable

from tomic.ir.types import ArrayType, FunctionType, IntegerType, PointerType, Type, TypeID


class LlvmContext:
    """Creates each distinct type once and hands out the same object afterwards."""

    def __init__(self) -> None:
        self.void_type = Type(self, TypeID.VOID)
        self.label_type = Type(self, TypeID.LABEL)
        self.int8_type = IntegerType(self, 8)
        self.int32_type = IntegerType(self, 32)
        self._array_types: dict[tuple[Type, int], ArrayType] = {}
        self._function_types: list[FunctionType] = []
        self._pointer_types: dict[Type, PointerType] = {}

    def get_array_type(self, element_type: Type, element_count: int) -> ArrayType:
        key = (element_type, element_count)
        array_type = self._array_types.get(key)
        if array_type is None:
            array_type = ArrayType(element_type, element_count)
            self._array_types[key] = array_type
        return array_type

    def get_function_type(self, return_type: Type, param_types: Iterable[Type] = ()) -> FunctionType:
        params = tuple(param_types)
        for function_type in self._function_types:
            if function_type.equals(return_type, params):
                return function_type
        function_type = FunctionType(return_type, params)
        self._function_types.append(function_type)
        return function_type

    def get_pointer_type(self, element_type: Type) -> PointerType:
        pointer_type = self._pointer_types.get(element_type)
        if pointer_type is None:
            pointer_type = PointerType(element_type)
            self._pointer_types[element_type] = pointer_type
        return pointer_type