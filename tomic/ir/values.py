"""IR values: constants, globals, arguments, basic blocks and functions."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterable, Optional
from weakref import WeakKeyDictionary

from tomic.ir.types import ArrayType, FunctionType, IntegerType, PointerType, Type


@dataclass(eq=False)
class Use:
    """An edge from a user to one of the values it uses."""

    user: "User"
    value: "Value"


class Value:
    """Anything that has a type and may be used by other values."""

    def __init__(self, type_: Type, name: str = "") -> None:
        self.type = type_
        self.name = name
        self.users: list[Use] = []
        self.uses: list[Use] = []

    @property
    def context(self):
        return self.type.context

    def add_user(self, use: Use) -> None:
        """Record that ``use.user`` uses this value."""
        self.users.append(use)

    def add_use(self, use: Use) -> None:
        """Record that this value uses ``use.value``."""
        self.uses.append(use)


class User(Value):
    """A value with operands."""

    def add_operand(self, value: Value) -> None:
        """Append ``value`` as an operand and link both ends of the use."""
        use = Use(self, value)
        self.add_use(use)
        value.add_user(use)

    def operand_at(self, index: int) -> Value:
        return self.uses[index].value

    @property
    def operands(self) -> list[Value]:
        return [use.value for use in self.uses]


class Constant(User):
    """A value known at compile time."""


class ConstantData(Constant):
    """An integer constant, or an array of constants."""

    def __init__(self, type_: Type, value: int = 0, elements: Optional[Iterable["ConstantData"]] = None) -> None:
        super().__init__(type_)
        if elements is None:
            if not type_.is_integer:
                raise TypeError("only integer constants are supported")
            self.value = value
            self.values: tuple[ConstantData, ...] = ()
            self.is_all_zero = value == 0
        else:
            self.value = 0
            self.values = tuple(elements)
            self.is_all_zero = all(element.is_all_zero for element in self.values)

    @staticmethod
    def array(values: Iterable["ConstantData"]) -> "ConstantData":
        """An array constant whose element type is that of the first value."""
        values = list(values)
        if not values:
            raise ValueError("an array constant needs at least one element")
        array_type = ArrayType.get(values[0].type, len(values))
        return ConstantData(array_type, elements=values)

    @property
    def is_array(self) -> bool:
        return self.type.is_array


class GlobalValue(Constant):
    """A named value living at module level."""

    def __init__(self, type_: Type, name: str) -> None:
        super().__init__(type_, name)
        self.parent = None


class GlobalVariable(GlobalValue):
    """A global variable; its type is a pointer to the stored type."""

    def __init__(
        self,
        value_type: Type,
        is_constant: bool,
        name: str,
        initializer: Optional[ConstantData] = None,
    ) -> None:
        super().__init__(PointerType.get(value_type), name)
        self.is_constant = is_constant
        self.initializer = initializer


_string_counters: "WeakKeyDictionary[object, itertools.count]" = WeakKeyDictionary()


def _next_string_name(context) -> str:
    counter = _string_counters.setdefault(context, itertools.count())
    index = next(counter)
    return ".str" if index == 0 else f".str.{index}"


class GlobalString(GlobalValue):
    """A NUL-terminated string constant, named ``.str``, ``.str.1``, ... per context."""

    def __init__(self, context, value: str) -> None:
        size = len(value.encode("utf-8")) + 1
        type_ = PointerType.get(ArrayType.get(IntegerType.get(context, 8), size))
        super().__init__(type_, _next_string_name(context))
        self.value = value


class Argument(Value):
    """A formal argument of a function."""

    def __init__(self, type_: Type, name: str, arg_no: int) -> None:
        super().__init__(type_, name)
        self.arg_no = arg_no
        self.parent = None


def _insert(items: list, item, before) -> None:
    if before is None:
        items.append(item)
        return
    for index, existing in enumerate(items):
        if existing is before:
            items.insert(index, item)
            return
    raise ValueError("insertion point not found")


class BasicBlock(Value):
    """A straight-line sequence of instructions."""

    def __init__(self, parent: "Function") -> None:
        super().__init__(parent.context.label_type)
        self.parent = parent
        self.instructions: list = []

    def insert_instruction(self, inst, before=None) -> "BasicBlock":
        """Add ``inst`` at the end, or in front of ``before``."""
        inst.parent = self
        _insert(self.instructions, inst, before)
        return self

    def remove_instruction(self, inst) -> "BasicBlock":
        inst.parent = None
        self.instructions = [existing for existing in self.instructions if existing is not inst]
        return self

    @property
    def instruction_count(self) -> int:
        return len(self.instructions)

    @property
    def last_instruction(self):
        return self.instructions[-1] if self.instructions else None


class SlotTracker:
    """Numbers a function's arguments, blocks and non-void instructions."""

    def __init__(self) -> None:
        self._slots: dict[Value, int] = {}

    def trace(self, function: "Function") -> None:
        self._slots.clear()
        slots = itertools.count()
        for arg in function.args:
            self._slots[arg] = next(slots)
        for block in function.basic_blocks:
            self._slots[block] = next(slots)
            for inst in block.instructions:
                if not inst.type.is_void:
                    self._slots[inst] = next(slots)

    def slot(self, value: Value) -> int:
        try:
            return self._slots[value]
        except KeyError:
            raise KeyError("value not found in slot tracker") from None


class Function(GlobalValue):
    """A function with arguments and basic blocks."""

    def __init__(self, return_type: Type, name: str, args: Iterable[Argument] = ()) -> None:
        args = list(args)
        super().__init__(FunctionType.get(return_type, [arg.type for arg in args]), name)
        self.args = args
        for arg in self.args:
            arg.parent = self
        self.basic_blocks: list[BasicBlock] = []
        self.slot_tracker = SlotTracker()

    @property
    def return_type(self) -> Type:
        return self.type.return_type

    @property
    def last_basic_block(self) -> Optional[BasicBlock]:
        return self.basic_blocks[-1] if self.basic_blocks else None

    def new_basic_block(self) -> BasicBlock:
        """Create a block and append it to this function."""
        block = BasicBlock(self)
        self.insert_basic_block(block)
        return block

    def insert_basic_block(self, block: BasicBlock, before: Optional[BasicBlock] = None) -> "Function":
        block.parent = self
        _insert(self.basic_blocks, block, before)
        return self

    def remove_basic_block(self, block: BasicBlock) -> "Function":
        block.parent = None
        self.basic_blocks = [existing for existing in self.basic_blocks if existing is not block]
        return self