# tomic

These are building blocks for the back end of a small compiler for a C-like
teaching language. The package has no dependencies outside the standard
library.

## What is in the package

- **Debug logging** (`tomic.logger`): `LogLevel`, `log_level_to_string`,
  `DefaultLogger` and `DumbLogger`. `DefaultLogger` writes `[Level] message`
  lines for messages at or above its `level`, and only when it has a
  `writer`. `DumbLogger` writes nothing. Both loggers count every message
  per level through `count(level)`.
- **Compile errors** (`tomic.errors`): `ErrorType` names the error kinds.
  `StandardErrorMapper` maps each kind to a one-letter code and
  `VerboseErrorMapper` maps it to a readable description. There are two
  loggers:
  - `StandardErrorLogger` dumps one `line code` row per distinct error,
    sorted by line and then type. It leaves out unknown errors.
  - `VerboseErrorLogger` dumps `Line L, Column C: description` followed by
    the indented message. It sorts by line, column and type, and drops exact
    duplicates.
- **Symbol table entries** (`tomic.symbols`): `VariableEntry`,
  `ConstantEntry` and `FunctionEntry` (with `FunctionParam`). Variables and
  constants can be scalars or arrays of up to two dimensions.
- **IR types** (`tomic.ir.types`, `tomic.ir.context`): `IntegerType`
  (`i8`, `i32`), `FunctionType`, `ArrayType`, `PointerType`, and the void
  and label types. An `LlvmContext` interns them, so equal types are the
  same object.
- **IR values** (`tomic.ir.values`): `ConstantData` (an integer, or an
  array built with `ConstantData.array`), `GlobalVariable`, `GlobalString`,
  `Argument`, `BasicBlock`, `Function` and `SlotTracker`.
  - Global strings are named `.str`, `.str.1`, ... per context.
  - `SlotTracker` numbers a function's arguments, blocks and non-void
    instructions.
- **Instructions** (`tomic.ir.instructions`): `AllocaInst`, `LoadInst`,
  `StoreInst`, `ReturnInst`, `CallInst`, `UnaryOperator`, `BinaryOperator`,
  plus `InputInst` (`getint`) and `OutputInst` (`putint` / `putstr`).
- **Modules** (`tomic.ir.module`): `Module` holds global variables, global
  strings, functions and an optional main function, all sharing one
  context. A module created without a name is called
  `Default LLVM Module`.
- **Assembly output**:
  - `tomic.asm.writer` has `StandardAsmWriter`, which drops everything
    written inside a comment, and `VerboseAsmWriter`, which writes `; `
    comments.
  - `tomic.asm.printer` has `print_asm`, `print_name` and `print_use` for
    single values.
  - `StandardAsmPrinter` and `VerboseAsmPrinter` print a whole `Module`
    to a text stream. The verbose printer adds a commented header, the
    module id, a `source_filename` line and a closing comment.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import io

from tomic.ir.module import Module
from tomic.ir.types import IntegerType
from tomic.ir.values import Function, ConstantData
from tomic.ir.instructions import ReturnInst
from tomic.asm.printer import StandardAsmPrinter

module = Module("demo")
ctx = module.context
i32 = IntegerType.get(ctx, 32)

main = Function(i32, "main")
block = main.new_basic_block()
block.insert_instruction(ReturnInst(ctx, ConstantData(i32, 0)))
module.set_main_function(main)

out = io.StringIO()
StandardAsmPrinter().print(module, out)
print(out.getvalue())
```

The output is laid out in this order:

1. The runtime library declarations (`getint`, `putint`, `putstr`).
2. Global variables.
3. String constants.
4. Functions, with `main` last.

A void function whose last block does not end in `ret` gets a `ret void`
appended when it is printed.

Error reporting:

```python
import io

from tomic.errors import ErrorType, StandardErrorLogger, StandardErrorMapper

log = StandardErrorLogger(StandardErrorMapper())
log.log(3, 1, ErrorType.ERR_MISSING_SEMICOLON, "expected ';'")
buf = io.StringIO()
log.dumps(buf)
assert buf.getvalue() == "3 i\n"
```

## What the package does not do

The package has no lexer, no parser and no semantic analyser. It also does
not generate IR from source text. IR is built by hand through the classes
above, and symbol table entries are plain objects with no table or scope
structure around them. There is no command-line program. The package
prints LLVM IR text but does not assemble, optimise or run it.