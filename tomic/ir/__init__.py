"""LLVM IR types, type context, values, instructions and modules."""