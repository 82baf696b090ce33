"""Assembly writers, value printing functions and module printers for textual LLVM IR."""