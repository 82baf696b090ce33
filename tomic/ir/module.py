"""An IR module: globals, strings and functions sharing one context."""

from __future__ import annotations

from typing import Optional

from tomic.ir.context import LlvmContext

DEFAULT_MODULE_NAME = "Default LLVM Module"


class Module:
    """Top-level container of IR."""

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name if name is not None else DEFAULT_MODULE_NAME
        self.context = LlvmContext()
        self.global_variables: list = []
        self.global_strings: list = []
        self.functions: list = []
        self.main_function = None

    def add_global_variable(self, variable) -> None:
        variable.parent = self
        self.global_variables.append(variable)

    def add_global_string(self, string) -> None:
        string.parent = self
        self.global_strings.append(string)

    def add_function(self, function) -> None:
        function.parent = self
        self.functions.append(function)

    def set_main_function(self, function) -> None:
        function.parent = self
        self.main_function = function