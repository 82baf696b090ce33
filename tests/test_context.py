import pytest

from tomic.ir.context import LlvmContext


@pytest.fixture
def ctx():
    return LlvmContext()


def test_basic_types(ctx):
    assert ctx.void_type.is_void
    assert ctx.label_type.is_label
    assert ctx.int8_type.bit_width == 8
    assert ctx.int32_type.bit_width == 32
    assert ctx.int32_type.context is ctx


def test_array_types_interned(ctx):
    a = ctx.get_array_type(ctx.int32_type, 4)
    assert ctx.get_array_type(ctx.int32_type, 4) is a
    assert ctx.get_array_type(ctx.int32_type, 5) is not a
    assert ctx.get_array_type(ctx.int8_type, 4) is not a
    assert a.element_count == 4


def test_pointer_types_interned(ctx):
    p = ctx.get_pointer_type(ctx.int32_type)
    assert ctx.get_pointer_type(ctx.int32_type) is p
    assert ctx.get_pointer_type(ctx.int8_type) is not p
    assert p.element_type is ctx.int32_type


def test_function_types_interned(ctx):
    f = ctx.get_function_type(ctx.int32_type, [ctx.int32_type, ctx.int8_type])
    assert ctx.get_function_type(ctx.int32_type, (ctx.int32_type, ctx.int8_type)) is f
    assert ctx.get_function_type(ctx.void_type, [ctx.int32_type, ctx.int8_type]) is not f
    assert ctx.get_function_type(ctx.int32_type, [ctx.int32_type]) is not f


def test_function_type_without_params(ctx):
    f = ctx.get_function_type(ctx.int32_type)
    assert ctx.get_function_type(ctx.int32_type, []) is f
    assert f.param_count == 0


def test_contexts_are_independent():
    first = LlvmContext()
    second = LlvmContext()
    assert first.get_pointer_type(first.int32_type) is not second.get_pointer_type(second.int32_type)