import io

import pytest

from tomic.errors import (
    ErrorType,
    StandardErrorLogger,
    StandardErrorMapper,
    VerboseErrorLogger,
    VerboseErrorMapper,
)


@pytest.mark.parametrize(
    "error_type, code",
    [
        (ErrorType.ERR_UNEXPECTED_TOKEN, "a"),
        (ErrorType.ERR_UNDEFINED_SYMBOL, "c"),
        (ErrorType.ERR_MISSING_RIGHT_BRACE, "z"),
        (ErrorType.ERR_PRINTF_EXTRA_ARGUMENTS, "l"),
        (ErrorType.ERR_ILLEGAL_BREAK, "m"),
        (ErrorType.ERR_ILLEGAL_CONTINUE, "m"),
    ],
)
def test_standard_mapper_codes(error_type, code):
    assert StandardErrorMapper().description(error_type) == code


def test_verbose_mapper_descriptions():
    mapper = VerboseErrorMapper()
    assert mapper.description(ErrorType.ERR_MISSING_SEMICOLON) == "Missing ;"
    assert mapper.description(ErrorType.ERR_UNKNOWN) == "Unknown error"


def test_every_error_type_has_descriptions():
    standard, verbose = StandardErrorMapper(), VerboseErrorMapper()
    for error_type in ErrorType:
        assert standard.description(error_type)
        assert verbose.description(error_type)


def test_standard_logger_requires_mapper():
    with pytest.raises(ValueError):
        StandardErrorLogger(None)


def test_standard_logger_sorts_dedupes_and_skips_unknown():
    logger = StandardErrorLogger(StandardErrorMapper())
    logger.log(5, 1, ErrorType.ERR_MISSING_SEMICOLON, "x")
    logger.log(2, 7, ErrorType.ERR_UNDEFINED_SYMBOL, "y")
    logger.log(5, 3, ErrorType.ERR_MISSING_SEMICOLON, "z")
    logger.log(2, 1, ErrorType.ERR_UNEXPECTED_TOKEN, None)
    logger.log(1, 1, ErrorType.ERR_UNKNOWN, None)
    out = io.StringIO()
    logger.dumps(out)
    assert out.getvalue() == "2 a\n2 c\n5 i\n"
    assert logger.count() == 5


def test_standard_logger_dump_is_repeatable():
    logger = StandardErrorLogger(StandardErrorMapper())
    logger.log(3, 0, ErrorType.ERR_ASSIGN_TO_CONST)
    first, second = io.StringIO(), io.StringIO()
    logger.dumps(first)
    logger.dumps(second)
    assert first.getvalue() == second.getvalue() == "3 h\n"


def test_verbose_logger_formats_messages():
    logger = VerboseErrorLogger(VerboseErrorMapper())
    logger.log(4, 9, ErrorType.ERR_UNDEFINED_SYMBOL, "symbol '%s' not found", "foo")
    out = io.StringIO()
    logger.dumps(out)
    assert out.getvalue() == (
        "Line 4, Column 9: Undefined symbol\n    symbol 'foo' not found\n"
    )


def test_verbose_logger_orders_and_removes_exact_duplicates():
    logger = VerboseErrorLogger(VerboseErrorMapper())
    logger.log(2, 5, ErrorType.ERR_MISSING_SEMICOLON, "m")
    logger.log(1, 8, ErrorType.ERR_MISSING_SEMICOLON, "m")
    logger.log(2, 5, ErrorType.ERR_MISSING_SEMICOLON, "m")
    logger.log(1, 3, ErrorType.ERR_ASSIGN_TO_CONST, None)
    out = io.StringIO()
    logger.dumps(out)
    lines = out.getvalue().splitlines()
    assert lines[0] == "Line 1, Column 3: Assign to const"
    assert lines[1] == "    "
    assert lines[2] == "Line 1, Column 8: Missing ;"
    assert lines[4] == "Line 2, Column 5: Missing ;"
    assert len(lines) == 6
    assert logger.count() == 4


def test_verbose_logger_keeps_different_messages():
    logger = VerboseErrorLogger(VerboseErrorMapper())
    logger.log(1, 1, ErrorType.ERR_UNEXPECTED_TOKEN, "first")
    logger.log(1, 1, ErrorType.ERR_UNEXPECTED_TOKEN, "second")
    out = io.StringIO()
    logger.dumps(out)
    assert out.getvalue().count("Unexpected token") == 2
    assert "    first\n" in out.getvalue()
    assert "    second\n" in out.getvalue()