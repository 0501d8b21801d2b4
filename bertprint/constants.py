"""Shared constant values for the bertprint decoder and printer."""

MAGIC_NUMBER = 131

NEW_FLOAT_EXT = 70
SMALL_INTEGER_EXT = 97
INTEGER_EXT = 98
FLOAT_EXT = 99
ATOM_EXT = 100
SMALL_TUPLE_EXT = 104
LARGE_TUPLE_EXT = 105
NIL_EXT = 106
STRING_EXT = 107
LIST_EXT = 108
BINARY_EXT = 109
SMALL_BIG_EXT = 110
LARGE_BIG_EXT = 111
SMALL_ATOM_EXT = 115
MAP_EXT = 116
ATOM_UTF8_EXT = 118
SMALL_ATOM_UTF8_EXT = 119

TAG_NAMES = {
    NEW_FLOAT_EXT: "NEW_FLOAT_EXT",
    SMALL_INTEGER_EXT: "SMALL_INTEGER_EXT",
    INTEGER_EXT: "INTEGER_EXT",
    FLOAT_EXT: "FLOAT_EXT",
    ATOM_EXT: "ATOM_EXT",
    SMALL_TUPLE_EXT: "SMALL_TUPLE_EXT",
    LARGE_TUPLE_EXT: "LARGE_TUPLE_EXT",
    NIL_EXT: "NIL_EXT",
    STRING_EXT: "STRING_EXT",
    LIST_EXT: "LIST_EXT",
    BINARY_EXT: "BINARY_EXT",
    SMALL_BIG_EXT: "SMALL_BIG_EXT",
    LARGE_BIG_EXT: "LARGE_BIG_EXT",
    SMALL_ATOM_EXT: "SMALL_ATOM_EXT",
    MAP_EXT: "MAP_EXT",
    ATOM_UTF8_EXT: "ATOM_UTF8_EXT",
    SMALL_ATOM_UTF8_EXT: "SMALL_ATOM_UTF8_EXT",
}

# Legacy FLOAT_EXT payloads are a fixed-width, NUL-padded "%.20e" string.
FLOAT_EXT_WIDTH = 31
VARINT_MAX_BYTES = 8

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

DEFAULT_INDENT_WIDTH = 2
DEFAULT_MAX_TERMS_PER_LINE = 4

PROGRAM_NAME = "bertprint"

KIND_COLORS = {
    "nil": "#B0BEC5",
    "int": "#8BC34A",
    "bigint": "#8BC34A",
    "float": "#AED581",
    "atom": "#FFEB3B",
    "string": "#FF7043",
    "binary": "#FFAB91",
    "tuple": "#9575CD",
    "list": "#80CBC4",
    "map": "#F8BBD0",
}

__all__ = [
    "MAGIC_NUMBER",
    "NEW_FLOAT_EXT",
    "SMALL_INTEGER_EXT",
    "INTEGER_EXT",
    "FLOAT_EXT",
    "ATOM_EXT",
    "SMALL_TUPLE_EXT",
    "LARGE_TUPLE_EXT",
    "NIL_EXT",
    "STRING_EXT",
    "LIST_EXT",
    "BINARY_EXT",
    "SMALL_BIG_EXT",
    "LARGE_BIG_EXT",
    "SMALL_ATOM_EXT",
    "MAP_EXT",
    "ATOM_UTF8_EXT",
    "SMALL_ATOM_UTF8_EXT",
    "TAG_NAMES",
    "FLOAT_EXT_WIDTH",
    "VARINT_MAX_BYTES",
    "INT32_MIN",
    "INT32_MAX",
    "DEFAULT_INDENT_WIDTH",
    "DEFAULT_MAX_TERMS_PER_LINE",
    "PROGRAM_NAME",
    "KIND_COLORS",
]
