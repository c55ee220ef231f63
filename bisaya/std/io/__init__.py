import re
from typing import Any, Callable, List, Optional, Tuple

from .basic_io import BasicIO
from bisaya.errors import BisayaError, ErrorVal
from bisaya.types import CharVal, TypeSpec, TRUE_LITERAL, FALSE_LITERAL

# Decimal syntax accepted for NUMERO input
NUMBER_PATTERN = re.compile(
    r'[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)[fFdD]?'
)


def split_fields(line: str) -> List[str]:
    """Split an input line on commas and trim every field.

    Trailing empty fields are dropped, so `"5,"` holds a single field
    while `"5, "` holds two.
    """
    if ',' not in line:
        return [line.strip()]
    fields = line.split(',')
    while fields and fields[-1] == '':
        fields.pop()
    return [field.strip() for field in fields]


def parse_number(text: str) -> float:
    if not NUMBER_PATTERN.fullmatch(text):
        raise ValueError(f'not a number: {text!r}')
    return float(text.rstrip('fFdD'))


def coerce_field(name: str, text: str, type_spec: Optional[TypeSpec]) -> Any:
    """Convert one trimmed input field according to the declared type."""
    if type_spec is None:
        return text
    if type_spec.kind == 'Number':
        try:
            return parse_number(text)
        except ValueError:
            raise BisayaError(ErrorVal('InputFormatError', f'invalid input format for variable {name}: {text}'))
    if type_spec.kind == 'Boolean':
        if text.upper() == TRUE_LITERAL:
            return TRUE_LITERAL
        if text.upper() == FALSE_LITERAL:
            return FALSE_LITERAL
        raise BisayaError(ErrorVal(
            'InputFormatError',
            f"invalid input for TINUOD variable '{name}': '{text}' is not '{TRUE_LITERAL}' or '{FALSE_LITERAL}'",
        ))
    if type_spec.kind == 'Character':
        if len(text) == 1:
            return CharVal(text)
        raise BisayaError(ErrorVal(
            'InputFormatError',
            f"invalid input for LETRA variable '{name}': '{text}' is not a single character",
        ))
    # TIPIK and untyped fields keep the trimmed text
    return text


def read_typed_values(basic_io: BasicIO, names: List[str],
                      lookup_type: Callable[[str], Optional[TypeSpec]]) -> List[Tuple[str, Any]]:
    """Read one line and coerce each field for the DAWAT statement.

    Returns (name, value) pairs in target order; nothing is bound when
    any field fails.
    """
    fields = split_fields(basic_io.read_line())
    if len(fields) != len(names):
        raise BisayaError(ErrorVal('InputArityError', f'expected {len(names)} values, got {len(fields)}'))
    return [(name, coerce_field(name, text, lookup_type(name))) for name, text in zip(names, fields)]


__all__ = [
    'BasicIO',
    'split_fields',
    'parse_number',
    'coerce_field',
    'read_typed_values',
]
