
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

import enum

import numpy as np

from .errors import UnsupportedTypeError

class NumericKind(enum.Enum):
    # value = (width in bytes, little endian numpy dtype)
    INT16 = (2, '<i2')
    INT32 = (4, '<i4')
    FLOAT16 = (2, '<f2')
    FLOAT32 = (4, '<f4')
    UNRESOLVED = (None, None)

    @property
    def width(self):
        return self.value[0]

    @property
    def dtype(self):
        return np.dtype(self.value[1]) if self.value[1] else None

U = NumericKind.UNRESOLVED

# Indexed by type code - 1.  Only even codes (the byte width) are ever seen.
_float_codes = (U, NumericKind.FLOAT16, U, NumericKind.FLOAT32)
_int_codes = (U, NumericKind.INT16, U, NumericKind.INT32)

_class_table = {
    0x00: _int_codes,
    0x03: _int_codes,
    0x05: _int_codes,
    0x07: _float_codes,
}

def resolve(type_class, type_code):
    codes = _class_table.get(type_class)
    if codes is None or not 1 <= type_code <= len(codes):
        return U
    return codes[type_code - 1]

def require_decodable(kind, name=''):
    if kind is U:
        raise UnsupportedTypeError('channel %r: unknown sample type' % name)
    if kind is NumericKind.FLOAT16:
        # recognized kind, but decoding is not implemented
        raise UnsupportedTypeError('channel %r: float16 samples are not supported' % name)
    return kind
