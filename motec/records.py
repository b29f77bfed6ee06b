
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

# .ld files are a handful of fixed size records tied together by file
# offsets.  Each layout below lists every byte of its record in order,
# unknown regions included as skip fields, so the offset column can be
# checked against a hex dump.

from dataclasses import dataclass
import struct
import typing

from .errors import TruncatedRecordError

@dataclass(frozen=True)
class Field:
    name: typing.Optional[str] # None for skipped bytes
    code: str # struct code
    width: int
    text: bool = False

def _value(code):
    return lambda name: Field(name, code, struct.calcsize('<' + code))

u8 = _value('B')
u16 = _value('H')
u32 = _value('I')
u64 = _value('Q')
i8 = _value('b')
i16 = _value('h')
i32 = _value('i')
i64 = _value('q')

def text(name, width):
    return Field(name, '%ds' % width, width, text=True)

def skip(width):
    return Field(None, '%dx' % width, width)

def decode_text(raw):
    idx = raw.find(b'\0')
    if idx >= 0:
        raw = raw[:idx]
    return raw.decode('latin-1')

class Layout:
    def __init__(self, name, fields):
        self.name = name
        self.fields = tuple(fields)
        self._struct = struct.Struct('<' + ''.join(f.code for f in self.fields))
        self._named = [f for f in self.fields if f.name is not None]
        assert self._struct.size == sum(f.width for f in self.fields)

    @property
    def size(self):
        return self._struct.size

    def offset_of(self, name):
        offs = 0
        for f in self.fields:
            if f.name == name:
                return offs
            offs += f.width
        raise KeyError(name)

    def decode(self, buf, offset):
        if offset < 0 or offset + self.size > len(buf):
            raise TruncatedRecordError(self.name, offset, self.size, len(buf))
        values = self._struct.unpack_from(buf, offset)
        return {f.name: decode_text(v) if f.text else v
                for f, v in zip(self._named, values)}

def decode_record(buf, offset, layout):
    return layout.decode(buf, offset)

header_layout = Layout('header', [
    u32('ldmarker'),          # 0
    skip(4),
    u32('chann_meta_ptr'),    # 8
    u32('chann_data_ptr'),    # 12
    skip(20),
    u32('event_ptr'),         # 36
    skip(24),
    skip(6),                  # 64, three u16 that never change
    u32('device_serial'),     # 70
    text('device_type', 8),   # 74
    u16('device_version'),    # 82
    skip(2),
    u32('num_channs'),        # 86
    skip(4),
    text('date', 16),         # 94
    skip(16),
    text('time', 16),         # 126
    skip(16),
    text('driver', 64),       # 158
    text('vehicleid', 64),    # 222
    skip(64),
    text('venue', 64),        # 350
    skip(64),
    skip(1024),
    u32('pro_logging'),       # 1502
    skip(2),
    text('session', 64),      # 1508
    text('short_comment', 64),# 1572
    skip(126),
])

event_layout = Layout('event', [
    text('name', 64),         # 0
    text('session', 64),      # 64
    text('comment', 1024),    # 128
    u16('venue_ptr'),         # 1152
])

venue_layout = Layout('venue', [
    text('name', 64),         # 0
    skip(1034),
    u16('vehicle_ptr'),       # 1098
])

vehicle_layout = Layout('vehicle', [
    text('id', 64),           # 0
    text('desc', 64),         # 64, length is a guess
    skip(64),
    u32('weight'),            # 192
    text('type', 32),         # 196
    text('comment', 32),      # 228
])

channel_layout = Layout('channel', [
    u32('prev_ptr'),          # 0
    u32('next_ptr'),          # 4
    u32('data_ptr'),          # 8
    u32('n_data'),            # 12
    u16('counter'),           # 16
    u16('datatypeA'),         # 18
    u16('datatype'),          # 20
    u16('rec_freq'),          # 22
    i16('shift'),             # 24
    i16('mul'),               # 26
    i16('scale'),             # 28
    i16('dec_places'),        # 30
    text('name', 32),         # 32
    text('short_name', 8),    # 64
    text('unit', 12),         # 72
    skip(40),                 # 84, 32 used on some loggers
])
