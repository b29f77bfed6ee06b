
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

import numpy as np

from . import datatypes
from .errors import InvalidChannelError, TruncatedRecordError

# value = ((raw / scale) * 10^-dec_places + shift) * mul

def _physical(raw, shift, mul, scale, dec_places):
    return ((np.asarray(raw, dtype=np.float64) / scale) * 10.0 ** -dec_places + shift) * mul

def inverse(values, shift, mul, scale, dec_places):
    return (np.asarray(values, dtype=np.float64) / mul - shift) * scale / 10.0 ** -dec_places

def reconstruct(channel, buf):
    if not channel.data_ptr:
        return np.zeros(0)
    kind = datatypes.require_decodable(channel.resolved_kind, channel.name)
    if channel.scale == 0:
        raise InvalidChannelError('channel %r: scale of 0' % channel.name)

    start = channel.data_ptr
    size = channel.n_data * kind.width
    if start + size > len(buf):
        raise TruncatedRecordError('samples of %r' % channel.name, start, size, len(buf))
    raw = np.frombuffer(buf, dtype=kind.dtype, count=channel.n_data, offset=start)
    return _physical(raw, channel.shift, channel.mul, channel.scale, channel.dec_places)
