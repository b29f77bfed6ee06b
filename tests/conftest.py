import struct

import pytest

from motec import records

# (datatypeA, datatype) matching each struct code used for raw samples
_TYPE_CODES = {
    'h': (3, 2),
    'i': (3, 4),
    'f': (7, 4),
    'e': (7, 2),
}

HEADER_DEFAULTS = dict(
    ldmarker=0x40,
    chann_data_ptr=0,
    device_serial=12345,
    device_type='ADL',
    device_version=420,
    num_channs=None, # filled from the channel list
    date='10/09/2024',
    time='18:59:58',
    driver='Test Driver',
    vehicleid='bmw_m4_gt3',
    venue='Spa',
    pro_logging=0xc81a4,
    session='Race',
    short_comment='stint 1',
)

def pack(layout, **values):
    """Encode one record; unnamed fields are left as zero padding."""
    args = []
    for f in layout.fields:
        if f.name is None:
            continue
        v = values.get(f.name, '' if f.text else 0)
        args.append(v.encode('latin-1') if f.text else v)
    return struct.pack('<' + ''.join(f.code for f in layout.fields), *args)

def build_ld(channels=(), event=None, venue=None, vehicle=None, **header):
    """Lay out a complete .ld buffer.

    Records are placed back to back after the header: event, venue,
    vehicle, the channel records, then the sample arrays.  A channel may
    give 'next_index' to point its next_ptr at another channel of the
    list (None for the end of the list) instead of the natural order.
    """
    pos = records.header_layout.size
    event_ptr = venue_ptr = vehicle_ptr = 0
    if event is not None:
        event_ptr, pos = pos, pos + records.event_layout.size
    if venue is not None:
        venue_ptr, pos = pos, pos + records.venue_layout.size
    if vehicle is not None:
        vehicle_ptr, pos = pos, pos + records.vehicle_layout.size
    chan_ptrs = []
    for _ in channels:
        chan_ptrs.append(pos)
        pos += records.channel_layout.size

    data = bytearray()
    chan_recs = []
    for i, ch in enumerate(channels):
        ch = dict(ch)
        fmt = ch.pop('fmt', 'h')
        raw = ch.pop('raw', None)
        type_a, type_code = _TYPE_CODES[fmt]
        fields = dict(datatypeA=type_a, datatype=type_code, rec_freq=10, mul=1, scale=1)
        if raw is not None:
            fields['data_ptr'] = pos + len(data)
            fields['n_data'] = len(raw)
            data += struct.pack('<%d%s' % (len(raw), fmt), *raw)
        fields['prev_ptr'] = chan_ptrs[i - 1] if i > 0 else 0
        fields['next_ptr'] = chan_ptrs[i + 1] if i + 1 < len(chan_ptrs) else 0
        if 'next_index' in ch:
            nxt = ch.pop('next_index')
            fields['next_ptr'] = 0 if nxt is None else chan_ptrs[nxt]
        fields.update(ch)
        chan_recs.append(pack(records.channel_layout, **fields))

    head = dict(HEADER_DEFAULTS)
    head.update(chann_meta_ptr=chan_ptrs[0] if chan_ptrs else 0,
                event_ptr=event_ptr,
                num_channs=len(chan_recs))
    head.update(header)

    out = bytearray(pack(records.header_layout, **head))
    if event is not None:
        out += pack(records.event_layout, venue_ptr=venue_ptr, **event)
    if venue is not None:
        out += pack(records.venue_layout, vehicle_ptr=vehicle_ptr, **venue)
    if vehicle is not None:
        out += pack(records.vehicle_layout, **vehicle)
    for rec in chan_recs:
        out += rec
    out += data
    return bytes(out)

LDX_TEMPLATE = '''<?xml version="1.0"?>
<LDXFile Locale="English_United States.1252" DefaultLocale="C" Version="1.6">
 <Layers>
  <Layer>
   <MarkerBlock>
    <MarkerGroup Name="Beacons" Index="3">
%s
    </MarkerGroup>
   </MarkerBlock>
  </Layer>
  <Details>
%s
  </Details>
 </Layers>
</LDXFile>
'''

def build_ldx(beacons, details):
    markers = '\n'.join('     <Marker Version="100" ClassName="BCN" Name="Manual.%d" '
                        'Flags="77" Time="%f"/>' % (i, t * 1e6)
                        for i, t in enumerate(beacons))
    strings = '\n'.join('   <String Id="%s" Value="%s"/>' % (k, v) for k, v in details.items())
    return LDX_TEMPLATE % (markers, strings)

@pytest.fixture
def make_ld():
    return build_ld

@pytest.fixture
def make_ldx():
    return build_ldx

@pytest.fixture
def lap_log():
    """Three laps of a 100 Hz speed channel and a 20 Hz throttle channel."""
    return build_ld([
        dict(name='SPEED', unit='m/s', rec_freq=100, raw=[v % 50 for v in range(3000)]),
        dict(name='THROTTLE', unit='%', rec_freq=20, raw=list(range(600))),
        dict(name='GEAR', unit='', rec_freq=10),
    ])
