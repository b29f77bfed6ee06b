
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

import logging
import os

from . import base
from . import ldx
from . import records
from .errors import CorruptChannelListError

_logger = logging.getLogger(__name__)

LD_MARKER = 0x40

def _decode_event(s, event_addr):
    # event -> venue -> vehicle, each optional
    event = base.Event(**records.decode_record(s, event_addr, records.event_layout))
    if event.venue_ptr:
        event.venue = base.Venue(**records.decode_record(s, event.venue_ptr, records.venue_layout))
        if event.venue.vehicle_ptr:
            event.venue.vehicle = base.Vehicle(
                **records.decode_record(s, event.venue.vehicle_ptr, records.vehicle_layout))
    return event

def _walk_channels(s, addr):
    channels = []
    seen = set()
    while addr:
        if addr in seen:
            raise CorruptChannelListError('channel list loops back to offset %d after %d channels'
                                          % (addr, len(channels)))
        seen.add(addr)
        ch = base.Channel(**records.decode_record(s, addr, records.channel_layout), offset=addr, buffer=s)
        _logger.debug('channel %r at %d: %d samples @ %d Hz', ch.name, addr, ch.n_data, ch.rec_freq)
        channels.append(ch)
        addr = ch.next_ptr
    return channels

def decode(s, load_samples=True):
    header = base.Header(**records.decode_record(s, 0, records.header_layout))
    if header.ldmarker != LD_MARKER:
        _logger.warning('Unexpected ld marker 0x%x', header.ldmarker)

    event = _decode_event(s, header.event_ptr) if header.event_ptr else None
    channels = _walk_channels(s, header.chann_meta_ptr)

    if len(channels) != header.num_channs:
        _logger.debug('Header claims %d channels, list has %d', header.num_channs, len(channels))
    names = set()
    for ch in channels:
        if ch.name in names:
            _logger.warning('Duplicate channel %r, only the first is reachable by name', ch.name)
        names.add(ch.name)

    if load_samples:
        for ch in channels:
            ch.load_samples()

    return base.LogFile(header, event, channels, s)

def sidecar_name(fname):
    return fname + 'x'

def load(fname, ldx_name=None, load_samples=True):
    """Read an .ld file along with its .ldx sidecar.

    Either file name may be given; the other is found next to it.
    """
    if fname.lower().endswith('.ldx'):
        ldx_name = ldx_name or fname
        fname = fname[:-1]
    ldx_name = ldx_name or sidecar_name(fname)

    with open(fname, 'rb') as f:
        log = decode(f.read(), load_samples)

    if os.path.exists(ldx_name):
        sidecar = ldx.read_ldx(ldx_name)
        beacons, summary = sidecar.beacons, sidecar.summary
    else:
        _logger.warning('No sidecar %s, laps unavailable', ldx_name)
        beacons, summary = [], None

    return base.Session(log, beacons, summary, fname)
