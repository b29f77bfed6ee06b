
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

from dataclasses import dataclass, field
import logging
import typing

import numpy as np

from . import datatypes
from . import ldx
from . import samples
from .errors import InvalidChannelError, UnsupportedTypeError

_logger = logging.getLogger(__name__)

@dataclass(eq=False)
class Header:
    ldmarker: int
    chann_meta_ptr: int
    chann_data_ptr: int # informational only
    event_ptr: int
    device_serial: int
    device_type: str
    device_version: int # hundredths
    num_channs: int # advisory, may not match the channel list
    date: str
    time: str
    driver: str
    vehicleid: str
    venue: str
    pro_logging: int
    session: str
    short_comment: str

@dataclass(eq=False)
class Vehicle:
    id: str
    desc: str
    weight: int
    type: str
    comment: str

@dataclass(eq=False)
class Venue:
    name: str
    vehicle_ptr: int
    vehicle: typing.Optional[Vehicle] = None

@dataclass(eq=False)
class Event:
    name: str
    session: str
    comment: str
    venue_ptr: int
    venue: typing.Optional[Venue] = None

@dataclass(eq=False)
class Channel:
    prev_ptr: int
    next_ptr: int
    data_ptr: int
    n_data: int
    counter: int
    datatypeA: int
    datatype: int
    rec_freq: int
    shift: int
    mul: int
    scale: int
    dec_places: int
    name: str
    short_name: str
    unit: str
    offset: int = 0 # where this record lives in the buffer
    buffer: typing.Any = field(default=None, repr=False)
    error: typing.Optional[Exception] = None
    _samples: typing.Optional[np.ndarray] = field(default=None, repr=False)
    _loaded: bool = field(default=False, repr=False)

    @property
    def resolved_kind(self):
        return datatypes.resolve(self.datatypeA, self.datatype)

    @property
    def has_data(self):
        return self.data_ptr != 0

    @property
    def samples(self):
        """Physical values, or None if the channel has none or they can't be decoded."""
        if not self._loaded:
            self.load_samples()
        return self._samples

    def load_samples(self):
        if self._loaded:
            return self._samples
        values = None
        if self.has_data:
            try:
                values = samples.reconstruct(self, self.buffer)
            except (UnsupportedTypeError, InvalidChannelError) as e:
                _logger.warning('Skipping samples of channel %r: %s', self.name, e)
                self.error = e
        # filled at most once
        self._samples = values
        self._loaded = True
        return values

@dataclass(eq=False)
class LogFile:
    header: Header
    event: typing.Optional[Event]
    channels: typing.List[Channel]
    buffer: typing.Any = field(default=None, repr=False)

    def channel(self, name):
        for ch in self.channels:
            if ch.name == name:
                return ch
        raise KeyError(name)

    def channel_names(self):
        return [ch.name for ch in self.channels]

    def metadata(self):
        h = self.header
        metadata = {}
        metadata['Device Serial'] = h.device_serial
        metadata['Device Type'] = h.device_type
        metadata['Device Version'] = '%.2f' % (h.device_version / 100)
        metadata['Log Date'] = h.date
        metadata['Log Time'] = h.time
        metadata['Driver'] = h.driver
        metadata['Vehicle'] = h.vehicleid
        metadata['Venue'] = h.venue
        metadata['Session'] = h.session
        metadata['Short Comment'] = h.short_comment
        if self.event:
            metadata['Event Name'] = self.event.name
            metadata['Event Session'] = self.event.session
            metadata['Long Comment'] = self.event.comment
            venue = self.event.venue
            if venue:
                metadata['Venue Name'] = venue.name
                vehicle = venue.vehicle
                if vehicle:
                    metadata['Vehicle Id'] = vehicle.id
                    metadata['Vehicle Desc'] = vehicle.desc
                    _set_if(metadata, 'Vehicle Weight', vehicle.weight)
                    _set_if(metadata, 'Vehicle Type', vehicle.type)
                    _set_if(metadata, 'Vehicle Comment', vehicle.comment)
        return metadata

def _set_if(meta, name, val):
    if val:
        meta[name] = val

@dataclass(eq=False)
class Lap:
    num: int # 1-based
    start_time: float # seconds
    end_time: float

    @property
    def duration(self):
        return self.end_time - self.start_time

@dataclass(eq=False)
class Session:
    log: LogFile
    beacons: typing.List[float]
    summary: typing.Optional[ldx.SessionSummary]
    file_name: str
