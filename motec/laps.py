
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

# Lap boundaries come from the sidecar beacons (seconds from the start
# of the log).  Every channel has its own sample rate, so a boundary is
# converted to a sample index separately for each channel.

import math

import numpy as np

from . import base
from .errors import InvalidChannelError, LapOutOfRangeError

def lap_window(lap, beacons, total_laps):
    if not 1 <= lap <= total_laps:
        raise LapOutOfRangeError('lap %d is outside 1..%d' % (lap, total_laps))
    if len(beacons) < lap:
        raise LapOutOfRangeError('lap %d has no start beacon (only %d beacons)'
                                 % (lap, len(beacons)))
    start = beacons[lap - 1]
    end = beacons[lap] if lap < len(beacons) else math.inf
    return start, end

def _index(t, rec_freq, n_data):
    if math.isinf(t):
        return n_data if t > 0 else 0
    return min(max(int(round(t * rec_freq)), 0), n_data)

def lap_indices(channel, lap, beacons, total_laps):
    start, end = lap_window(lap, beacons, total_laps)
    n_data = channel.n_data if channel.has_data else 0
    return (_index(start, channel.rec_freq, n_data),
            _index(end, channel.rec_freq, n_data))

def _values(channel):
    values = channel.samples
    if values is None:
        if channel.error is not None:
            raise channel.error
        return np.zeros(0)
    return values

def slice_for_lap(channel, lap, beacons, total_laps):
    s, e = lap_indices(channel, lap, beacons, total_laps)
    return _values(channel)[s:e]

def generate_distance(lap, beacons, speed_channel, total_laps):
    if not speed_channel.rec_freq:
        raise InvalidChannelError('channel %r has no sample rate' % speed_channel.name)
    speed = slice_for_lap(speed_channel, lap, beacons, total_laps)
    dist = np.zeros(len(speed))
    # each sample's speed is held for one sample period
    np.cumsum(speed[1:] * (1. / speed_channel.rec_freq), out=dist[1:])
    return dist

class LapSegmenter:
    def __init__(self, log, beacons, summary):
        self.log = log
        self.beacons = list(beacons)
        self.summary = summary
        self.total_laps = summary.total_laps if summary else 0

    @classmethod
    def from_session(cls, session):
        return cls(session.log, session.beacons, session.summary)

    def session_end(self):
        return max((ch.n_data / ch.rec_freq for ch in self.log.channels
                    if ch.has_data and ch.rec_freq),
                   default=0.)

    def laps(self):
        end_of_log = self.session_end()
        laps = []
        for lap in range(1, min(self.total_laps, len(self.beacons)) + 1):
            start, end = lap_window(lap, self.beacons, self.total_laps)
            laps.append(base.Lap(lap, start, end if end != math.inf else max(end_of_log, start)))
        return laps

    def lap_times(self):
        """Duration of each lap in seconds; the open last lap runs to the end of the log."""
        return [lap.duration for lap in self.laps()]

    def lap_channel(self, lap, name):
        return slice_for_lap(self.log.channel(name), lap, self.beacons, self.total_laps)

    def lap_distance(self, lap, speed_name='SPEED'):
        return generate_distance(lap, self.beacons, self.log.channel(speed_name),
                                 self.total_laps)

    def fastest(self):
        if not self.summary or not self.summary.fastest_lap:
            return None
        return self.summary.fastest_lap, self.summary.fastest_time
