
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

# The .ldx file next to each .ld is a small XML document.  All we care
# about are the beacon markers (lap start times) and a few summary
# strings from the Details block.

from dataclasses import dataclass
import logging
import typing
from xml.etree import ElementTree

import dacite

from .errors import SidecarError

_logger = logging.getLogger(__name__)

@dataclass(eq=False)
class SessionSummary:
    total_laps: int
    fastest_lap: int = 0 # 1-based, 0 if unknown
    fastest_time: str = ''

@dataclass(eq=False)
class Sidecar:
    beacons: typing.List[float] # seconds, index 0 is the session start
    summary: SessionSummary

_detail_ids = {
    'Total Laps': 'total_laps',
    'Fastest Lap': 'fastest_lap',
    'Fastest Time': 'fastest_time',
}

def _marker_group(root):
    groups = root.findall('./Layers/Layer/MarkerBlock/MarkerGroup')
    for group in groups:
        if group.get('Name') == 'Beacons':
            return group
    return groups[0] if groups else None

def _beacons(root):
    beacons = []
    group = _marker_group(root)
    if group is None:
        return beacons
    for marker in group.iterfind('Marker'):
        try:
            beacons.append(float(marker.get('Time')) / 1e6) # stored in microseconds
        except (TypeError, ValueError) as e:
            raise SidecarError('bad marker time %r' % marker.get('Time')) from e
    if any(b < a for a, b in zip(beacons[:-1], beacons[1:])):
        raise SidecarError('beacon times are not in order')
    return beacons

def _details(root):
    details = {}
    for s in root.iterfind('./Layers/Details/String'):
        key = _detail_ids.get(s.get('Id'))
        if key and s.get('Value'):
            details[key] = s.get('Value')
    return details

def parse_ldx(text):
    try:
        root = ElementTree.fromstring(text)
    except ElementTree.ParseError as e:
        raise SidecarError('unreadable sidecar: %s' % e) from e
    if root.tag != 'LDXFile':
        raise SidecarError('not an ldx file (root element %r)' % root.tag)

    beacons = _beacons(root)
    details = _details(root)
    if 'total_laps' not in details:
        _logger.warning('Sidecar has no lap count, deriving it from %d beacons', len(beacons))
        details['total_laps'] = max(len(beacons) - 1, 0)
    try:
        summary = dacite.from_dict(data_class=SessionSummary,
                                   data=details,
                                   config=dacite.Config(cast=[int]))
    except (ValueError, dacite.DaciteError) as e:
        raise SidecarError('bad session details: %s' % e) from e
    return Sidecar(beacons, summary)

def read_ldx(fname):
    with open(fname, 'rb') as f:
        return parse_ldx(f.read())
