#!/usr/bin/env python3

# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

import argparse
import configparser
import json
import logging
import os
import sys

from motec import laps
from motec import ld
from motec import unitconv
from motec.errors import LDError
from version import version

_logger = logging.getLogger('ldexport')

DEFAULTS = {
    'channels': 'SPEED,BRAKE,STEERANGLE,THROTTLE,GEAR',
    'speed_channel': 'SPEED',
    'speed_unit': 'km/h',
    'distance': 'yes',
    'log_level': 'WARNING',
}

def read_config(fname=None):
    config = configparser.ConfigParser()
    config['export'] = DEFAULTS # base structure initialization
    if fname:
        if not config.read(fname):
            raise FileNotFoundError(fname)
    return config['export']

def _file_name(channel_name):
    return channel_name.replace('/', '_')

def _write_values(fname, values):
    # CRLF separated, one value per line
    with open(fname, 'w', newline='') as f:
        f.write('\r\n'.join(repr(float(v)) for v in values))

def _describe(session):
    log = session.log
    event = None
    if log.event:
        venue = log.event.venue
        event = {'name': log.event.name,
                 'session': log.event.session,
                 'comment': log.event.comment,
                 'venue': venue and {
                     'name': venue.name,
                     'vehicle': venue.vehicle and {
                         'id': venue.vehicle.id,
                         'desc': venue.vehicle.desc,
                         'weight': venue.vehicle.weight,
                         'type': venue.vehicle.type,
                         'comment': venue.vehicle.comment}}}
    return {
        'header': vars(log.header),
        'event': event,
        'metadata': log.metadata(),
        'channels': [{'name': ch.name,
                      'short_name': ch.short_name,
                      'unit': ch.unit,
                      'rec_freq': ch.rec_freq,
                      'n_data': ch.n_data,
                      'kind': ch.resolved_kind.name,
                      'has_data': ch.samples is not None,
                      'error': str(ch.error) if ch.error else None}
                     for ch in log.channels],
        'beacons': session.beacons,
        'totalLaps': session.summary.total_laps if session.summary else None,
        'fastestLap': session.summary.fastest_lap if session.summary else None,
        'fastestTime': session.summary.fastest_time if session.summary else None,
    }

def _display(values, unit, display_unit):
    unit = unit or 'm/s'
    converted = None
    if unitconv.known(unit) and unitconv.known(display_unit):
        converted = unitconv.convert(values, unit, display_unit)
    if converted is None:
        _logger.warning("Can't convert %r to %r, exporting as recorded", unit, display_unit)
        return values
    return converted

def export(session, outdir, options):
    os.makedirs(os.path.join(outdir, 'channels'), exist_ok=True)
    with open(os.path.join(outdir, 'data.json'), 'w') as f:
        json.dump(_describe(session), f, indent=2)

    names = set()
    for ch in session.log.channels:
        if ch.samples is None or ch.name in names:
            continue
        names.add(ch.name)
        _write_values(os.path.join(outdir, 'channels', _file_name(ch.name) + '.txt'),
                      ch.samples)

    if not session.summary:
        return
    seg = laps.LapSegmenter.from_session(session)
    wanted = [c.strip() for c in options['channels'].split(',') if c.strip()]
    speed_name = options['speed_channel']
    for lap in seg.laps():
        _logger.info('Lap %d data saving...', lap.num)
        for name in wanted:
            if name not in names:
                _logger.warning('Channel %r not in log, skipping', name)
                continue
            values = seg.lap_channel(lap.num, name)
            if name == speed_name:
                values = _display(values, session.log.channel(name).unit, options['speed_unit'])
            _write_values(os.path.join(outdir, 'lap-%d-%s.txt' % (lap.num, _file_name(name))),
                          values)
        if options.getboolean('distance') and speed_name in names:
            dist = seg.lap_distance(lap.num, speed_name)
            # speed unit times seconds; m/s gives meters
            dist = _display(dist, session.log.channel(speed_name).unit, 'm/s')
            _write_values(os.path.join(outdir, 'lap-%d-DISTANCE.txt' % lap.num), dist)

def main(argv=None):
    parser = argparse.ArgumentParser(description='Export MoTeC .ld/.ldx logs to text and JSON')
    parser.add_argument('file', help='.ld or .ldx file')
    parser.add_argument('-o', '--output-dir', default='parsed')
    parser.add_argument('-c', '--config', help='INI file with an [export] section')
    parser.add_argument('--channels', help='comma separated channels to export per lap')
    parser.add_argument('--speed-unit')
    parser.add_argument('--no-distance', action='store_true')
    parser.add_argument('-v', '--verbose', action='count', default=0)
    parser.add_argument('--version', action='version', version=version)
    args = parser.parse_args(argv)

    options = read_config(args.config)
    if args.channels:
        options['channels'] = args.channels
    if args.speed_unit:
        options['speed_unit'] = args.speed_unit
    if args.no_distance:
        options['distance'] = 'no'

    level = options['log_level'].upper()
    if args.verbose:
        level = 'INFO' if args.verbose == 1 else 'DEBUG'
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    print('Loading file...', args.file)
    try:
        session = ld.load(args.file)
        export(session, args.output_dir, options)
    except (LDError, OSError) as e:
        print('%s: %s' % (args.file, e), file=sys.stderr)
        return 1
    print('Parsed and saved to', os.path.join(args.output_dir, 'data.json'))
    return 0

if __name__ == '__main__':
    sys.exit(main())
