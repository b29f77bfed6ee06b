import pytest

from motec import ldx
from motec.errors import SidecarError


def test_parse(make_ldx):
    text = make_ldx([0.0, 10.0, 23.5],
                    {'Total Laps': 2, 'Fastest Time': '0:13.500', 'Fastest Lap': 2,
                     'Event': 'ignored'})
    sidecar = ldx.parse_ldx(text)
    assert sidecar.beacons == [0.0, 10.0, 23.5]
    assert sidecar.summary.total_laps == 2
    assert sidecar.summary.fastest_lap == 2
    assert sidecar.summary.fastest_time == '0:13.500'


def test_parse_bytes(make_ldx):
    sidecar = ldx.parse_ldx(make_ldx([1.25], {'Total Laps': 1}).encode('utf-8'))
    assert sidecar.beacons == [1.25]
    assert sidecar.summary.fastest_lap == 0
    assert sidecar.summary.fastest_time == ''


def test_missing_lap_count(make_ldx):
    sidecar = ldx.parse_ldx(make_ldx([0.0, 60.0, 121.0], {}))
    assert sidecar.summary.total_laps == 2


def test_no_markers(make_ldx):
    sidecar = ldx.parse_ldx(make_ldx([], {'Total Laps': 0}))
    assert sidecar.beacons == []
    assert sidecar.summary.total_laps == 0


def test_out_of_order(make_ldx):
    with pytest.raises(SidecarError, match="order"):
        ldx.parse_ldx(make_ldx([0.0, 20.0, 10.0], {'Total Laps': 2}))


def test_bad_lap_count(make_ldx):
    with pytest.raises(SidecarError):
        ldx.parse_ldx(make_ldx([0.0], {'Total Laps': 'many'}))


def test_malformed():
    with pytest.raises(SidecarError):
        ldx.parse_ldx('<LDXFile><Layers>')


def test_wrong_root():
    with pytest.raises(SidecarError):
        ldx.parse_ldx('<Something/>')


def test_read(tmp_path, make_ldx):
    fname = tmp_path / 'x.ldx'
    fname.write_text(make_ldx([0.0, 5.0], {'Total Laps': 1}))
    assert ldx.read_ldx(str(fname)).beacons == [0.0, 5.0]


_TWO_GROUPS = '''<?xml version="1.0"?>
<LDXFile Locale="English_Australia.1252" DefaultLocale="C" Version="1.6">
 <Layers>
  <Layer>
   <MarkerBlock>
    <MarkerGroup Name="Sections" Index="0">
     <Marker Version="100" ClassName="Section" Name="T1" Flags="0" Time="5000000"/>
     <Marker Version="100" ClassName="Section" Name="T2" Flags="0" Time="2000000"/>
    </MarkerGroup>
    <MarkerGroup Name="Beacons" Index="1">
     <Marker Version="100" ClassName="BCN" Name="Manual.1" Flags="77" Time="0"/>
     <Marker Version="100" ClassName="BCN" Name="Manual.2" Flags="77" Time="30000000"/>
    </MarkerGroup>
   </MarkerBlock>
  </Layer>
  <Details>
   <String Id="Total Laps" Value="1"/>
  </Details>
 </Layers>
</LDXFile>
'''


def test_beacons_group_preferred():
    sidecar = ldx.parse_ldx(_TWO_GROUPS)
    assert sidecar.beacons == [0.0, 30.0]


def test_first_group_without_beacons_name():
    text = _TWO_GROUPS.replace('Name="Beacons"', 'Name="Laps"')
    with pytest.raises(SidecarError, match="order"):
        # the out-of-order section group is now the one read
        ldx.parse_ldx(text)
