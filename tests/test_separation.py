import logging
import pytest
from hypothesis import given, settings, strategies as st

from atc import geodesy
from atc.conversions import feet_to_metres, nm_to_metres
from atc.models import SeparationIncident
from atc.planes import PlaneList
from atc.separation import (
    SeparationMonitor,
    detect_incidents,
    involved_indices,
    unique_pairs,
)

CENTRE = (55.87, -4.43)
MIN_V = feet_to_metres(1000)
MIN_H = nm_to_metres(3)


def at(distance_nm, bearing=90.0):
    return geodesy.destination(CENTRE[0], CENTRE[1], nm_to_metres(distance_nm), bearing)


def pair(distance_nm, alt1_ft=6000.0, alt2_ft=6000.0):
    planes = PlaneList(max_planes=10, max_history=3)
    b = at(distance_nm)
    planes.add("AAA1", "A320", "1", CENTRE[0], CENTRE[1], feet_to_metres(alt1_ft), 100.0, 0.0)
    planes.add("BBB2", "A320", "2", b.latitude, b.longitude, feet_to_metres(alt2_ft), 100.0, 0.0)
    return planes


def test_conflict_reported_from_both_sides():
    planes = pair(2.0)
    incidents = detect_incidents(planes, MIN_V, MIN_H)

    assert {(inc.plane1, inc.plane2) for inc in incidents} == {(0, 1), (1, 0)}
    a, b = incidents
    assert a.horizontal_m == b.horizontal_m
    assert a.vertical_m == b.vertical_m == 0.0
    assert a.horizontal_m == pytest.approx(nm_to_metres(2.0))


def test_conflict_clears_after_update():
    planes = pair(2.0)
    far = at(5.0)
    planes.update_plane("BBB2", latitude=far.latitude, longitude=far.longitude)
    assert detect_incidents(planes, MIN_V, MIN_H) == []


@pytest.mark.parametrize("alt2_ft, expected", [
    (6900.0, 2),
    (7100.0, 0),
    (5100.0, 2),
    (4900.0, 0),
])
def test_vertical_minimum(alt2_ft, expected):
    planes = pair(1.0, 6000.0, alt2_ft)
    assert len(detect_incidents(planes, MIN_V, MIN_H)) == expected


def test_vertical_minimum_is_inclusive():
    planes = PlaneList(max_planes=4)
    planes.add("LOW", "A320", "1", CENTRE[0], CENTRE[1], 1000.0, 100.0, 0.0)
    planes.add("HIGH", "A320", "2", CENTRE[0], CENTRE[1], 1300.0, 100.0, 0.0)
    assert len(detect_incidents(planes, 300.0, MIN_H)) == 2
    assert detect_incidents(planes, 299.0, MIN_H) == []


def test_no_incidents_for_empty_or_single():
    planes = PlaneList(max_planes=4)
    assert detect_incidents(planes) == []
    planes.add("SOLO", "A320", "1", CENTRE[0], CENTRE[1], 1000.0, 100.0, 0.0)
    assert detect_incidents(planes) == []


def test_plane_list_detect_uses_default_minima():
    planes = pair(2.9, 6000.0, 6950.0)
    assert len(planes.detect_incidents()) == 2
    planes = pair(3.1)
    assert planes.detect_incidents() == []


@settings(max_examples=40)
@given(st.lists(
    st.tuples(st.floats(0.0, 8.0), st.floats(0.0, 360.0), st.floats(3000.0, 6000.0)),
    min_size=0, max_size=8,
))
def test_incidents_are_symmetric(aircraft):
    planes = PlaneList(max_planes=10, max_history=2)
    for k, (d_nm, brg, alt_ft) in enumerate(aircraft):
        p = at(d_nm, brg)
        planes.add(f"P{k}", "A320", str(k), p.latitude, p.longitude, feet_to_metres(alt_ft), 100.0, 0.0)

    incidents = detect_incidents(planes, MIN_V, MIN_H)
    table = {(inc.plane1, inc.plane2): inc for inc in incidents}
    assert len(table) == len(incidents)
    for (i, j), inc in table.items():
        assert i != j
        mirror = table[(j, i)]
        assert mirror.horizontal_m == pytest.approx(inc.horizontal_m)
        assert mirror.vertical_m == inc.vertical_m
        assert inc.vertical_m <= MIN_V
        assert inc.horizontal_m < MIN_H


def test_involved_and_unique_pairs():
    incidents = [
        SeparationIncident(0, 2, 100.0, 0.0),
        SeparationIncident(2, 0, 100.0, 0.0),
        SeparationIncident(1, 3, 200.0, 50.0),
        SeparationIncident(3, 1, 200.0, 50.0),
    ]
    assert involved_indices(incidents) == {0, 1, 2, 3}
    assert unique_pairs(incidents) == [(0, 2), (1, 3)]
    assert involved_indices([]) == set()


def test_monitor_logs_transitions_and_keeps_stats(caplog):
    planes = pair(2.0)
    monitor = SeparationMonitor(MIN_V, MIN_H)

    with caplog.at_level(logging.INFO, logger="atc.separation"):
        monitor.check(planes)
        monitor.check(planes)
    assert caplog.text.count("Separation lost: AAA1 / BBB2") == 1

    far = at(5.0)
    planes.update_plane("BBB2", latitude=far.latitude, longitude=far.longitude)
    caplog.clear()
    with caplog.at_level(logging.INFO, logger="atc.separation"):
        assert monitor.check(planes) == []
    assert "Separation restored: AAA1 / BBB2" in caplog.text

    stats = monitor.summary()
    assert stats.checks == 3
    assert stats.checks_with_incident == 2
    assert stats.pair_incidents == 2
    assert stats.min_horizontal_m == pytest.approx(nm_to_metres(2.0))

    monitor.reset()
    assert monitor.summary().checks == 0


def test_monitor_tracks_pairs_by_callsign_across_removal(caplog):
    planes = PlaneList(max_planes=5, max_history=2)
    far = at(10.0, 0.0)
    near = at(1.0)
    planes.add("XTRA", "A320", "0", far.latitude, far.longitude, 2000.0, 100.0, 0.0)
    planes.add("AAA1", "A320", "1", CENTRE[0], CENTRE[1], 2000.0, 100.0, 0.0)
    planes.add("BBB2", "A320", "2", near.latitude, near.longitude, 2000.0, 100.0, 0.0)
    monitor = SeparationMonitor(MIN_V, MIN_H)
    monitor.check(planes)

    planes.remove_by_callsign("XTRA")    # BBB2 moves to index 0
    caplog.clear()
    with caplog.at_level(logging.INFO, logger="atc.separation"):
        incidents = monitor.check(planes)
    assert unique_pairs(incidents) == [(0, 1)]
    assert "Separation" not in caplog.text
