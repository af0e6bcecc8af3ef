import logging
import pytest

from atc import geodesy
from atc.planes import PlaneList

CENTRE = (55.87, -4.43)


def make_one(speed=100.0, heading=90.0, altitude=3000.0, vs=0.0, **kwargs):
    planes = PlaneList(max_planes=5, max_history=4, history_distance_m=926.0, **kwargs)
    planes.add("MOV1", "A320", "1000", CENTRE[0], CENTRE[1], altitude, speed, heading, vs)
    return planes


def test_tick_moves_along_heading():
    planes = make_one(speed=100.0, heading=90.0)
    planes.tick(0, 10.0)

    expected = geodesy.destination(CENTRE[0], CENTRE[1], 1000.0, 90.0, 3000.0)
    assert planes.latitudes[0] == pytest.approx(expected.latitude)
    assert planes.longitudes[0] == pytest.approx(expected.longitude)
    moved = geodesy.distance(CENTRE[0], CENTRE[1], planes.latitudes[0], planes.longitudes[0], 3000.0)
    assert moved == pytest.approx(1000.0, rel=1e-6)


def test_tick_uses_mid_altitude_for_projection():
    planes = make_one(speed=100.0, heading=0.0, altitude=3000.0, vs=10.0)
    planes.set_target_altitude(0, None)
    planes.tick(0, 10.0)

    assert planes.altitudes[0] == pytest.approx(3100.0)
    expected = geodesy.destination(CENTRE[0], CENTRE[1], 1000.0, 0.0, 3050.0)
    assert planes.latitudes[0] == pytest.approx(expected.latitude, abs=1e-12)


def test_tick_integrates_before_control():
    # position uses the old heading; the turn is applied afterwards
    planes = make_one(speed=100.0, heading=90.0)
    planes.set_target_heading(0, 180.0)
    planes.tick(0, 1.0)

    expected = geodesy.destination(CENTRE[0], CENTRE[1], 100.0, 90.0, 3000.0)
    assert planes.latitudes[0] == pytest.approx(expected.latitude, abs=1e-12)
    assert planes.headings[0] == pytest.approx(93.0)


def test_tick_records_history_by_distance():
    planes = make_one(speed=50.0, heading=0.0)
    history = planes.history(0)
    lengths = []
    for _ in range(4):
        planes.tick(0, 10.0)      # 500 m per tick
        lengths.append(len(history))
    assert lengths == [1, 2, 2, 3]
    latest = history.latest_sample()
    assert latest.latitude == planes.latitudes[0]


def test_tick_culls_out_of_bounds():
    planes = make_one(speed=100.0, heading=90.0, remove_out_of_bounds=True)
    planes.set_bounds(CENTRE[0], CENTRE[1], 500.0)

    assert planes.tick(0, 1.0) is False
    for _ in range(3):
        assert planes.tick(0, 1.0) is False
    assert planes.tick(0, 1.0) is False       # just under 500 m, still inside
    assert planes.tick(0, 1.0) is True
    assert planes.n_planes == 0
    assert planes.index_of("MOV1") is None


def test_tick_keeps_out_of_bounds_when_disabled():
    planes = make_one(speed=100.0, heading=90.0, remove_out_of_bounds=False)
    planes.set_bounds(CENTRE[0], CENTRE[1], 500.0)
    for _ in range(10):
        assert planes.tick(0, 1.0) is False
    assert planes.n_planes == 1
    assert not planes.in_bounds(0)


def test_tick_all_does_not_skip_swapped_aircraft():
    planes = PlaneList(max_planes=5, max_history=4, history_distance_m=926.0, remove_out_of_bounds=True)
    planes.set_bounds(CENTRE[0], CENTRE[1], 5000.0)

    edge = geodesy.destination(CENTRE[0], CENTRE[1], 4990.0, 90.0)
    planes.add("OUT", "A320", "1", edge.latitude, edge.longitude, 1000.0, 100.0, 90.0)
    planes.add("MID", "A320", "2", CENTRE[0], CENTRE[1], 1000.0, 100.0, 0.0)
    planes.add("LAST", "A320", "3", CENTRE[0], CENTRE[1], 1000.0, 100.0, 180.0)

    assert planes.tick_all(1.0) == 1
    assert planes.n_planes == 2
    assert planes.index_of("LAST") == 0

    for callsign, heading in (("MID", 0.0), ("LAST", 180.0)):
        ac = planes.by_callsign(callsign)
        expected = geodesy.destination(CENTRE[0], CENTRE[1], 100.0, heading, 1000.0)
        assert ac.latitude == pytest.approx(expected.latitude, abs=1e-12)


def test_tick_invalid_index(caplog):
    planes = make_one()
    with caplog.at_level(logging.WARNING):
        assert planes.tick(3, 1.0) is False
    assert "cannot tick" in caplog.text
