import pytest

from atc import geodesy
from atc.conversions import metres_to_nm, nm_to_metres
from viz.map_view import MapView
from viz.navaids import approach_centreline, label_offset, load_navaids, load_runways
import config


def make_view():
    return MapView(config.CENTRE_LAT, config.CENTRE_LON, config.RADAR_RADIUS_NM,
                   config.MAP_SCALE, 900, 800)


def test_navaid_table_loads():
    navaids = {n.ident: n for n in load_navaids()}
    assert set(navaids) == {"GOW", "CVL", "GLW"}
    assert navaids["GOW"].kind == "VOR-DME"
    assert navaids["GLW"].kind == "IDB"
    assert navaids["GLW"].label_direction == "NW"


def test_navaids_project_onto_scope():
    view = make_view()
    navaids = {n.ident: n for n in load_navaids()}

    # GOW is the default radar centre
    assert view.lat_lon_to_xy(navaids["GOW"].latitude, navaids["GOW"].longitude) == (450, 400)

    # CVL lies north-east, about 14 NM out, still on the scope
    cvl = navaids["CVL"]
    x, y = view.lat_lon_to_xy(cvl.latitude, cvl.longitude)
    assert 450 < x < 900 and 0 < y < 400
    d_nm = metres_to_nm(geodesy.distance(config.CENTRE_LAT, config.CENTRE_LON, cvl.latitude, cvl.longitude))
    assert d_nm < config.RADAR_RADIUS_NM

    # GLW is just west of GOW
    glw = navaids["GLW"]
    gx, gy = view.lat_lon_to_xy(glw.latitude, glw.longitude)
    assert gx < 450 and abs(gy - 400) <= 2


def test_runway_ends_project_either_side_of_centre():
    view = make_view()
    runway = load_runways()[0]
    assert runway.name == "05/23"
    (x05, y05), (x23, y23) = (view.lat_lon_to_xy(e.latitude, e.longitude) for e in runway.ends)
    # 05 threshold is south-west of 23
    assert x05 < x23 and y05 > y23


@pytest.mark.parametrize("designator, outbound", [("05", 230.0), ("23", 50.0)])
def test_approach_centreline_points_away_from_runway(designator, outbound):
    runway = load_runways()[0]
    start, tip = approach_centreline(runway, designator, nm_to_metres(10))
    threshold = next(e for e in runway.ends if e.designator == designator)

    assert (start.latitude, start.longitude) == (threshold.latitude, threshold.longitude)
    assert geodesy.distance(start.latitude, start.longitude, tip.latitude, tip.longitude) == pytest.approx(nm_to_metres(10))
    far_end = next(e for e in runway.ends if e.designator != designator)
    along = geodesy.bearing(far_end.latitude, far_end.longitude, threshold.latitude, threshold.longitude)
    away = geodesy.bearing(start.latitude, start.longitude, tip.latitude, tip.longitude)
    assert away == pytest.approx(along, abs=1e-6)
    # true bearing of the strip is a few degrees off the magnetic designator
    assert away == pytest.approx(outbound, abs=5.0)


def test_approach_centreline_unknown_end():
    with pytest.raises(ValueError):
        approach_centreline(load_runways()[0], "09", 1000.0)


def test_label_offset_directions():
    assert label_offset("SE", 8, 6) == (8, 6)
    assert label_offset("nw", 8, 6) == (-8, -6)
    assert label_offset("NE", 8, 6) == (8, -6)
    assert label_offset("", 8, 6) == (8, 6)
