from typing import Tuple

from atc import geodesy
import config


class MapView:
    """
    Equirectangular projection of the radar area onto the window.

    The visible area is the radar radius times ``scale`` along the shorter
    window side; the longer side shows proportionally more.
    """

    def __init__(self, centre_lat: float, centre_lon: float, radius_nm: float,
                 scale: float, width_px: int, height_px: int) -> None:
        if radius_nm <= 0:
            raise ValueError(f"radius_nm must be positive, got {radius_nm}")
        self.radius_nm = radius_nm
        self.scale = scale
        self.centre_lat = centre_lat
        self.centre_lon = centre_lon
        self.resize(width_px, height_px)

    def resize(self, width_px: int, height_px: int) -> None:
        if width_px <= 0 or height_px <= 0:
            raise ValueError(f"window must have a positive size, got {width_px}x{height_px}")
        self.width_px = width_px
        self.height_px = height_px
        self._compute_bounds()

    def set_centre(self, lat: float, lon: float) -> None:
        self.centre_lat = lat
        self.centre_lon = lon
        self._compute_bounds()

    def _compute_bounds(self) -> None:
        visible_nm = self.radius_nm * self.scale
        aspect = self.width_px / self.height_px

        half_lat_nm = visible_nm
        if aspect < 1.0:
            # tall window: the width must fit the radar
            half_lat_nm = visible_nm / aspect
        half_lon_nm = half_lat_nm * aspect

        self.lat_min = self.centre_lat - half_lat_nm / 60.0
        self.lat_max = self.centre_lat + half_lat_nm / 60.0

        west = geodesy.destination(self.centre_lat, self.centre_lon,
                                   half_lon_nm * config.NM_TO_M, 270)
        self.lon_min = west.longitude
        self.lon_max = self.centre_lon + (self.centre_lon - west.longitude)

    def lat_lon_to_xy(self, lat: float, lon: float) -> Tuple[int, int]:
        x = (lon - self.lon_min) / (self.lon_max - self.lon_min) * self.width_px
        y = self.height_px - (lat - self.lat_min) / (self.lat_max - self.lat_min) * self.height_px
        return int(round(x)), int(round(y))

    def xy_to_lat_lon(self, x: float, y: float) -> Tuple[float, float]:
        lon = x / self.width_px * (self.lon_max - self.lon_min) + self.lon_min
        lat = (self.height_px - y) / self.height_px * (self.lat_max - self.lat_min) + self.lat_min
        return lat, lon

    def metres_to_pixels(self, metres: float) -> float:
        # 1 deg latitude = 60 NM
        return metres / config.NM_TO_M / 60.0 * self.height_px / (self.lat_max - self.lat_min)
