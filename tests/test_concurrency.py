"""
Thread safety test for chart calculations.

House charts depend only on their arguments, so concurrent workers must
reproduce the serial results exactly.
"""

import concurrent.futures

import libhoroscope as horo
from libhoroscope import GeographicLocation, Instant


LOCATIONS = [
    (0, 0.0, 0.0),  # Equator
    (1, 41.9, 12.5),  # Rome
    (2, 51.5, -0.1),  # London
    (3, 35.7, 139.7),  # Tokyo
    (4, 40.7, -74.0),  # New York
    (5, -33.9, 151.2),  # Sydney
    (6, 37.8, -122.4),  # San Francisco
    (7, 48.9, 2.3),  # Paris
    (8, 52.5, 13.4),  # Berlin
    (9, -22.9, -43.2),  # Rio de Janeiro
]


def _chart_for(worker_id, lat, lon):
    instant = Instant(2000, 1, 1, 12, worker_id)
    system = list(horo.HouseSystem)[worker_id % 4]
    chart = horo.calc_houses(instant, GeographicLocation(lat, lon), system)
    return worker_id, chart


def test_concurrent_house_charts():
    """Charts computed on 10 threads match the serial computation."""
    serial = dict(_chart_for(wid, lat, lon) for wid, lat, lon in LOCATIONS)

    with concurrent.futures.ThreadPoolExecutor(max_workers=10) as executor:
        futures = [
            executor.submit(_chart_for, wid, lat, lon) for wid, lat, lon in LOCATIONS
        ]
        results = dict(f.result() for f in futures)

    assert results == serial
    ascendants = {round(chart.ascendant, 6) for chart in results.values()}
    assert len(ascendants) == len(LOCATIONS)


def test_concurrent_default_system_reads():
    """Workers see the configured default house system."""
    horo.set_default_house_system("equal")

    def worker(wid):
        return horo.calc_houses(Instant(1990, 6, 1, wid), GeographicLocation(45.0, 9.0)).system

    with concurrent.futures.ThreadPoolExecutor(max_workers=8) as executor:
        systems = list(executor.map(worker, range(16)))

    assert systems == [horo.HouseSystem.EQUAL] * 16
