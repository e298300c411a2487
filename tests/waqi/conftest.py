"""Shared WAQI payload fixtures (shapes as returned by api.waqi.info)."""

import copy

import pytest

SEARCH_PAYLOAD = {
    "status": "ok",
    "data": [
        {
            "uid": 1451,
            "aqi": "42",
            "time": {"tz": "+08:00", "stime": "2024-05-01 10:00:00", "vtime": 1714528800},
            "station": {
                "name": "Beijing (北京)",
                "geo": [39.954592, 116.468117],
                "url": "beijing",
                "country": "CN",
            },
        },
        {
            "uid": 10,
            "aqi": "-",
            "time": {"tz": "+08:00", "stime": "2024-05-01 09:00:00", "vtime": 1714525200},
            "station": {
                "name": "Beijing US Embassy",
                "geo": [39.95, 116.47],
                "url": "beijing/us-embassy",
            },
        },
    ],
}

FEED_PAYLOAD = {
    "status": "ok",
    "data": {
        "aqi": 153,
        "idx": 1451,
        "attributions": [
            {"url": "http://www.bjmemc.com.cn/", "name": "Beijing Environmental Protection Monitoring Center"},
            {"url": "https://waqi.info/", "name": "World Air Quality Index Project"},
        ],
        "city": {
            "geo": [39.954592, 116.468117],
            "name": "Beijing (北京)",
            "url": "https://aqicn.org/city/beijing",
            "location": "",
        },
        "dominentpol": "pm25",
        "iaqi": {
            "pm25": {"v": 153},
            "pm10": {"v": 58},
            "t": {"v": 20.0},
            "h": {"v": 42.5},
        },
        "time": {"s": "2024-05-01 10:00:00", "tz": "+08:00", "v": 1714528800},
        "forecast": {
            "daily": {
                "o3": [{"avg": 10, "day": "2024-05-01", "max": 20, "min": 2}],
                "pm10": [{"avg": 50, "day": "2024-05-01", "max": 70, "min": 30}],
                "pm25": [{"avg": 120, "day": "2024-05-01", "max": 160, "min": 80}],
                "uvi": [{"avg": 3, "day": "2024-05-01", "max": 7, "min": 0}],
            }
        },
        "debug": {"sync": "2024-05-01T11:10:00+09:00"},
    },
}

ERROR_PAYLOAD = {"status": "error", "data": "Unknown station"}


@pytest.fixture
def search_payload():
    return copy.deepcopy(SEARCH_PAYLOAD)


@pytest.fixture
def feed_payload():
    return copy.deepcopy(FEED_PAYLOAD)


@pytest.fixture
def error_payload():
    return copy.deepcopy(ERROR_PAYLOAD)
