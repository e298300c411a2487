"""Tests for strict envelope decoding.

Run with:
    pytest tests/waqi/test_models.py -v
"""

import pytest

from src.waqi.errors import DecodeError, UpstreamError
from src.waqi.models import (
    CityRef,
    Forecast,
    ResponseEnvelope,
    StationDetail,
    StationSummary,
    decode_feed,
    decode_search,
)


class TestSearchDecoding:
    def test_decodes_summaries(self, search_payload):
        envelope = decode_search(search_payload)

        assert envelope.ok
        assert len(envelope.data) == 2
        first = envelope.data[0]
        assert isinstance(first, StationSummary)
        assert first.uid == 1451
        assert first.station.geo == (39.954592, 116.468117)
        assert first.station.url == "beijing"
        assert first.time.vtime == 1714528800

    def test_unknown_fields_ignored(self, search_payload):
        """station.country is not modeled and must not break decoding."""
        envelope = decode_search(search_payload)
        assert envelope.data[0].station == CityRef(
            geo=(39.954592, 116.468117), name="Beijing (北京)", url="beijing"
        )

    def test_non_numeric_aqi_is_kept_as_string(self, search_payload):
        summary = decode_search(search_payload).data[1]
        assert summary.aqi == "-"
        assert summary.aqi_value() is None

    def test_numeric_aqi_parses(self, search_payload):
        assert decode_search(search_payload).data[0].aqi_value() == 42

    @pytest.mark.parametrize("raw", ["4_2", "\u0664\u0662", "+42", "42.0", "", "--1"])
    def test_malformed_aqi_is_not_numeric(self, search_payload, raw):
        """Only plain ASCII digits (optionally negative) count as a reading."""
        search_payload["data"][0]["aqi"] = raw
        assert decode_search(search_payload).data[0].aqi_value() is None

    def test_negative_and_padded_aqi_parse(self, search_payload):
        search_payload["data"][0]["aqi"] = "-1"
        search_payload["data"][1]["aqi"] = " 7 "
        data = decode_search(search_payload).data
        assert data[0].aqi_value() == -1
        assert data[1].aqi_value() == 7

    def test_empty_result_list(self):
        envelope = decode_search({"status": "ok", "data": []})
        assert envelope.data == ()


@pytest.mark.fail_loud
class TestStrictness:
    """Missing fields / wrong types fail the whole decode."""

    def test_missing_required_field(self, search_payload):
        del search_payload["data"][1]["uid"]
        with pytest.raises(DecodeError, match="uid") as excinfo:
            decode_search(search_payload)
        assert excinfo.value.path == "data[1]"

    def test_wrong_type(self, feed_payload):
        feed_payload["data"]["aqi"] = "153"
        with pytest.raises(DecodeError, match="expected integer"):
            decode_feed(feed_payload)

    def test_bool_is_not_an_integer(self, search_payload):
        search_payload["data"][0]["uid"] = True
        with pytest.raises(DecodeError):
            decode_search(search_payload)

    def test_geo_must_have_two_values(self, search_payload):
        search_payload["data"][0]["station"]["geo"] = [1.0]
        with pytest.raises(DecodeError, match=r"\[lat, lon\]"):
            decode_search(search_payload)

    def test_missing_status(self):
        with pytest.raises(DecodeError, match="status"):
            decode_search({"data": []})

    def test_payload_not_an_object(self):
        with pytest.raises(DecodeError, match="expected object"):
            decode_search(["not", "an", "envelope"])

    def test_bad_forecast_entry(self, feed_payload):
        feed_payload["data"]["forecast"]["daily"]["pm25"][0]["max"] = "high"
        with pytest.raises(DecodeError) as excinfo:
            decode_feed(feed_payload)
        assert "forecast.daily.pm25[0].max" in str(excinfo.value)


class TestUpstreamStatus:
    def test_error_status_raises_upstream_error(self, error_payload):
        with pytest.raises(UpstreamError) as excinfo:
            decode_feed(error_payload)
        assert excinfo.value.status == "error"
        assert excinfo.value.upstream_message == "Unknown station"
        assert "Unknown station" in str(excinfo.value)

    def test_untyped_passes_error_through(self, error_payload):
        envelope = ResponseEnvelope.untyped(error_payload)
        assert not envelope.ok
        assert envelope.data == "Unknown station"


class TestFeedDecoding:
    def test_decodes_detail(self, feed_payload):
        detail = decode_feed(feed_payload).data

        assert isinstance(detail, StationDetail)
        assert detail.aqi == 153
        assert detail.idx == 1451
        assert detail.dominant_pollutant == "pm25"
        assert detail.city.url == "https://aqicn.org/city/beijing"
        assert [a.name for a in detail.attributions][1] == "World Air Quality Index Project"
        assert detail.debug.sync == "2024-05-01T11:10:00+09:00"

    def test_individual_aqi_values_are_floats(self, feed_payload):
        detail = decode_feed(feed_payload).data
        assert detail.individual_aqi["pm25"] == {"v": 153.0}
        assert detail.reading("t") == 20.0
        assert detail.reading("no2") is None

    def test_daily_forecast(self, feed_payload):
        daily = decode_feed(feed_payload).data.forecast.daily

        assert daily is not None
        assert daily.pm25[0].max == 160
        assert daily.ozone[0].day == "2024-05-01"
        assert list(daily.series()) == ["o3", "pm10", "pm25", "uvi"]

    def test_null_daily_forecast_is_absent(self, feed_payload):
        feed_payload["data"]["forecast"]["daily"] = None
        detail = decode_feed(feed_payload).data
        assert detail.forecast == Forecast(daily=None)

    def test_missing_daily_forecast_is_absent(self, feed_payload):
        feed_payload["data"]["forecast"] = {}
        assert decode_feed(feed_payload).data.forecast.daily is None

    def test_snake_case_aliases(self, feed_payload):
        data = feed_payload["data"]
        data["dominant_pollutant"] = data.pop("dominentpol")
        data["individual_aqi"] = data.pop("iaqi")
        detail = decode_feed(feed_payload).data
        assert detail.dominant_pollutant == "pm25"
        assert "pm10" in detail.individual_aqi
