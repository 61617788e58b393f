import functools
import unittest

from fastapi.testclient import TestClient

from weather_gateway.main import app as fastapi_app
from weather_gateway.data_sources import FetchError, LocationWeatherDataSource, fetch_weather_snapshot
from test_open_meteo_client import DummyResp, DummySession, _make_current_payload, _make_hourly_payload


class FailingDataSource:
    def fetch_snapshot(self):
        raise FetchError("upstream down")


def _upstream_source(current=None, hourly=None) -> LocationWeatherDataSource:
    """Run the real fetcher against a fake upstream session."""
    session = DummySession(
        current=DummyResp(current or _make_current_payload()),
        hourly=DummyResp(hourly or _make_hourly_payload()),
    )
    return LocationWeatherDataSource(
        latitude=40.8136,
        longitude=-96.7026,
        fetch=functools.partial(fetch_weather_snapshot, session=session),
        base_url="http://upstream.test/v1/forecast",
        timeout=1.0,
    )


class TestApi(unittest.TestCase):
    def setUp(self):
        import weather_gateway.api as api_mod
        from weather_gateway.config import settings

        self.api_mod = api_mod
        self._orig_source = api_mod.DATA_SOURCE
        self._orig_location = settings.location_name
        self.client = TestClient(fastapi_app)

    def tearDown(self):
        from weather_gateway.config import settings

        self.api_mod.DATA_SOURCE = self._orig_source
        settings.location_name = self._orig_location

    def test_end_to_end_text_and_dashboard(self):
        self.api_mod.DATA_SOURCE = _upstream_source(
            current=_make_current_payload(temperature=20, winddirection=90),
            hourly=_make_hourly_payload(wind_speed_10m=[10]),
        )

        resp = self.client.get("/temperature")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, "68.0°F")
        self.assertTrue(resp.headers["content-type"].startswith("text/plain"))

        self.assertEqual(self.client.get("/windspeed").text, "6.2 mph")

        page = self.client.get("/")
        self.assertEqual(page.status_code, 200)
        self.assertTrue(page.headers["content-type"].startswith("text/html"))
        self.assertIn("Wind Direction:</strong> E (90°)", page.text)
        self.assertIn('<meta http-equiv="refresh" content="300">', page.text)

    def test_metric_routes(self):
        self.api_mod.DATA_SOURCE = _upstream_source()

        expected = {
            "/windgusts": "12.4 mph",
            "/rainfall": "0.02 inches",
            "/humidity": "65%",
            "/pressure": "29.92 inHg",
            "/uv": "2.4",
        }
        for route, body in expected.items():
            with self.subTest(route=route):
                resp = self.client.get(route)
                self.assertEqual(resp.status_code, 200)
                self.assertEqual(resp.text, body)

    def test_data_returns_all_fields(self):
        self.api_mod.DATA_SOURCE = _upstream_source()

        resp = self.client.get("/data")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["location"], "Lincoln, NE")
        self.assertEqual(data["temperature_f"], 68.0)
        self.assertEqual(data["apparent_temperature_f"], 64.4)
        self.assertEqual(data["wind_speed_mph"], 6.2)
        self.assertEqual(data["wind_direction_compass"], "E")
        self.assertEqual(data["relative_humidity_pct"], 65)
        self.assertEqual(data["pressure_inhg"], 29.92)

    def test_dashboard_escapes_location(self):
        from weather_gateway.config import settings

        settings.location_name = "<Lincoln & Co>"
        self.api_mod.DATA_SOURCE = _upstream_source()

        page = self.client.get("/")
        self.assertIn("Weather Dashboard - &lt;Lincoln &amp; Co&gt;", page.text)

    def test_fetch_failure_text_routes(self):
        self.api_mod.DATA_SOURCE = FailingDataSource()

        for route in ("/temperature", "/windspeed", "/windgusts", "/rainfall",
                      "/humidity", "/pressure", "/uv", "/"):
            with self.subTest(route=route):
                resp = self.client.get(route)
                self.assertEqual(resp.text, "Error fetching weather data.")

    def test_fetch_failure_data_route_500(self):
        self.api_mod.DATA_SOURCE = FailingDataSource()

        resp = self.client.get("/data")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Weather fetch failed"})

    def test_non_numeric_upstream_values_are_fetch_failures(self):
        cases = {
            "current temperature": {"current": _make_current_payload(temperature="warm")},
            "hourly uv index": {"hourly": _make_hourly_payload(uv_index=["high"])},
        }
        for name, payloads in cases.items():
            with self.subTest(case=name):
                self.api_mod.DATA_SOURCE = _upstream_source(**payloads)

                self.assertEqual(self.client.get("/temperature").text, "Error fetching weather data.")
                self.assertEqual(self.client.get("/uv").text, "Error fetching weather data.")
                self.assertEqual(self.client.get("/").text, "Error fetching weather data.")

                resp = self.client.get("/data")
                self.assertEqual(resp.status_code, 500)
                self.assertEqual(resp.json(), {"error": "Weather fetch failed"})

    def test_upstream_http_error_is_reported(self):
        session = DummySession(
            current=DummyResp({}, status_code=500, text="boom"),
            hourly=DummyResp(_make_hourly_payload()),
        )
        self.api_mod.DATA_SOURCE = LocationWeatherDataSource(
            latitude=0.0,
            longitude=0.0,
            fetch=functools.partial(fetch_weather_snapshot, session=session),
            base_url="http://upstream.test/v1/forecast",
            timeout=1.0,
        )

        self.assertEqual(self.client.get("/temperature").text, "Error fetching weather data.")
        self.assertEqual(self.client.get("/data").status_code, 500)

    def test_server_keeps_serving_after_failure(self):
        self.api_mod.DATA_SOURCE = FailingDataSource()
        self.assertEqual(self.client.get("/uv").text, "Error fetching weather data.")

        self.api_mod.DATA_SOURCE = _upstream_source()
        self.assertEqual(self.client.get("/uv").text, "2.4")


if __name__ == "__main__":
    unittest.main()
