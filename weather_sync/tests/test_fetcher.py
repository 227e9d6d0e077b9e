import json
import unittest
from unittest.mock import Mock, patch

import requests

from weather_sync.errors import FetchError
from weather_sync.services.fetcher import WeatherApiClient
from weather_sync.tests.conftest import PROVIDER_PAYLOAD


class TestWeatherApiClient(unittest.TestCase):
    def _fake_response(self, body: bytes, status_code: int = 200) -> Mock:
        m = Mock()
        m.status_code = status_code
        m.content = body
        return m

    def _client(self) -> WeatherApiClient:
        return WeatherApiClient(base_url="http://weather.test/v1/", api_key="secret")

    @patch("requests.Session.get")
    def test_fetch_current_happy_path(self, mock_get: Mock) -> None:
        body = json.dumps(PROVIDER_PAYLOAD).encode()
        mock_get.return_value = self._fake_response(body)

        reading, raw = self._client().fetch_current("Montreal")

        self.assertEqual(raw, body)
        self.assertEqual(reading.location.name, "Montreal")
        self.assertEqual(reading.current.temp_c, 21.5)
        self.assertEqual(reading.current.condition.text, "Partly cloudy")

        args, kwargs = mock_get.call_args
        self.assertEqual(args[0], "http://weather.test/v1/current.json")
        self.assertEqual(kwargs["params"], {"key": "secret", "q": "Montreal"})
        # fetch has no timeout by default
        self.assertIsNone(kwargs["timeout"])

    @patch("requests.Session.get")
    def test_missing_scalar_fields_default_to_zero(self, mock_get: Mock) -> None:
        body = json.dumps({"location": {"name": "Montreal"}, "current": {"temp_c": 3}}).encode()
        mock_get.return_value = self._fake_response(body)

        reading, _ = self._client().fetch_current("Montreal")

        self.assertEqual(reading.current.humidity, 0.0)
        self.assertEqual(reading.current.wind_dir, "")
        self.assertEqual(reading.current.condition.text, "")

    @patch("requests.Session.get")
    def test_malformed_json_raises_fetch_error(self, mock_get: Mock) -> None:
        mock_get.return_value = self._fake_response(b"{not json")
        with self.assertRaises(FetchError):
            self._client().fetch_current("Montreal")

    @patch("requests.Session.get")
    def test_wrong_types_raise_fetch_error(self, mock_get: Mock) -> None:
        cases = [
            {"temp_c": "warm"},
            {"temp_c": "21.5"},
            {"is_day": "1"},
            {"humidity": True},
            {"is_day": True},
            {"wind_dir": 5},
            {"condition": {"text": 1003}},
        ]
        for current in cases:
            with self.subTest(current=current):
                body = json.dumps({"location": {"name": "Montreal"}, "current": current}).encode()
                mock_get.return_value = self._fake_response(body)
                with self.assertRaises(FetchError):
                    self._client().fetch_current("Montreal")

    @patch("requests.Session.get")
    def test_ints_accepted_for_float_fields(self, mock_get: Mock) -> None:
        body = json.dumps({"location": {"name": "Montreal"}, "current": {"temp_c": 21, "uv": 0}}).encode()
        mock_get.return_value = self._fake_response(body)

        reading, _ = self._client().fetch_current("Montreal")

        self.assertEqual(reading.current.temp_c, 21.0)
        self.assertIsInstance(reading.current.temp_c, float)

    @patch("requests.Session.get")
    def test_non_2xx_raises_fetch_error(self, mock_get: Mock) -> None:
        body = json.dumps({"error": {"code": 2006, "message": "API key is invalid."}}).encode()
        mock_get.return_value = self._fake_response(body, status_code=401)
        with self.assertRaises(FetchError) as ctx:
            self._client().fetch_current("Montreal")
        self.assertIn("401", str(ctx.exception))

    @patch("requests.Session.get")
    def test_transport_error_raises_fetch_error(self, mock_get: Mock) -> None:
        mock_get.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(FetchError) as ctx:
            self._client().fetch_current("Montreal")
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_api_key_not_in_repr(self) -> None:
        self.assertNotIn("secret", repr(self._client()))


if __name__ == "__main__":
    unittest.main()
