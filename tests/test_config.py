import os
import unittest
from unittest.mock import patch

from fakes import make_settings

from pricefeed.config import ConfigError, get_settings, parse_symbols
from pricefeed.providers.loader import get_transport
from pricefeed.providers.twelvedata import TwelveDataTransport


class TestGetSettings(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {"TWELVEDATA_API_KEY": "k"}, clear=True):
            s = get_settings()
        self.assertEqual(s.symbols, ("BTC/USD",))
        self.assertEqual(s.history_capacity, 50)
        self.assertEqual(s.candle_bucket_size, 30)
        self.assertEqual(s.highlight_clear_seconds, 0.5)
        self.assertEqual(s.reconnect_delay_seconds, 3.0)
        self.assertEqual(s.provider, "TWELVEDATA")

    def test_overrides(self):
        env = {
            "TWELVEDATA_API_KEY": "k",
            "FEED_SYMBOLS": "ETH/USD, AAPL",
            "HISTORY_CAPACITY": "10",
            "CANDLE_BUCKET_SIZE": "5",
            "HIGHLIGHT_CLEAR_MS": "250",
            "RECONNECT_DELAY_MS": "1000",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            s = get_settings()
        self.assertEqual(s.symbols, ("ETH/USD", "AAPL"))
        self.assertEqual((s.history_capacity, s.candle_bucket_size), (10, 5))
        self.assertEqual(s.highlight_clear_seconds, 0.25)
        self.assertEqual(s.reconnect_delay_seconds, 1.0)
        self.assertEqual(s.log_level, "DEBUG")

    def test_missing_api_key(self):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigError):
                get_settings()

    def test_non_integer_value(self):
        with patch.dict(os.environ, {"TWELVEDATA_API_KEY": "k", "CANDLE_BUCKET_SIZE": "ten"}, clear=True):
            with self.assertRaises(ConfigError):
                get_settings()

    def test_empty_symbol_list(self):
        with patch.dict(os.environ, {"TWELVEDATA_API_KEY": "k", "FEED_SYMBOLS": " , "}, clear=True):
            with self.assertRaises(ConfigError):
                get_settings()


class TestSettingsValidation(unittest.TestCase):
    def test_non_positive_values_fail_fast(self):
        for field in ("history_capacity", "candle_bucket_size", "highlight_clear_ms", "reconnect_delay_ms"):
            with self.assertRaises(ConfigError, msg=field):
                make_settings(**{field: 0})

    def test_parse_symbols_keeps_order_and_drops_duplicates(self):
        self.assertEqual(parse_symbols("B, A,,B ,C"), ("B", "A", "C"))


class TestTransportLoader(unittest.TestCase):
    def test_twelvedata(self):
        transport = get_transport(make_settings())
        self.assertIsInstance(transport, TwelveDataTransport)
        self.assertEqual(
            transport.ws_url_with_key(),
            "wss://example.invalid/v1/quotes/price?apikey=test-key",
        )

    def test_unknown_provider(self):
        with self.assertRaises(ConfigError):
            get_transport(make_settings(provider="NOPE"))


if __name__ == "__main__":
    unittest.main()
