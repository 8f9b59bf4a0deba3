import random
import unittest

from pricefeed.candles.builder import CandleBuilder
from pricefeed.candles.store import CandleStore
from pricefeed.models.market import Candle


class TestCandleBuilder(unittest.TestCase):
    def test_bucket_of_two(self):
        builder = CandleBuilder(CandleStore(), bucket_size=2)
        for p in [100, 105, 103]:
            builder.ingest("BTC/USD", p)

        self.assertEqual(
            list(builder.snapshot("BTC/USD")),
            [
                Candle(open=100, high=105, low=100, close=105, tick_count=2),
                Candle(open=103, high=103, low=103, close=103, tick_count=1),
            ],
        )

    def test_returns_candle_closed_off_by_new_tick(self):
        builder = CandleBuilder(CandleStore(), bucket_size=2)
        self.assertIsNone(builder.ingest("X", 1.0))
        self.assertIsNone(builder.ingest("X", 2.0))  # full, but not closed off yet
        closed = builder.ingest("X", 3.0)
        self.assertEqual(closed, Candle(open=1.0, high=2.0, low=1.0, close=2.0, tick_count=2))

    def test_default_bucket_counts(self):
        builder = CandleBuilder(CandleStore())
        for i in range(65):
            builder.ingest("ETH/USD", 100.0 + i)
        self.assertEqual([c.tick_count for c in builder.snapshot("ETH/USD")], [30, 30, 5])

    def test_ohlc_invariants_hold_for_random_walk(self):
        rng = random.Random(7)
        builder = CandleBuilder(CandleStore(), bucket_size=7)
        price = 50.0
        for _ in range(500):
            price += rng.uniform(-1.0, 1.0)
            builder.ingest("R", price)

        candles = builder.snapshot("R")
        for c in candles[:-1]:
            self.assertEqual(c.tick_count, 7)
        self.assertTrue(1 <= candles[-1].tick_count <= 7)
        for c in candles:
            self.assertLessEqual(c.low, min(c.open, c.close))
            self.assertGreaterEqual(c.high, max(c.open, c.close))

    def test_snapshot_cannot_mutate_series(self):
        builder = CandleBuilder(CandleStore(), bucket_size=3)
        builder.ingest("A", 10.0)
        snap = builder.snapshot("A")
        snap[0].update(99.0)
        self.assertEqual(builder.snapshot("A")[0], Candle(10.0, 10.0, 10.0, 10.0, 1))

    def test_symbols_are_independent(self):
        builder = CandleBuilder(CandleStore(), bucket_size=2)
        builder.ingest("A", 1.0)
        builder.ingest("B", 5.0)
        builder.ingest("A", 2.0)
        self.assertEqual(len(builder.snapshot("A")), 1)
        self.assertEqual(builder.snapshot("B")[0].tick_count, 1)
        self.assertEqual(builder.snapshot("C"), ())

    def test_bucket_size_must_be_positive(self):
        with self.assertRaises(ValueError):
            CandleBuilder(CandleStore(), bucket_size=0)


class TestCandle(unittest.TestCase):
    def test_bullish_when_close_above_open(self):
        c = Candle.from_price(10.0)
        self.assertFalse(c.is_bullish)
        c.update(11.0)
        self.assertTrue(c.is_bullish)


if __name__ == "__main__":
    unittest.main()
