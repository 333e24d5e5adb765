"""Seed OHLC snapshots for the simulated instrument universe."""

# Opening state for every simulated instrument (session start snapshot)
BASE_OHLC: dict[str, dict[str, float]] = {
    "AAPL": {"open": 228.5, "high": 232.4, "low": 227.9, "close": 231.85, "volume": 58_200_000},
    "TSLA": {"open": 405.2, "high": 410.1, "low": 404.1, "close": 409.35, "volume": 23_400_000},
    "MSFT": {"open": 167.8, "high": 170.25, "low": 167.1, "close": 169.95, "volume": 26_800_000},
    "GOOG": {"open": 148.5, "high": 152.3, "low": 147.9, "close": 151.75, "volume": 51_200_000},
    "AMZN": {"open": 1250.0, "high": 1286.4, "low": 1245.5, "close": 1280.75, "volume": 312_500_000},
    "NVDA": {"open": 427.4, "high": 432.25, "low": 426.1, "close": 431.1, "volume": 3_900_000},
    "META": {"open": 172.8, "high": 175.75, "low": 172.2, "close": 175.1, "volume": 12_800_000},
    "NFLX": {"open": 244.1, "high": 248.55, "low": 243.2, "close": 247.6, "volume": 7_800_000},
    "JPM": {"open": 410.2, "high": 417.4, "low": 409.8, "close": 416.25, "volume": 3_600_000},
    "BAC": {"open": 32.7, "high": 33.25, "low": 32.4, "close": 33.05, "volume": 42_600_000},
    "INTC": {"open": 254.2, "high": 261.8, "low": 253.1, "close": 259.7, "volume": 102_000_000},
    "ORCL": {"open": 160.3, "high": 163.6, "low": 159.85, "close": 162.75, "volume": 13_200_000},
    "IBM": {"open": 147.4, "high": 149.8, "low": 146.9, "close": 149.1, "volume": 7_500_000},
    "CSCO": {"open": 58.4, "high": 59.65, "low": 58.1, "close": 59.2, "volume": 14_500_000},
    "SAP": {"open": 168.8, "high": 171.9, "low": 168.2, "close": 171.25, "volume": 5_850_000},
    "ADBE": {"open": 155.4, "high": 157.85, "low": 155.0, "close": 157.1, "volume": 9_200_000},
    "UBER": {"open": 525.1, "high": 531.4, "low": 523.8, "close": 530.2, "volume": 3_580_000},
    "LYFT": {"open": 103.7, "high": 106.4, "low": 103.1, "close": 105.85, "volume": 11_400_000},
    "SNAP": {"open": 98.2, "high": 100.85, "low": 97.8, "close": 100.25, "volume": 8_750_000},
    "TWTR": {"open": 595.4, "high": 612.1, "low": 594.3, "close": 608.5, "volume": 5_250_000},
}

# Quote tags
QUOTE_CURRENCY = "USD"
QUOTE_SOURCE = "simulator"
