"""
CSV Candle Source - loads OHLCV candles from CSV files.

Expected columns: time, open, high, low, close, volume. ``time`` is either
unix seconds or an ISO-8601 timestamp (naive timestamps are read as UTC).
Rows are sorted by time on load; duplicate timestamps keep the last row.
"""

import csv
import logging
from datetime import datetime, timezone
from pathlib import Path

from quanting.core.models import Candle, SeriesMap

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("time", "open", "high", "low", "close")


def parse_time(value: str) -> int:
    """Parse unix seconds or an ISO-8601 timestamp into unix seconds."""
    value = value.strip()
    try:
        return int(float(value))
    except ValueError:
        pass

    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


class CSVCandleSource:
    """
    Candles for one symbol read from a CSV file.

    Usage:
        source = CSVCandleSource("data/SPY.csv")
        candles = source.candles
    """

    def __init__(self, filepath: str | Path, symbol: str | None = None):
        """
        Initialize with path to CSV file.

        Args:
            filepath: Path to the CSV file
            symbol: Symbol name (defaults to the file stem, "SPY.csv" -> "SPY")
        """
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise FileNotFoundError(f"Candle file not found: {filepath}")

        self.symbol = symbol or self.filepath.stem.upper()
        self._candles: list[Candle] = []
        self._load_data()

    def _load_data(self) -> None:
        """Load CSV data into memory."""
        by_time: dict[int, Candle] = {}

        with self.filepath.open(newline="") as f:
            reader = csv.DictReader(f)
            columns = [c.strip().lower() for c in reader.fieldnames or []]
            missing = [c for c in REQUIRED_COLUMNS if c not in columns]
            if missing:
                raise ValueError(f"{self.filepath} is missing columns: {', '.join(missing)}")

            for line_no, row in enumerate(reader, start=2):
                row = {k.strip().lower(): v for k, v in row.items() if k is not None}
                try:
                    candle = Candle(
                        time=parse_time(row["time"]),
                        open=float(row["open"]),
                        high=float(row["high"]),
                        low=float(row["low"]),
                        close=float(row["close"]),
                        volume=float(row.get("volume") or 0.0),
                    )
                except (TypeError, ValueError) as e:
                    raise ValueError(f"{self.filepath}:{line_no}: bad row ({e})") from e
                by_time[candle.time] = candle

        if not by_time:
            raise ValueError(f"No data found in {self.filepath}")

        self._candles = [by_time[t] for t in sorted(by_time)]
        logger.debug(f"Loaded {len(self._candles)} candles for {self.symbol} from {self.filepath}")

    @property
    def candles(self) -> list[Candle]:
        """Candles ordered by time, oldest first."""
        return list(self._candles)

    @property
    def candle_count(self) -> int:
        """Get the number of candles in the data."""
        return len(self._candles)

    def __repr__(self) -> str:
        return f"CSVCandleSource({self.symbol}, {self.candle_count} candles)"


class CSVCandleProvider:
    """
    Candle provider backed by a directory of ``<SYMBOL>.csv`` files.

    Satisfies the CandleProvider protocol; ``interval`` is ignored because
    each file holds a single interval.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        if not self.directory.is_dir():
            raise FileNotFoundError(f"Candle directory not found: {directory}")

    def fetch_candles(self, symbols: list[str], interval: str = "1mo", limit: int = 0) -> SeriesMap:
        """
        Load the requested symbols; symbols without a file are left out.

        Args:
            symbols: Symbols to load
            interval: Unused
            limit: Keep only the last ``limit`` candles (0 keeps all)
        """
        series_map: SeriesMap = {}
        for symbol in symbols:
            path = self.directory / f"{symbol}.csv"
            if not path.exists():
                logger.debug(f"No CSV for {symbol} in {self.directory}")
                continue
            candles = CSVCandleSource(path, symbol).candles
            series_map[symbol] = candles[-limit:] if limit > 0 else candles
        return series_map


def load_series_map(directory: str | Path) -> SeriesMap:
    """Load every ``*.csv`` file in ``directory`` keyed by upper-cased file stem."""
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Candle directory not found: {directory}")

    series_map: SeriesMap = {}
    for path in sorted(directory.glob("*.csv")):
        source = CSVCandleSource(path)
        series_map[source.symbol] = source.candles
    return series_map
