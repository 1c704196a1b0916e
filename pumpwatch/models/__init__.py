from .candle import Candle, normalize_candles
from .ticker import InstrumentSnapshot

__all__ = [
    "Candle",
    "InstrumentSnapshot",
    "normalize_candles",
]
