"""Default configuration parameters for a strategy instance."""

from dataclasses import MISSING, asdict, dataclass, fields
from enum import Enum
from typing import Any, Optional


class InstrumentType(str, Enum):
    """Kind of instrument traded on the venue."""
    SPOT = "SPOT"
    FUTURES = "FUTURES"


@dataclass(frozen=True)
class EngineOptions:
    """Strategy options shared by the engine, the transport and order requests."""
    # Venue and instrument
    broker: str
    ticker: str
    amount: float                                    # Equity allocated per order, quote currency
    currency: str = "USD"
    interval: str = "1min"                           # TimeFrame of the tick stream
    instrument_type: str = InstrumentType.SPOT.value

    # Order sizing
    fee: float = 0.0003                              # Venue commission rate
    lots_multiplier: float = 1                       # Scale applied to computed lots
    equity_level: float = 1                          # Share of amount in use

    # Venue flags
    margin: bool = False
    sandbox: bool = False

    # Candle history kept in memory
    candles_window_size: int = 10

    # Free-form strategy parameters for plugins and subclasses
    extra: Optional[dict[str, Any]] = None

    @property
    def futures(self) -> bool:
        return self.instrument_type == InstrumentType.FUTURES.value

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}


def get_default_options() -> dict[str, Any]:
    """Optional fields with their default values."""
    return {
        f.name: f.default
        for f in fields(EngineOptions)
        if f.default is not MISSING
    }
