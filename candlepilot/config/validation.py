"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..utils.time import TimeFrame
from .defaults import InstrumentType

FUTURES_BROKERS = frozenset({"binance"})


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates strategy options."""

    @staticmethod
    def validate_options(params: dict[str, Any]) -> list[ValidationError]:
        """Validate a merged strategy options mapping."""
        errors = []

        for required in ("broker", "ticker"):
            value = params.get(required)
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field=required,
                    message="Must be a non-empty string",
                    value=value
                ))

        # Validate amount
        value = params.get("amount")
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            errors.append(ValidationError(
                field="amount",
                message="Must be a positive number",
                value=value
            ))

        # Validate fee
        if "fee" in params:
            value = params["fee"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0 or value >= 1:
                errors.append(ValidationError(
                    field="fee",
                    message="Must be a number between 0 (inclusive) and 1",
                    value=value
                ))

        # Validate lots_multiplier
        if "lots_multiplier" in params:
            value = params["lots_multiplier"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                errors.append(ValidationError(
                    field="lots_multiplier",
                    message="Must be a positive number",
                    value=value
                ))

        # Validate equity_level
        if "equity_level" in params:
            value = params["equity_level"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0 or value > 1:
                errors.append(ValidationError(
                    field="equity_level",
                    message="Must be a number in (0, 1]",
                    value=value
                ))

        # Validate interval
        if "interval" in params:
            value = params["interval"]
            if value not in {tf.value for tf in TimeFrame}:
                errors.append(ValidationError(
                    field="interval",
                    message=f"Must be one of {[tf.value for tf in TimeFrame]}",
                    value=value
                ))

        # Validate candles_window_size
        if "candles_window_size" in params:
            value = params["candles_window_size"]
            if isinstance(value, bool) or not isinstance(value, int) or value < 2:
                errors.append(ValidationError(
                    field="candles_window_size",
                    message="Must be an integer >= 2",
                    value=value
                ))

        for flag in ("margin", "sandbox"):
            if flag in params and not isinstance(params[flag], bool):
                errors.append(ValidationError(
                    field=flag,
                    message="Must be a boolean",
                    value=params[flag]
                ))

        # Validate instrument_type and venue support
        instrument_type = params.get("instrument_type", InstrumentType.SPOT.value)
        if instrument_type not in {it.value for it in InstrumentType}:
            errors.append(ValidationError(
                field="instrument_type",
                message=f"Must be one of {[it.value for it in InstrumentType]}",
                value=instrument_type
            ))
        elif instrument_type == InstrumentType.FUTURES.value and params.get("broker") not in FUTURES_BROKERS:
            errors.append(ValidationError(
                field="instrument_type",
                message=f"Futures are supported only on {sorted(FUTURES_BROKERS)} brokers",
                value=instrument_type
            ))

        return errors
