"""Settings for the rollups engine."""

from dataclasses import dataclass
import os

from finance_rollups.infrastructure.logging.logger import get_app_logger
from finance_rollups.utils.month_utils import REFERENCE_DAY

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class RollupSettings:
    """Settings controlling optional aggregation behaviour.

    Attributes:
        include_holding_snapshots: Use holding snapshots as a balance source.
        holding_reference_day: Day of month used as a holding month's
            reference date for prices and cost basis inference.
    """

    include_holding_snapshots: bool = True
    holding_reference_day: int = REFERENCE_DAY

    @classmethod
    def from_env(cls) -> "RollupSettings":
        """Build settings from environment variables.

        Returns:
            RollupSettings: Settings sourced from environment variables.

        Raises:
            ValueError: If a variable holds a malformed value.
        """
        include_holdings = cls._parse_bool(
            "ROLLUPS_INCLUDE_HOLDING_SNAPSHOTS",
            os.getenv("ROLLUPS_INCLUDE_HOLDING_SNAPSHOTS"),
            default=True,
        )
        reference_day = cls._parse_reference_day(
            os.getenv("ROLLUPS_HOLDING_REFERENCE_DAY")
        )
        return cls(
            include_holding_snapshots=include_holdings,
            holding_reference_day=reference_day,
        )

    @staticmethod
    def _parse_bool(name: str, raw: str | None, default: bool) -> bool:
        if raw is None or not raw.strip():
            return default
        cleaned = raw.strip().lower()
        if cleaned in _TRUE_VALUES:
            return True
        if cleaned in _FALSE_VALUES:
            return False
        raise ValueError(f"Invalid boolean for {name}: {raw}")

    @staticmethod
    def _parse_reference_day(raw: str | None) -> int:
        """Parse the holding reference day.

        Args:
            raw: Raw environment value.

        Returns:
            int: Day between 1 and 28; out-of-range values fall back to
            the mid-month day.

        Raises:
            ValueError: If the value is not an integer.
        """
        if raw is None or not raw.strip():
            return REFERENCE_DAY
        try:
            day = int(raw.strip())
        except ValueError as exc:
            raise ValueError(
                f"Invalid ROLLUPS_HOLDING_REFERENCE_DAY: {raw}"
            ) from exc
        if not 1 <= day <= 28:
            get_app_logger().warning(
                f"ROLLUPS_HOLDING_REFERENCE_DAY out of range: {day}. "
                f"Using {REFERENCE_DAY}."
            )
            return REFERENCE_DAY
        return day


__all__ = ["RollupSettings"]
