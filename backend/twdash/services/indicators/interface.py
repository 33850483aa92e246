"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Optional

from twdash.services.base import BaseService
from twdash.schemas.indicators import IndicatorBundle, IndicatorRequest, IndicatorResponse


class IndicatorServiceInterface(BaseService[IndicatorRequest, IndicatorResponse]):
    """
    Indicator Engine Service Contract.

    INPUT: IndicatorRequest
        - symbol, period, interval
        - bars: ascending OHLC bars

    OUTPUT: IndicatorResponse
        - indicators: IndicatorBundle, or None when there are no bars
        - signal: headline technical signal
        - ohlc_data: most recent bars for charting
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: IndicatorRequest) -> IndicatorResponse:
        """Calculate indicators for the requested series."""
        pass

    @abstractmethod
    async def calculate_bundle(self, input_data: IndicatorRequest) -> Optional[IndicatorBundle]:
        """Indicator bundle only, None when there are no bars."""
        pass

    @abstractmethod
    async def require_bundle(self, input_data: IndicatorRequest) -> IndicatorBundle:
        """Indicator bundle, raising DataUnavailableError when there are no bars."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
