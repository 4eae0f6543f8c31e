"""Build series and rules from configuration dictionaries."""

import logging
from typing import Any, Dict, Optional

from configs import config_loader

from ..errors import ConfigurationError
from ..indicators.price import price_indicator
from ..models.series import BarSeries
from ..utils.numeric import num_factory
from .atr_trailing_stop import AverageTrueRangeTrailingStopLossRule

logger = logging.getLogger(__name__)


def build_series(name: str = "", config: Optional[Dict[str, Any]] = None) -> BarSeries:
    """
    Create an empty BarSeries from series settings.

    Args:
        name: Series name
        config: {"num_type": "decimal|double", "max_bar_count": int|None};
            defaults to the loaded 'series' configuration
    """
    if config is None:
        config = config_loader.get_config('series')
    return BarSeries(
        name=name,
        num_factory=num_factory(config.get('num_type', 'decimal')),
        max_bar_count=config.get('max_bar_count'),
    )


def build_atr_trailing_stop(series: BarSeries,
                            config: Optional[Dict[str, Any]] = None) -> AverageTrueRangeTrailingStopLossRule:
    """
    Create an ATR trailing stop-loss rule over series.

    Args:
        series: Bar series
        config: {"bar_count": int, "multiplier": number, "reference_price": name};
            defaults to the 'atr_trailing_stop' section of the loaded 'rules' configuration

    Raises:
        ConfigurationError: If bar_count or multiplier is missing or invalid
    """
    if config is None:
        config = config_loader.get_config('rules').get('atr_trailing_stop', {})
    missing = [key for key in ('bar_count', 'multiplier') if key not in config]
    if missing:
        raise ConfigurationError(f"atr_trailing_stop config missing {missing}")

    reference = price_indicator(series, config.get('reference_price', 'close'))
    rule = AverageTrueRangeTrailingStopLossRule(
        series,
        config['bar_count'],
        config['multiplier'],
        reference_price=reference,
    )
    logger.info("rule_built", extra={
        "rule": rule.name,
        "series": series.name,
        "bar_count": config['bar_count'],
        "multiplier": config['multiplier'],
        "reference_price": config.get('reference_price', 'close'),
    })
    return rule
