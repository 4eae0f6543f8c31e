"""Base rule class and boolean combinators."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..models.trade import TradingRecord

logger = logging.getLogger(__name__)


class Rule(ABC):
    """A boolean condition evaluated at a bar index against a trading record."""

    @abstractmethod
    def is_satisfied(self, index: int, trading_record: Optional[TradingRecord] = None) -> bool:
        """
        Evaluate the rule.

        Args:
            index: Bar index
            trading_record: Record holding the open position, if any

        Returns:
            True if the rule is satisfied at index
        """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def _trace_is_satisfied(self, index: int, satisfied: bool) -> None:
        logger.debug("rule_evaluated", extra={
            "rule": self.name,
            "index": index,
            "satisfied": satisfied,
        })

    def and_(self, other: "Rule") -> "Rule":
        return AndRule(self, other)

    def or_(self, other: "Rule") -> "Rule":
        return OrRule(self, other)

    def xor(self, other: "Rule") -> "Rule":
        return XorRule(self, other)

    def negation(self) -> "Rule":
        return NotRule(self)


class AndRule(Rule):
    def __init__(self, rule1: Rule, rule2: Rule):
        self.rule1 = rule1
        self.rule2 = rule2

    def is_satisfied(self, index, trading_record=None):
        satisfied = (self.rule1.is_satisfied(index, trading_record)
                     and self.rule2.is_satisfied(index, trading_record))
        self._trace_is_satisfied(index, satisfied)
        return satisfied


class OrRule(Rule):
    def __init__(self, rule1: Rule, rule2: Rule):
        self.rule1 = rule1
        self.rule2 = rule2

    def is_satisfied(self, index, trading_record=None):
        satisfied = (self.rule1.is_satisfied(index, trading_record)
                     or self.rule2.is_satisfied(index, trading_record))
        self._trace_is_satisfied(index, satisfied)
        return satisfied


class XorRule(Rule):
    def __init__(self, rule1: Rule, rule2: Rule):
        self.rule1 = rule1
        self.rule2 = rule2

    def is_satisfied(self, index, trading_record=None):
        satisfied = (self.rule1.is_satisfied(index, trading_record)
                     != self.rule2.is_satisfied(index, trading_record))
        self._trace_is_satisfied(index, satisfied)
        return satisfied


class NotRule(Rule):
    def __init__(self, rule: Rule):
        self.rule = rule

    def is_satisfied(self, index, trading_record=None):
        satisfied = not self.rule.is_satisfied(index, trading_record)
        self._trace_is_satisfied(index, satisfied)
        return satisfied
