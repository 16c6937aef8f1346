"""The Observable core: the subscribe contract, factories and fluent operators."""

from .observable import Observable, as_disposable
from .operations import OperatorMixin

__all__ = ["Observable", "OperatorMixin", "as_disposable"]
