"""Host-wide network throughput sampling."""

from .filter import InterfaceFilter, should_include
from .harvest import NetworkHarvest, SamplingState, sample
from .providers import (
    CounterProvider,
    InterfaceSample,
    ProviderUnavailable,
    select_provider,
)

__all__ = [
    "CounterProvider",
    "InterfaceFilter",
    "InterfaceSample",
    "NetworkHarvest",
    "ProviderUnavailable",
    "SamplingState",
    "sample",
    "select_provider",
    "should_include",
]
