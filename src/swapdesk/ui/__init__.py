"""UI package holding the swapenv integration controllers and widgets."""

from .controller import IntegrationContext, SwapenvIntegration
from .events import EventBus

__all__ = [
    "EventBus",
    "IntegrationContext",
    "SwapenvIntegration",
]
