from .store import ToggleStateStore, ToggleValue, log_on_toggle
from .toggle import Toggle, ToggleConsumer, ToggleContext
from .usage import Layer1, Layer2, Layer3, Layer4, Usage

__all__ = [
    "ToggleStateStore",
    "ToggleValue",
    "log_on_toggle",
    "Toggle",
    "ToggleConsumer",
    "ToggleContext",
    "Layer1",
    "Layer2",
    "Layer3",
    "Layer4",
    "Usage",
]
