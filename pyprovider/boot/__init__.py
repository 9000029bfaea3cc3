from .bootstrap import bootstrap
from .config import Settings
from .terminal import read_terminal_and_invoke
from .web import run_web
from .app_runner import AppRunner, run_app

__all__ = [
    "run_app",
    "run_web",
    "bootstrap",
    "AppRunner",
    "Settings",
    "read_terminal_and_invoke",
]
