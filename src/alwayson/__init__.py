"""alwayson — always-on display refresh state machine."""

__version__ = "0.1.0"
