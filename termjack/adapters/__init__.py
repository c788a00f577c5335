"""
Platform adapters for the termjack engine.

This package provides adapters that translate between the core game engine
and a front end (the terminal, or a scripted driver for tests).
"""

from termjack.adapters.base import PlatformAdapter
from termjack.adapters.cli import CLIAdapter
from termjack.adapters.dummy import DummyAdapter

__all__ = ["PlatformAdapter", "CLIAdapter", "DummyAdapter"]
