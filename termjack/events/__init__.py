"""
Event system for the termjack engine.

This package provides the observability sink the engine reports to.
"""

from termjack.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "EngineEventType"]
