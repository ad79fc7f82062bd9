"""
Default verb handlers.

This package provides the tag-driven default behavior for every command
kind the engine routes. Custom room and entity handlers always get the
first chance at a command; these run only when nobody claimed it.

Each handler implements the VerbHandler protocol:
    - validate(): Check if the command is allowed
    - execute(): Apply state changes and write output
    - create_event(): Create the event for the turn response

Example:
    >>> handlers = default_handlers()
    >>> handler = handlers[CommandKind.TAKE]
    >>> result = handler.validate(command, world)
    >>> if result.valid:
    ...     handler.execute(command, result, world)
    ...     event = handler.create_event(command, result, world)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lantern.engine.handlers.consumables import ConsumeHandler, WearHandler
from lantern.engine.handlers.containers import CloseHandler, LockHandler, OpenHandler
from lantern.engine.handlers.devices import DeviceHandler
from lantern.engine.handlers.examine import (
    ExamineHandler,
    InventoryHandler,
    LookHandler,
    ReadHandler,
)
from lantern.engine.handlers.flavor import FlavorHandler
from lantern.engine.handlers.items import DropHandler, PutHandler, TakeHandler
from lantern.engine.handlers.meta import (
    DescriptionModeHandler,
    FallbackHandler,
    InfoHandler,
    UnavailableHandler,
    WaitHandler,
)
from lantern.engine.handlers.movement import MovementHandler
from lantern.engine.handlers.social import OfferHandler, TellHandler

if TYPE_CHECKING:
    from lantern.engine.protocols import VerbHandler
    from lantern.models.command import CommandKind


def default_handlers() -> dict["CommandKind", "VerbHandler"]:
    """Map every routable command kind to a fresh default handler."""
    handlers: list[VerbHandler] = [
        MovementHandler(),
        LookHandler(),
        ExamineHandler(),
        ReadHandler(),
        InventoryHandler(),
        TakeHandler(),
        DropHandler(),
        PutHandler(),
        OpenHandler(),
        CloseHandler(),
        LockHandler(),
        DeviceHandler(),
        ConsumeHandler(),
        WearHandler(),
        OfferHandler(),
        TellHandler(),
        FlavorHandler(),
        WaitHandler(),
        DescriptionModeHandler(),
        InfoHandler(),
        UnavailableHandler(),
        FallbackHandler(),
    ]
    return {kind: handler for handler in handlers for kind in handler.kinds}


__all__ = [
    "default_handlers",
    "MovementHandler",
    "LookHandler",
    "ExamineHandler",
    "ReadHandler",
    "InventoryHandler",
    "TakeHandler",
    "DropHandler",
    "PutHandler",
    "OpenHandler",
    "CloseHandler",
    "LockHandler",
    "DeviceHandler",
    "ConsumeHandler",
    "WearHandler",
    "OfferHandler",
    "TellHandler",
    "FlavorHandler",
    "WaitHandler",
    "DescriptionModeHandler",
    "InfoHandler",
    "UnavailableHandler",
    "FallbackHandler",
]
