"""Opaque user identities.

A :class:`UserHandle` refers to a provisioned user. A :data:`SerialNumber`
is the stable number a backend assigns to that user. Converting a serial
number into a handle is always an explicit backend lookup; the two are
never coerced into each other.
"""

from __future__ import annotations

from typing import NewType

from pydantic import BaseModel, Field

SerialNumber = NewType("SerialNumber", int)

# Backends answer serial-number lookups for unknown users with this value.
UNKNOWN_SERIAL_NUMBER = SerialNumber(-1)


class UserHandle(BaseModel):
    """Opaque reference to a provisioned user."""

    model_config = {"frozen": True}

    identifier: int = Field(ge=0)

    def __str__(self) -> str:
        return f"UserHandle{{{self.identifier}}}"


SYSTEM_USER = UserHandle(identifier=0)
