"""Bitmask flags accepted by user creation and device wipe.

Values match the platform constants so they can be passed through to a
real backend unchanged.
"""

from __future__ import annotations

from enum import IntFlag


class CreateUserFlag(IntFlag):
    """Behaviour flags for ``create_and_manage_user``."""

    NONE = 0
    SKIP_SETUP_WIZARD = 0x0001
    MAKE_USER_EPHEMERAL = 0x0002
    LEAVE_ALL_SYSTEM_APPS_ENABLED = 0x0010


class WipeFlag(IntFlag):
    """Behaviour flags for ``wipe_data``."""

    NONE = 0
    WIPE_EXTERNAL_STORAGE = 0x0001
    WIPE_RESET_PROTECTION_DATA = 0x0002
    WIPE_EUICC = 0x0004
    WIPE_SILENTLY = 0x0008
