"""Well-known user restriction keys.

Backends accept any string key; this registry exists so callers can flag
likely typos before sending a key to a device.
"""

from __future__ import annotations

from enum import StrEnum


class UserRestriction(StrEnum):
    """Restriction keys understood by stock device policy backends."""

    NO_ADD_USER = "no_add_user"
    NO_REMOVE_USER = "no_remove_user"
    NO_INSTALL_APPS = "no_install_apps"
    NO_UNINSTALL_APPS = "no_uninstall_apps"
    NO_INSTALL_UNKNOWN_SOURCES = "no_install_unknown_sources"
    NO_CONFIG_WIFI = "no_config_wifi"
    NO_CONFIG_BLUETOOTH = "no_config_bluetooth"
    NO_CONFIG_VPN = "no_config_vpn"
    NO_SHARE_LOCATION = "no_share_location"
    NO_MODIFY_ACCOUNTS = "no_modify_accounts"
    NO_FACTORY_RESET = "no_factory_reset"
    NO_DEBUGGING_FEATURES = "no_debugging_features"
    NO_USB_FILE_TRANSFER = "no_usb_file_transfer"
    NO_SAFE_BOOT = "no_safe_boot"
    NO_CAMERA = "no_camera"
    NO_SMS = "no_sms"
    NO_OUTGOING_CALLS = "no_outgoing_calls"
    NO_NETWORK_RESET = "no_network_reset"


KNOWN_RESTRICTIONS: frozenset[str] = frozenset(r.value for r in UserRestriction)


def is_known_restriction(key: str) -> bool:
    """Return whether *key* names a well-known restriction."""
    return key in KNOWN_RESTRICTIONS
