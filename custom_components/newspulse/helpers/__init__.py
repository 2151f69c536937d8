"""Home Assistant-bound helper functions for NewsPulse.

This module contains functions that REQUIRE Home Assistant dependencies
(hass.data lookups, device registry types).

Submodules:
    - entity_helpers: Signal names, coordinator lookup, DeviceInfo construction
"""

from . import entity_helpers

__all__ = [
    "entity_helpers",
]
