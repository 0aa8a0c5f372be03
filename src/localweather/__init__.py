"""Periodic local weather collection for a device.

On a fixed interval the device's last known position is resolved, current
conditions are fetched from a weather provider and one ``local_weather``
observation record is emitted.
"""

__version__ = "0.1.0"
