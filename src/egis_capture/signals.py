"""Capture handshake for the 0570 sensor.

Every frame is the ``EGIS`` magic followed by three command bytes. The order
is the firmware's command sequence; only the response to the last frame
carries image data.
"""

_CAPTURE_SEQUENCE = [
    # Register setup
    "45 47 49 53 01 20 3f", "45 47 49 53 01 58 3f",
    "45 47 49 53 01 21 09", "45 47 49 53 01 57 09",
    "45 47 49 53 01 22 03", "45 47 49 53 01 56 03",
    "45 47 49 53 01 23 01", "45 47 49 53 01 55 01",
    "45 47 49 53 01 24 01", "45 47 49 53 01 54 01",
    # Sensor tuning
    "45 47 49 53 01 16 3e", "45 47 49 53 01 09 0b",
    "45 47 49 53 01 14 03", "45 47 49 53 01 15 00",
    "45 47 49 53 01 02 0f", "45 47 49 53 01 10 00",
    "45 47 49 53 01 11 38", "45 47 49 53 01 12 00",
    "45 47 49 53 01 13 71", "45 47 49 53 01 03 80",
    # Arm + trigger
    "45 47 49 53 00 02 80", "45 47 49 53 01 02 2f",
    "45 47 49 53 06 00 fe",
]

SIGNAL_LENGTH = 7

DEVICE_SIGNALS = tuple(bytes.fromhex(s) for s in _CAPTURE_SEQUENCE)
