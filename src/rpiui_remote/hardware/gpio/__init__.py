"""GPIO hardware backend for Raspberry Pi.

Provides :class:`GPIOHardwareFactory` and :class:`GPIOInputPin`.  Only
usable on a Pi with ``gpiozero`` and ``rpi-lgpio`` installed.
"""
