"""Frame-stepped arcade games with a recording canvas, gamepad input and a seeded random source."""

__version__ = "1.0.0"