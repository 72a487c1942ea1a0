"""Sun, Earth and Moon animated through a transform hierarchy with live orbital controls."""

__version__ = "0.1.0"
