"""
Weather lookup widget backed by the Open-Meteo geocoding and forecast APIs.
"""

__version__ = "1.0.0"
