"""EasyFront: visual page composition with two-way HTML/CSS code sync."""

__version__ = "1.0.0"
