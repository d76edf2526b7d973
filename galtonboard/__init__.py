"""Galton board simulation, SSD1306-style framebuffer and controller byte streams."""

__version__ = "0.1.0"
__all__ = ["font", "simulation", "ssd1306"]