"""Ray-casting maze viewer for .cub scene files, with BMP screenshots."""

__version__ = "0.1.0"