"""Frame collection, input decoding and progress reporting for GIF animations."""

__version__ = "1.34.0"

__all__ = [
    "collector",
    "errors",
    "gif_source",
    "inputs",
    "png_source",
    "progress",
    "source",
    "y4m_source",
    "yuv",
]