"""Drawing on in-memory RGB565/ARGB4444 buffers with clipping, shapes, masks, bitmap fonts and image loading."""

__version__ = "0.1.0"
__all__ = [
    "canvas",
    "files",
    "helpers",
    "imaging",
    "keyboard",
    "masks",
    "pixels",
    "shapes",
    "text",
]