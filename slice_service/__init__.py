"""
Slice Service - helpers for exporting rendered markdown as image slices.

Plans where long content is cut into fixed-height images, normalizes
emphasis markup for multibyte text, and parses viewport size descriptors.
The rendering itself is done by the caller.
"""

__version__ = "0.1.0"
