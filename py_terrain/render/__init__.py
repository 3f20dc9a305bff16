"""
Output of classified heightmaps: raster images and text previews.
"""

from .image import encode_png, save_world_image, to_image
from .preview import GLYPHS, print_world, render_preview

__all__ = ['encode_png', 'save_world_image', 'to_image',
           'GLYPHS', 'print_world', 'render_preview']
