"""
MediaGallery - Static HTML Media Gallery Generator

Builds a single self-contained HTML page of previews for the images and
videos in a directory, reusing previews from the previous run.
"""

__version__ = "0.1.0"
