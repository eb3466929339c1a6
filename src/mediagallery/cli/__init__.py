"""Command line interface for MediaGallery."""
