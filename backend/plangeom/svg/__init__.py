"""SVG document reading."""
