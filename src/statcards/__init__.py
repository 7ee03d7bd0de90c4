"""On-demand SVG stat cards for GitHub profiles."""

__version__ = "0.1.0"
