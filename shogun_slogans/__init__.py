"""Shogun Slogans: animated text rendering.

Server side compiles animation definitions into scoped, minified CSS and
matching markup; the ``client`` package drives per-element animation
lifecycles over a small DOM model.
"""

__version__ = "3.2.0"
