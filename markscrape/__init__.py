"""markscrape: fetch a webpage and return its main content as markdown."""

__version__ = "0.1.0"
