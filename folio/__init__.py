"""Folio - personal blog backend with cached English/Chinese article translation."""

__version__ = "0.1.0"
