"""Currency Converter API: anchor-based conversions over a static rate table."""

__version__ = "1.0.0"
