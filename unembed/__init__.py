"""unembed — move base64 data-URI images out of markdown notes into image files."""

__version__ = "0.1.0"
