"""Edinburgh antiques trail: directory backend for antique shops, auctioneers and dealers."""

__version__ = "0.1.0"
