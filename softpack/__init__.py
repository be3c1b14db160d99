"""SoftPack catalog core: auth, security hygiene and catalog storage."""

__version__ = "1.0.0"
