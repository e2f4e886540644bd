"""Local-network file sharing with live upload notifications."""
__version__ = "1.0.0"
