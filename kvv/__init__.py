"""kvv — Key Vault Viewer, a terminal browser for cloud secret stores."""

__version__ = "0.1.0"
