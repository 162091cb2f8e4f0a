"""Development server integration."""

from .tunnel import DevServerOverrides, TunnelError, apply_overrides, dev_server_overrides

__all__ = ["DevServerOverrides", "TunnelError", "apply_overrides", "dev_server_overrides"]
