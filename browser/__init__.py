"""Remote browser helpers built on Playwright."""

from .remote_flow import RemoteBrowser, RemoteConnection

__all__ = ["RemoteBrowser", "RemoteConnection"]
