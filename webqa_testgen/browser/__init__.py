from .session import BrowserSession, BrowserSessionPool, NavigationError, SessionLaunchError

__all__ = ["BrowserSession", "BrowserSessionPool", "NavigationError", "SessionLaunchError"]
