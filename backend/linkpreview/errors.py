class PreviewError(Exception):
    """Base class for failures while building a link preview"""


class InvalidInput(PreviewError):
    """Missing or malformed URL, raised before any browser work"""


class LaunchFailure(PreviewError):
    """The browser process could not be started"""


class NavigationError(PreviewError):
    """The page could not be loaded"""


class NavigationTimeout(NavigationError):
    """The target did not finish loading within the navigation bound"""


class ExtractionFault(PreviewError):
    """Reading the rendered page failed"""
