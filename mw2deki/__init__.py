"""mw2deki — MediaWiki to Deki markup migration."""
from mw2deki._version import __version__

__all__ = ["__version__"]
