"""om - a personal program manager.

Stores named shell commands in a JSON file and runs them with forwarded,
shell-escaped arguments.
"""

from .constants import VERSION as __version__

__all__ = ["__version__"]
