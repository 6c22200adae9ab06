"""Version request parsing and resolution."""

from relaunch.resolver.request import determine_request, load_preference, parse_version_token
from relaunch.resolver.resolver import resolve

__all__ = [
    "determine_request",
    "load_preference",
    "parse_version_token",
    "resolve",
]
