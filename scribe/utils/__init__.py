"""
Shared utilities for SCRIBE.

Common functionality used across contexts:
- Logger configuration
- Front matter reading
- Render intermediate staging
"""

from scribe.utils.front_matter import read_front_matter
from scribe.utils.resources import copy_render_intermediates, find_external_resources

__all__ = ["copy_render_intermediates", "find_external_resources", "read_front_matter"]
