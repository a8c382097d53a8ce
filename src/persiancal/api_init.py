"""Default calendar cache (import side-effect)."""
from .api import set_cache
from .bootstrap import build_cache

set_cache(build_cache())
