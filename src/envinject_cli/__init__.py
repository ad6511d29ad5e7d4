"""envinject: materialize runtime environment variables into static SPA bundles."""

from .version import __version__
from .core.environment import EnvironmentSnapshot
from .core.exceptions import ConfigError, EnvInjectError, HandoffError, TargetIOError
from .core.materializer import ConfigMaterializer, MaterializationSummary, materialize

__all__ = [
    '__version__',
    'ConfigMaterializer',
    'ConfigError',
    'EnvInjectError',
    'EnvironmentSnapshot',
    'HandoffError',
    'MaterializationSummary',
    'TargetIOError',
    'materialize',
]
