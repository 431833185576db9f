"""repscale - weight goal projection and maintenance estimation."""

__version__ = "0.1.0"
