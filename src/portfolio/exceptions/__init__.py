from .base import *  # noqa: F401,F403
from .base import __all__ as _base_all
from .boundary import operation_boundary
from .translator import ErrorResponse, translate

__all__ = [*_base_all, "operation_boundary", "ErrorResponse", "translate"]
