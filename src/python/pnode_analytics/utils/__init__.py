from .metrics_util import MetricsUtil
from .pnode_util import PNodeUtil

__all__ = [
    "MetricsUtil",
    "PNodeUtil"
]
