from pnode_analytics.exceptions.error_details import ErrorDetails
from pnode_analytics.exceptions.managed_exception import ManagedException
from pnode_analytics.exceptions.invalid_argument_exception import InvalidArgumentException
from pnode_analytics.exceptions.item_not_found_exception import ItemNotFoundException
from pnode_analytics.exceptions.internal_error_exception import InternalErrorException
from pnode_analytics.exceptions.upstream_exception import UpstreamException
from pnode_analytics.exceptions.prpc_exception import PrpcException
from pnode_analytics.exceptions.cache_tier_unavailable_exception import CacheTierUnavailableException

__all__ = [
    "ErrorDetails",
    "ManagedException",
    "InvalidArgumentException",
    "ItemNotFoundException",
    "InternalErrorException",
    "UpstreamException",
    "PrpcException",
    "CacheTierUnavailableException"
]
