class CacheTierUnavailableException(Exception):
    """Raised by a cache tier whose backing store cannot be reached.

    Never escapes ``TieredCacheRepository``: the tiered cache catches it
    and consults the next tier.
    """

    def __init__(self, tier_name: str, reason: str = ""):
        self.tier_name = tier_name
        self.reason = reason
        message = f"Cache tier '{tier_name}' is unavailable"
        if reason:
            message += f": {reason}"
        super().__init__(message)
