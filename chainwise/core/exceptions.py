"""Domain errors that cross the AI pipeline boundary.

Everything else (documentation lookup, market data, model completion) degrades
internally instead of raising.
"""


class ChainWiseError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500


class InvalidPersonaError(ChainWiseError):
    status_code = 400

    def __init__(self, persona: str):
        self.persona = persona
        super().__init__(f"Invalid persona: {persona}")


class UnknownToolError(ChainWiseError):
    status_code = 404

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"Unknown premium tool: {tool}")


class InsufficientTierError(ChainWiseError):
    status_code = 403

    def __init__(self, feature: str, required_tier: str, user_tier: str):
        self.feature = feature
        self.required_tier = required_tier
        self.user_tier = user_tier
        super().__init__(f"{feature} requires {required_tier} tier or higher")


class InsufficientCreditsError(ChainWiseError):
    status_code = 402

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient credits. This request requires {required} credits, "
            f"{available} available."
        )


class UnknownAccountError(ChainWiseError):
    status_code = 404

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User profile not found: {user_id}")


class InvalidRefillError(ChainWiseError):
    status_code = 400
