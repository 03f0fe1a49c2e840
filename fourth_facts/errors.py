class FactsError(Exception):
    """Base exception for requests the webhook cannot turn into a reply."""

    pass


class MalformedRequestError(FactsError):
    """Raised when the inbound body is not a conversational-turn object."""

    pass


class UnknownActionError(FactsError):
    """Raised when the platform sends an action no handler is registered for."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"No matching intent handler for: {action or '(empty)'}")
