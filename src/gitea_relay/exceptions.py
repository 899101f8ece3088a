class UnrecoverableError(ValueError):
    """Base class for all unrecoverable errors in the Gitea relay."""

    pass


class HookDecodeError(UnrecoverableError):
    """Raised when a webhook body cannot be decoded into a hook payload."""

    def __init__(self, event: str, message: str):
        super().__init__(f"Cannot decode {event} hook: {message}")
        self.event = event
