class NotFoundError(Exception):
    """A referenced template or entity does not exist (or is inactive)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
