class InvalidParameterError(ValueError):
    """Raised when an operation receives a parameter outside its valid range."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation}: {message}")
