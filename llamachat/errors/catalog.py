"""Model catalog exceptions."""


class ModelNotFoundError(Exception):
    """Raised when a model file cannot be resolved inside the catalog.

    Attributes:
        name: The requested model name or path.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"model not found: {name}")
        self.name = name


__all__ = ["ModelNotFoundError"]
