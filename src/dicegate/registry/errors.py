"""Error types for the tool registry."""


class RegistryError(Exception):
    """Base error for registry failures."""


class ToolNotFoundError(RegistryError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}")
