class MapGenerationError(ValueError):
    """Base error for map generation requests."""


class InvalidGeneratorError(MapGenerationError):
    """No generator given, or an unknown algorithm name."""


class ConfigError(MapGenerationError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


__all__ = ["MapGenerationError", "InvalidGeneratorError", "ConfigError"]
