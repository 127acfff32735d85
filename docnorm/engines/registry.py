"""
Shared factory registry for Docnorm engine families.

Each family (image codecs, PDF writers, compressors, text extractors) owns
one EngineRegistry. Backends register a factory class whose static
``create(config)`` builds the engine; callers look engines up by name.

Usage:
    CODECS = EngineRegistry("image codec")

    @CODECS.register("pillow")
    class PillowCodecFactory:
        @staticmethod
        def create(config: dict) -> ImageCodec:
            return PillowCodec(config)

    codec = CODECS.get("pillow", config)
"""

from typing import Callable, Dict, Generic, List, TypeVar

T = TypeVar("T")


class EngineRegistry(Generic[T]):
    """
    Name -> factory mapping for one engine family.

    Attributes:
        family: Human-readable family name used in error messages
    """

    def __init__(self, family: str):
        self.family = family
        self._factories: Dict[str, Callable[[dict], T]] = {}

    def register(self, name: str):
        """Decorator registering a factory class under name."""
        def decorator(factory_class):
            self._factories[name] = factory_class.create
            return factory_class
        return decorator

    def get(self, name: str, config: dict) -> T:
        """
        Build the engine registered under name.

        Raises:
            ValueError: If name is not registered
        """
        if name not in self._factories:
            available = ', '.join(self._factories) or 'none'
            raise ValueError(f"Unknown {self.family}: '{name}'. Available: {available}")
        return self._factories[name](config)

    def names(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories
