from iesrescale.core.config import RescaleOptions

__all__ = ["RescaleOptions"]
