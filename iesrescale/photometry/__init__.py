from iesrescale.photometry.rescale import RescaleError, near_horizontal_threshold, rescale_record

__all__ = ["RescaleError", "near_horizontal_threshold", "rescale_record"]
