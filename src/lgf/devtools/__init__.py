from .calibration import CalibrationService

__all__ = ["CalibrationService"]
