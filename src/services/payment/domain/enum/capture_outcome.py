from enum import Enum


class CaptureOutcome(str, Enum):
    """決済確定の結果"""

    CONFIRMED = "CONFIRMED"
    ALREADY_CONFIRMED = "ALREADY_CONFIRMED"
