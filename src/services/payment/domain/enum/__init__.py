from .capture_outcome import CaptureOutcome as CaptureOutcome
