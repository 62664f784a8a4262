"""Error taxonomy shared by the pipeline, the editor and the CLI."""

from enum import Enum


class ErrorKind(str, Enum):
    DURATION_UNAVAILABLE = "duration_unavailable"
    CHUNK_EXTRACTION_FAILED = "chunk_extraction_failed"
    TRANSCRIPTION_FAILED = "transcription_failed"
    PROJECT_LOAD_MALFORMED = "project_load_malformed"
    SERIALIZATION_FAILED = "serialization_failed"
    IO_FAILED = "io_failed"
    CLIPBOARD_UNAVAILABLE = "clipboard_unavailable"
    UNKNOWN_COMMAND = "unknown_command"
    INSUFFICIENT_ADJUSTMENT_SAMPLES = "insufficient_adjustment_samples"
    LOW_CORRECTION_CONFIDENCE = "low_correction_confidence"
    AUDIO_TOOL_FAILED = "audio_tool_failed"


class AvimError(Exception):
    kind: ErrorKind


class DurationUnavailable(AvimError):
    kind = ErrorKind.DURATION_UNAVAILABLE

    def __init__(self, path: str = "") -> None:
        self.path = path
        super().__init__("Could not get audio duration.")


class ChunkExtractionFailed(AvimError):
    kind = ErrorKind.CHUNK_EXTRACTION_FAILED

    def __init__(self, index: int, detail: str = "") -> None:
        self.index = index
        self.detail = detail
        message = f"Failed to create chunk {index}"
        super().__init__(f"{message}: {detail}" if detail else message)


class TranscriptionFailed(AvimError):
    """Transcription of one chunk failed; ``detail`` is the provider's text."""

    kind = ErrorKind.TRANSCRIPTION_FAILED

    def __init__(self, index: int, detail: str) -> None:
        self.index = index
        self.detail = detail
        super().__init__(detail)


class ProjectLoadMalformed(AvimError):
    kind = ErrorKind.PROJECT_LOAD_MALFORMED


class SerializationFailed(AvimError):
    kind = ErrorKind.SERIALIZATION_FAILED


class IoFailed(AvimError):
    kind = ErrorKind.IO_FAILED


class ClipboardUnavailable(AvimError):
    kind = ErrorKind.CLIPBOARD_UNAVAILABLE


class UnknownCommand(AvimError):
    kind = ErrorKind.UNKNOWN_COMMAND

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"Unknown command: {line}")


class InsufficientAdjustmentSamples(AvimError):
    kind = ErrorKind.INSUFFICIENT_ADJUSTMENT_SAMPLES

    def __init__(self) -> None:
        super().__init__(
            "Not enough data to autofix. Please adjust a few clips first."
        )


class LowCorrectionConfidence(AvimError):
    kind = ErrorKind.LOW_CORRECTION_CONFIDENCE

    def __init__(self, stddev: float) -> None:
        self.stddev = stddev
        super().__init__(
            f"Pattern is not consistent enough (Std Dev: {stddev:.2f}). "
            "Please adjust more clips."
        )


class AudioToolFailed(AvimError):
    kind = ErrorKind.AUDIO_TOOL_FAILED
