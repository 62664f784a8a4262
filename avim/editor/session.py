"""Editing session: the single context value every handler receives."""

import logging
import subprocess
from collections import deque
from typing import Callable

from ..config import DEBUG_LOG_LINES, DISCREPANCY_WARNING_SECONDS
from ..models import Clip, Intent, Loading, Mode, Ready
from ..transcription.base import AudioBackend
from ..transcription.pipeline import discrepancy
from ..utils import copy_to_clipboard
from .autofix import BoundaryCorrector
from .clips import ClipStore
from .history import History

logger = logging.getLogger(__name__)


class Session:
    def __init__(
        self,
        audio_path: str,
        *,
        audio: AudioBackend,
        project_path: str | None = None,
        clipboard: Callable[[str], None] = copy_to_clipboard,
        debug: bool = False,
    ) -> None:
        self.audio_path = audio_path
        self.project_path = project_path
        self.audio = audio
        self.clipboard = clipboard
        self.debug = debug

        self.state: Loading | Ready = Loading("Checking cache or transcribing...")
        self.mode = Mode.NORMAL
        self.store = ClipStore()
        self.history = History(self.store)
        self.corrector = BoundaryCorrector()

        self.command_buffer = ""
        self.pending_chord: Intent | None = None
        self.register: Clip | None = None
        self.adjust_word_index = 0
        self.playback: subprocess.Popen | None = None

        self.status_message = "Welcome to avim!"
        self.last_error: str | None = None
        self.discrepancy = 0.0
        self.debug_log: deque[str] = deque(maxlen=DEBUG_LOG_LINES)
        self.should_quit = False

    @property
    def ready(self) -> bool:
        return isinstance(self.state, Ready)

    def load_clips(self, clips: list[Clip], duration: float | None) -> None:
        """Install a freshly loaded clip list and check it against the audio length."""
        self.store.load(clips)
        self.state = Ready()

        if duration is None:
            self.discrepancy = 0.0
            self.status_message = f"Loaded {len(clips)} clips."
            return

        self.discrepancy = discrepancy(clips, duration)
        logger.debug("Total Audio Duration: %.2fs", duration)
        logger.debug("Discrepancy: %.2fs", self.discrepancy)

        if self.discrepancy > DISCREPANCY_WARNING_SECONDS:
            self.status_message = (
                f"Loaded {len(clips)} clips. "
                f"Warning: Tx is {self.discrepancy:.2f}s longer than audio."
            )
        else:
            self.status_message = f"Loaded {len(clips)} clips."

    def fail(self, message: str) -> None:
        """Enter the loading error screen; only quitting is possible from here."""
        self.last_error = message
        self.state = Loading(
            f"ERROR: {message}. Press 'q' or Ctrl+C to quit.", failed=True
        )

    def record_error(self, status: str, error: Exception) -> None:
        self.status_message = status
        self.last_error = str(error)

    def stop_playback(self) -> bool:
        if self.playback is None:
            return False
        self.audio.terminate(self.playback)
        self.playback = None
        return True


class SessionLogHandler(logging.Handler):
    """Collects log records into the session's debug log panel."""

    def __init__(self, session: Session, level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self.session = session
        self.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        self.session.debug_log.append(self.format(record))
