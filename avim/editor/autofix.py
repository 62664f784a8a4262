"""Boundary correction: manual word moves and the learned autofix pass.

Fixed-length chunking cuts sentences mid-word, so the first few words of a
clip often belong to the clip before it. Each manual correction records how
many words were moved. Once those counts agree closely enough, autofix moves
the average count across every boundary the user has not touched.
"""

import logging
import math
import statistics
from dataclasses import dataclass, field

from ..config import AUTOFIX_MAX_STDDEV
from ..errors import InsufficientAdjustmentSamples, LowCorrectionConfidence
from .clips import ClipStore

logger = logging.getLogger(__name__)


@dataclass
class AutofixReport:
    words_per_boundary: int
    boundaries_fixed: int
    words_moved: int
    clips_removed: int


@dataclass
class BoundaryCorrector:
    samples: list[int] = field(default_factory=list)
    max_stddev: float = AUTOFIX_MAX_STDDEV

    def confirm(self, store: ClipStore, word_index: int) -> int:
        """Move words ``0..word_index`` of the next clip onto the current one.

        Flags both clips as manually adjusted and records one sample. Returns
        the number of words moved (0 if the next clip has no such word).
        """
        index = store.current_index
        following = store.next
        if following is None or word_index >= len(following.words):
            return 0
        moved = store.move_leading_words(index, word_index + 1)
        store[index].is_manually_adjusted = True
        store[index + 1].is_manually_adjusted = True
        self.samples.append(moved)
        logger.debug("Adjustment %d: Moved %d words.", len(self.samples), moved)
        return moved

    def fit(self) -> int:
        """Return the word count to move per boundary, or raise if not confident."""
        if not self.samples:
            raise InsufficientAdjustmentSamples()
        mean = statistics.fmean(self.samples)
        stddev = statistics.pstdev(self.samples)
        logger.debug("Autofix: Mean words moved: %.2f, Std Dev: %.2f", mean, stddev)
        if stddev > self.max_stddev:
            raise LowCorrectionConfidence(stddev)
        # Half away from zero; samples are never negative
        return math.floor(mean + 0.5)

    def apply(self, store: ClipStore, words_per_boundary: int) -> AutofixReport:
        """Move ``words_per_boundary`` words across every unlocked boundary.

        Pairs are visited from the end of the document backwards. Clips left
        blank are removed afterwards.
        """
        fixed = moved_total = 0
        for i in range(len(store) - 2, -1, -1):
            current, following = store[i], store[i + 1]
            if current.is_manually_adjusted or following.is_manually_adjusted:
                continue
            if len(following.words) > words_per_boundary:
                moved = store.move_leading_words(i, words_per_boundary)
                if moved:
                    fixed += 1
                    moved_total += moved
        removed = store.prune_empty()
        logger.debug(
            "Applied autofix: %d boundaries, %d words, %d clips removed",
            fixed, moved_total, removed,
        )
        return AutofixReport(words_per_boundary, fixed, moved_total, removed)
