"""Deepgram transcription implementation (SDK v5)."""

import asyncio

from deepgram import DeepgramClient

from ..config import DEFAULT_DEEPGRAM_MODEL, DEFAULT_LANGUAGE, get_deepgram_api_key
from ..models import Clip


class DeepgramProvider:
    """Deepgram transcription provider.

    Each utterance in the response becomes one clip, so clip boundaries follow
    Deepgram's pause and speaker-change segmentation.
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_DEEPGRAM_MODEL,
        language: str = DEFAULT_LANGUAGE,
        diarize: bool = True,
    ) -> None:
        self.model = model
        self.language = language
        self.diarize = diarize
        self._client: DeepgramClient | None = None

    @property
    def client(self) -> DeepgramClient:
        if self._client is None:
            self._client = DeepgramClient(api_key=get_deepgram_api_key())
        return self._client

    async def transcribe(self, data: bytes) -> list[Clip]:
        response = await asyncio.to_thread(self._transcribe_sync, data)
        return self._parse_response(response)

    def _transcribe_sync(self, data: bytes) -> object:
        return self.client.listen.v1.media.transcribe_file(
            request=data,
            model=self.model,
            language=self.language,
            smart_format=True,
            diarize=self.diarize,
            utterances=True,
            punctuate=True,
        )

    def _parse_response(self, response: object) -> list[Clip]:
        # SDK v5 returns a ListenV1Response with .results.utterances
        results = response.results  # type: ignore[attr-defined]

        clips: list[Clip] = []
        for utt in getattr(results, "utterances", None) or []:
            text = (utt.transcript or "").strip()
            if not text:
                continue
            speaker_idx = getattr(utt, "speaker", None) or 0
            clips.append(
                Clip(
                    id=len(clips) + 1,
                    speaker=f"Speaker {speaker_idx}",
                    transcript=text,
                    start_time=float(utt.start),
                    end_time=float(utt.end),
                )
            )
        return clips
