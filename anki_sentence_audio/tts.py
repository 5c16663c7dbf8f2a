"""Speech synthesis via ElevenLabs (or edge-tts) and sequential batch generation."""

import asyncio
import logging
import os
import time

import edge_tts
import requests

from anki_sentence_audio.constants import (
    ELEVENLABS_API_BASE,
    ELEVENLABS_MODEL_ID,
    LANGUAGE_CODE,
    TARGET_VOICE_NAME,
    OUTPUT_FORMAT,
    VOICE_STABILITY,
    VOICE_SIMILARITY_BOOST,
    VOICE_STYLE,
    VOICE_SPEAKER_BOOST,
    HTTP_TIMEOUT,
    EDGE_TARGET_VOICE,
    INTER_TASK_DELAY,
    TEXT_PREVIEW_CHARS,
)
from anki_sentence_audio.models import AudioTask, BatchResult

logger = logging.getLogger(__name__)


class SynthesisError(Exception):
    """A single synthesis attempt failed. `code` identifies the failure kind."""

    code = 3


class EmptyVoiceListError(SynthesisError):
    code = 1


class ProviderStatusError(SynthesisError):
    code = 2

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"HTTP {status_code}: {body[:200]}")
        self.status_code = status_code
        self.body = body


class ProviderTransportError(SynthesisError):
    code = 3


def _pick_voice(voices: list[dict], target: str, name_key: str, id_key: str) -> str:
    """Voice id whose name matches target (case-insensitive), else the first one."""
    if not voices:
        raise EmptyVoiceListError("Provider returned no voices")
    for voice in voices:
        if str(voice.get(name_key, "")).lower() == target.lower():
            return voice[id_key]
    return voices[0][id_key]


class ElevenLabsClient:
    """Minimal ElevenLabs text-to-speech client.

    resolve_voice() and synthesize() each make one HTTP call and never
    retry. Failures raise a SynthesisError subclass.
    """

    def __init__(
        self,
        api_key: str,
        session: requests.Session | None = None,
        base_url: str = ELEVENLABS_API_BASE,
        timeout: float = HTTP_TIMEOUT,
        voice_name: str = TARGET_VOICE_NAME,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.voice_name = voice_name
        self.session = session or requests.Session()
        self.session.headers.update({"xi-api-key": api_key})

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ProviderTransportError(f"{method} {path} failed: {e}") from e
        if not 200 <= response.status_code < 300:
            raise ProviderStatusError(response.status_code, response.text)
        return response

    def resolve_voice(self) -> str:
        """Return the voice_id of the configured voice name."""
        response = self._request("GET", "/voices")
        data = response.json()
        # The live API wraps the list: {"voices": [...]}
        voices = data.get("voices", []) if isinstance(data, dict) else data
        voice_id = _pick_voice(voices, self.voice_name, "name", "voice_id")
        logger.debug("Resolved voice %s -> %s", self.voice_name, voice_id)
        return voice_id

    def synthesize(self, voice_id: str, text: str) -> bytes:
        """Synthesize Czech speech for text, returning MP3 bytes."""
        payload = {
            "text": text,
            "model_id": ELEVENLABS_MODEL_ID,
            "language_code": LANGUAGE_CODE,
            "voice_settings": {
                "stability": VOICE_STABILITY,
                "similarity_boost": VOICE_SIMILARITY_BOOST,
                "style": VOICE_STYLE,
                "use_speaker_boost": VOICE_SPEAKER_BOOST,
            },
        }
        response = self._request(
            "POST",
            f"/text-to-speech/{voice_id}",
            params={"output_format": OUTPUT_FORMAT},
            json=payload,
        )
        return response.content


class EdgeVoiceClient:
    """Free Microsoft Edge voices via edge-tts. Same interface as ElevenLabsClient."""

    def __init__(self, voice_name: str = EDGE_TARGET_VOICE):
        self.voice_name = voice_name

    def resolve_voice(self) -> str:
        try:
            voices = asyncio.run(edge_tts.list_voices())
        except Exception as e:
            raise ProviderTransportError(f"Listing edge voices failed: {e}") from e
        return _pick_voice(voices, self.voice_name, "ShortName", "ShortName")

    def synthesize(self, voice_id: str, text: str) -> bytes:
        async def collect() -> bytes:
            communicate = edge_tts.Communicate(text, voice_id)
            audio = bytearray()
            async for chunk in communicate.stream():
                if chunk["type"] == "audio":
                    audio.extend(chunk["data"])
            return bytes(audio)

        try:
            return asyncio.run(collect())
        except Exception as e:
            raise ProviderTransportError(f"edge-tts synthesis failed: {e}") from e


def _describe_error(error: Exception) -> str:
    """Error message plus its inner cause, if any."""
    message = str(error) or type(error).__name__
    inner = error.__cause__ or error.__context__
    if inner is not None:
        message += f" (inner: {inner})"
    return message


def generate_single(client, voice_id: str, text: str, output_path: str) -> None:
    """Synthesize one text and write the bytes to output_path."""
    audio = client.synthesize(voice_id, text)
    with open(output_path, "wb") as f:
        f.write(audio)


def generate_audio(
    tasks: list[AudioTask],
    client,
    media_dir: str,
    delay: float = INTER_TASK_DELAY,
) -> BatchResult:
    """Generate an MP3 per task into media_dir, one request at a time.

    A failed task is reported and skipped; the batch always runs to the
    end. The voice is looked up on the first task and reused once found.
    Sleeps `delay` seconds after every task. Prints a progress counter.
    """
    os.makedirs(media_dir, exist_ok=True)
    total = len(tasks)
    result = BatchResult()
    voice_id = None

    print(f"Generating {total} audio files in: {media_dir}")

    for i, task in enumerate(tasks):
        output_path = os.path.join(media_dir, task.filename)
        print(f"[{i + 1}/{total}] Generating: {task.filename}")
        print(f"Text: {task.text[:TEXT_PREVIEW_CHARS]}...")

        try:
            if voice_id is None:
                voice_id = client.resolve_voice()
            generate_single(client, voice_id, task.text, output_path)
        except SynthesisError as e:
            logger.debug("Synthesis failed for %s: %s", task.filename, e)
            print(f"✗ Failed to generate: {task.filename} (Error code: {e.code})")
            result.failed.append((task, e.code, str(e)))
        except Exception as e:
            message = _describe_error(e)
            print(f"Error generating speech: {message}")
            print(f"✗ Failed to generate: {task.filename} (Error code: {SynthesisError.code})")
            result.failed.append((task, SynthesisError.code, message))
        else:
            print(f"✓ Successfully generated: {task.filename}")
            result.generated.append(output_path)

        time.sleep(delay)

    print("\nAudio generation complete!")
    print(f"Files generated in: {media_dir}")
    print("Run Tools > Check Media in Anki to refresh the media database.")
    return result
