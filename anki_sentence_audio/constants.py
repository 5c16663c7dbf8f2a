"""All magic numbers and configuration constants."""

FIELD_SEPARATOR = "\x1f"                     # Anki unit separator between note fields
SENTENCE_FIELD_INDEX = 4                     # zero-based index of the example sentence field
AUDIO_FILE_PREFIX = "_czech_frequency_"      # leading underscore keeps Anki's media check away
SOUND_MARKER_PATTERN = r"\[sound:([^\]]+)\]"
ELEVENLABS_API_BASE = "https://api.elevenlabs.io/v1"
ELEVENLABS_MODEL_ID = "eleven_turbo_v2_5"
LANGUAGE_CODE = "cs"
TARGET_VOICE_NAME = "George"                 # matched case-insensitively, else first voice
OUTPUT_FORMAT = "mp3_44100_128"              # 44.1kHz, 128kbps MP3
VOICE_STABILITY = 0.5
VOICE_SIMILARITY_BOOST = 0.8
VOICE_STYLE = 0.2
VOICE_SPEAKER_BOOST = True
HTTP_TIMEOUT = 60                            # seconds per request
EDGE_TARGET_VOICE = "cs-CZ-AntoninNeural"    # edge-tts ShortName
TTS_PROVIDERS = ("elevenlabs", "edge")
INTER_TASK_DELAY = 1.0                       # seconds between synthesis calls
DEFAULT_COLLECTION_PATH = "collection.anki21"
DEFAULT_MEDIA_DIR = "collection.media"
DEFAULT_AUDIO_LIST = "czech_audio_list.txt"
PROGRESS_EVERY = 100                         # notes between scan progress lines
SAMPLE_NOTES = 5                             # notes shown by inspect
SAMPLE_UPDATES = 5                           # modifications previewed before commit
FIELD_PREVIEW_CHARS = 100
TEXT_PREVIEW_CHARS = 60
VERSION = "0.1.0"
