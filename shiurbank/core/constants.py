"""Core constants: audio formats, upload limits and cloud resource naming.

Single source of truth for the audio extension table (upload validation and
streaming Content-Type) and for how per-series buckets, topics and object
keys are named.
"""

# Extension (lower case, no dot) -> Content-Type used when streaming
AUDIO_CONTENT_TYPES: dict[str, str] = {
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "m4a": "audio/mp4",
    "opus": "audio/opus",
    "flac": "audio/flac",
    "aac": "audio/aac",
    "webm": "audio/webm",
    "aiff": "audio/aiff",
    "aif": "audio/aiff",
    "wma": "audio/x-ms-wma",
}
DEFAULT_AUDIO_CONTENT_TYPE = "audio/mpeg"

AUDIO_CACHE_CONTROL = "public, max-age=3600"

RECORDINGS_FOLDER = "recordings"

# Uploads carry this many keyword fields (keyword1..keyword6)
KEYWORD_COUNT = 6


def file_extension(filename: str | None) -> str:
    """Lower-cased extension without the dot, or "" when there is none."""
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def is_audio_file(filename: str | None) -> bool:
    return file_extension(filename) in AUDIO_CONTENT_TYPES


def audio_content_type(filename: str | None) -> str:
    return AUDIO_CONTENT_TYPES.get(file_extension(filename), DEFAULT_AUDIO_CONTENT_TYPE)


def series_bucket_name(prefix: str, series_id: int) -> str:
    """Bucket holding one series' recordings, e.g. shiurbank-series-12."""
    return f"{prefix}-{series_id}"


def series_topic_name(prefix: str, series_id: int) -> str:
    """Notification topic for one series' subscribers."""
    return f"{prefix}-{series_id}"


def recording_key(recording_id: int, extension: str) -> str:
    """Object key for an uploaded recording inside its series bucket."""
    return f"{RECORDINGS_FOLDER}/{recording_id}.{extension}"


# Managed database status values reported when the instance cannot be described
DB_STATUS_NOT_FOUND = "not-found"
DB_STATUS_ERROR = "error"
