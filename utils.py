# utils.py
import os
import json
import time
import uuid
import tempfile


def now_ms():
    return int(time.time() * 1000)


def new_message_id():
    return uuid.uuid4().hex


def read_json(path):
    """Load a JSON document; an empty file reads as an empty list."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return json.loads(text or "[]")


def write_json_atomic(path, payload):
    """Write ``payload`` next to ``path`` and rename it into place."""
    directory = os.path.dirname(path) or "."
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".json", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def parse_timestamp(raw):
    """Coerce a client-supplied timestamp to a number, or None if unusable."""
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        return raw if raw else None
    if isinstance(raw, str) and raw.strip():
        try:
            value = float(raw.strip())
        except ValueError:
            return None
        return value if value else None
    return None
