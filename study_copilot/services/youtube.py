import re

# Covers youtu.be/ID, /v/ID, /u/x/ID, /embed/ID, watch?v=ID and &v=ID.
_YT_URL_RE = re.compile(r"^.*(youtu.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")
_YT_ID_LEN = 11


def extract_youtube_video_id(url: str) -> str | None:
    """
    Supports:
    - https://www.youtube.com/watch?v=VIDEOID
    - https://www.youtube.com/watch?feature=share&v=VIDEOID
    - https://youtu.be/VIDEOID
    - https://www.youtube.com/embed/VIDEOID
    - https://www.youtube.com/v/VIDEOID
    """
    m = _YT_URL_RE.match((url or "").strip())
    if not m:
        return None
    vid = m.group(2)
    return vid if len(vid) == _YT_ID_LEN else None

