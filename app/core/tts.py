from typing import List

from yarl import URL

MAX_TEXT_LENGTH = 200


def get_audio_url(text: str, lang: str = "en", slow: bool = False, host: str = "https://translate.google.com") -> str:
    """Return a Google Translate TTS URL that streams `text` as mp3.

    The endpoint refuses text longer than 200 characters.
    """
    if not text or not text.strip():
        raise ValueError("text should be a non-empty string")
    if len(text) > MAX_TEXT_LENGTH:
        raise ValueError(f"text length ({len(text)}) should be less than {MAX_TEXT_LENGTH} characters")

    url = URL(host).with_path("/translate_tts").with_query(
        {
            "ie": "UTF-8",
            "q": text,
            "tl": lang,
            "total": 1,
            "idx": 0,
            "textlen": len(text),
            "client": "tw-ob",
            "prev": "input",
            "ttsspeed": "0.24" if slow else "1",
        }
    )
    return str(url)


def split_text(text: str, limit: int = MAX_TEXT_LENGTH) -> List[str]:
    """Split `text` on spaces into chunks of at most `limit` characters."""
    chunks: List[str] = []
    current = ""
    for word in text.split():
        while len(word) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(word[:limit])
            word = word[limit:]
        if not word:
            continue
        if current and len(current) + 1 + len(word) > limit:
            chunks.append(current)
            current = word
        else:
            current = f"{current} {word}" if current else word
    if current:
        chunks.append(current)
    return chunks


def get_all_audio_urls(text: str, lang: str = "en", slow: bool = False, host: str = "https://translate.google.com") -> List[str]:
    """Like `get_audio_url`, but splits long text into several URLs to play in order."""
    if not text or not text.strip():
        raise ValueError("text should be a non-empty string")
    return [get_audio_url(chunk, lang=lang, slow=slow, host=host) for chunk in split_text(text)]
