"""Google Cloud Translation (v2) backend."""

from typing import List, Optional
from core.config import settings
from core.deadline import call_with_deadline
from core.exceptions import TranslationError
from core.logging import log
from translation.adapter import Translator

# Optional Google Cloud Translation import
try:
    from google.cloud import translate_v2
    TRANSLATE_AVAILABLE = True
except ImportError:
    TRANSLATE_AVAILABLE = False
    log.warning("google-cloud-translate not installed. Translation will be unavailable.")

# Maximum number of text segments per v2 request
MAX_SEGMENTS_PER_REQUEST = 128


class GoogleTranslator(Translator):
    """Translator backed by the Cloud Translation v2 REST API.

    Requests use ``format_='text'`` so line breaks in the input survive; HTML
    mode would normalize whitespace.
    """

    def __init__(self, client=None, timeout: Optional[float] = None):
        """Initialize the translator.

        Args:
            client: Preconfigured translate_v2.Client (created lazily if None)
            timeout: Deadline in seconds per request (default from settings)
        """
        self._client = client
        self.timeout = timeout if timeout is not None else settings.TRANSLATE_TIMEOUT_SECONDS

    @property
    def client(self):
        if self._client is None:
            if not TRANSLATE_AVAILABLE:
                raise TranslationError("google-cloud-translate is not installed. Install it with: pip install google-cloud-translate")
            log.info("Initializing Google Cloud Translation client...")
            self._client = translate_v2.Client()
        return self._client

    def _request(self, values, target_language: str):
        return call_with_deadline(
            self.client.translate,
            values,
            target_language=target_language,
            format_="text",
            service="translation",
            timeout=self.timeout,
        )

    def translate_text(self, text: str, target_language: str) -> str:
        result = self._request(text, target_language)
        return result["translatedText"]

    def translate_batch(self, texts: List[str], target_language: str) -> List[str]:
        translations = []
        for start in range(0, len(texts), MAX_SEGMENTS_PER_REQUEST):
            chunk = texts[start:start + MAX_SEGMENTS_PER_REQUEST]
            results = self._request(chunk, target_language)
            translations.extend(result["translatedText"] for result in results)
        return translations
