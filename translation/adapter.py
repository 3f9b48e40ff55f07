"""Translation adapter: paragraph records in, translated records out.

Translations are matched back to paragraphs by position only. The adapter
therefore refuses to return anything when the number of translated segments
differs from the number of paragraphs sent.
"""

from typing import List, Optional
from core.config import settings
from core.exceptions import AlignmentMismatch, DocumentTranslationError, TranslationError
from core.logging import log
from layout.paragraph_extractor import ParagraphRecord

SEGMENT_SEPARATOR = "\n"
TRANSLATION_MODES = ("joined", "batch", "per_paragraph")


class Translator:
    """Interface of a text-to-text translation backend."""

    def translate_text(self, text: str, target_language: str) -> str:
        """Translate one text blob, preserving its line breaks."""
        raise NotImplementedError

    def translate_batch(self, texts: List[str], target_language: str) -> List[str]:
        """Translate several texts, one result per input in input order."""
        return [self.translate_text(text, target_language) for text in texts]


class TranslationAdapter:
    """Sends paragraph texts to a Translator and realigns the results.

    Modes:
        joined: texts joined with newlines, one call, response split on newlines
        batch: texts sent as a list, one call returning one item per text
        per_paragraph: one call per paragraph
    """

    def __init__(self, translator: Translator, mode: Optional[str] = None):
        mode = mode or settings.TRANSLATION_MODE
        if mode not in TRANSLATION_MODES:
            raise ValueError(f"Unknown translation mode: {mode}. Expected one of {TRANSLATION_MODES}")
        self.translator = translator
        self.mode = mode

    def translate_texts(self, texts: List[str], target_language: str) -> List[str]:
        """Translate texts, returning exactly one segment per input.

        Raises:
            AlignmentMismatch: If the segment count differs from len(texts)
            TranslationError: If the backend fails
        """
        if not texts:
            return []

        log.info(f"Translating {len(texts)} paragraph(s) to '{target_language}' (mode: {self.mode})")

        try:
            if self.mode == "joined":
                response = self.translator.translate_text(SEGMENT_SEPARATOR.join(texts), target_language)
                segments = split_segments(response)
            elif self.mode == "batch":
                segments = [flatten(s) for s in self.translator.translate_batch(list(texts), target_language)]
            else:
                segments = [flatten(self.translator.translate_text(t, target_language)) for t in texts]
        except DocumentTranslationError:
            raise
        except Exception as e:
            log.error(f"Translation failed: {str(e)}")
            raise TranslationError(f"Translation failed: {str(e)}", cause=e)

        if len(segments) != len(texts):
            log.error(f"Alignment mismatch: sent {len(texts)} paragraph(s), got {len(segments)} segment(s)")
            raise AlignmentMismatch(expected=len(texts), actual=len(segments))

        return segments

    def translate_paragraphs(self,
                             records: List[ParagraphRecord],
                             target_language: Optional[str] = None) -> List[ParagraphRecord]:
        """Return copies of ``records`` with ``translated_text`` filled in, order preserved."""
        target_language = target_language or settings.TARGET_LANGUAGE
        segments = self.translate_texts([record.text for record in records], target_language)

        translated = []
        for record, segment in zip(records, segments):
            log.debug(f"Paragraph {record.index}: {record.text!r} -> {segment!r}")
            translated.append(record.model_copy(update={"translated_text": segment}))
        return translated


def split_segments(response: str) -> List[str]:
    """Split a joined translation response back into segments."""
    return response.replace("\r\n", "\n").split(SEGMENT_SEPARATOR)


def flatten(segment: str) -> str:
    """Collapse line breaks inside a single-paragraph translation."""
    return " ".join(segment.replace("\r\n", "\n").split("\n"))
