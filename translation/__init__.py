"""Translation module.

This module provides:
- Translator interface and the Google Cloud Translation backend
- TranslationAdapter: batches paragraph texts and realigns the results
"""

from translation.adapter import Translator, TranslationAdapter, TRANSLATION_MODES
from translation.google_translator import GoogleTranslator

__all__ = [
    'Translator',
    'TranslationAdapter',
    'TRANSLATION_MODES',
    'GoogleTranslator'
]
