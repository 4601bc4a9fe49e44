"""AI module - chat-model coaching features with local fallbacks."""

from .parsing import ParseResult, AIResponseFormatError, extract_json, parse_structured
from .service import AIService, AIUnavailableError

__all__ = [
    'ParseResult', 'AIResponseFormatError', 'extract_json', 'parse_structured',
    'AIService', 'AIUnavailableError',
]
