"""Per-backend message formatters."""

from .anthropic import AnthropicFormatter
from .base import MessageFormatter
from .grok import GrokFormatter
from .openai import OpenAIFormatter

__all__ = ["MessageFormatter", "AnthropicFormatter", "OpenAIFormatter", "GrokFormatter"]
