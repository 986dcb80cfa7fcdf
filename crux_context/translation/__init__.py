"""Message translation between stored history and backend wire shapes."""

from .converter import ConversionHandler, MessageConverter
from .formatters import AnthropicFormatter, GrokFormatter, MessageFormatter, OpenAIFormatter
from .native_tools import TOOL_CODECS, ToolCodec
from .pairing import PlainTurn, ToolExchange, TurnPlan, plan_turns
from .payload import WirePayload
from .provider import Provider
from .translator import MessageTranslator, default_formatters

__all__ = [
    "Provider",
    "WirePayload",
    "PlainTurn",
    "ToolExchange",
    "TurnPlan",
    "plan_turns",
    "MessageFormatter",
    "AnthropicFormatter",
    "OpenAIFormatter",
    "GrokFormatter",
    "MessageTranslator",
    "default_formatters",
    "ToolCodec",
    "TOOL_CODECS",
    "MessageConverter",
    "ConversionHandler",
]
