"""Message protocol and router between page contexts and the store context."""

from ac_extractor.messaging.protocol import Message, MessageType, Response
from ac_extractor.messaging.router import MessageRouter

__all__ = ["Message", "MessageRouter", "MessageType", "Response"]
