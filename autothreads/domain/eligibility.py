"""Decides whether a message should get an auto thread."""

from typing import TYPE_CHECKING

from autothreads.domain.models import (
    ChannelType,
    Eligible,
    EligibilityDecision,
    MessageType,
    Rejected,
    RejectReason,
)
from autothreads.ports.inbound import IncomingMessage

if TYPE_CHECKING:
    from autothreads.ports.outbound import ChannelDirectory


class EligibilityFilter:
    """Ordered rule chain; the first failing rule wins.

    The channel lookup is only issued once the message-level rules pass,
    so bot chatter never touches the channel cache.
    """

    def __init__(self, topic_keyword: str, enabled: bool = True):
        self.topic_keyword = topic_keyword
        self.enabled = enabled

    async def evaluate(
        self, message: IncomingMessage, channels: "ChannelDirectory"
    ) -> EligibilityDecision:
        if not self.enabled:
            return Rejected(RejectReason.DISABLED)
        if message.type != MessageType.DEFAULT:
            return Rejected(RejectReason.NON_DEFAULT)
        if message.author.is_bot:
            return Rejected(RejectReason.FROM_BOT)

        channel = await channels.get(message.guild_id, message.channel_id)
        if channel is None or channel.type != ChannelType.GUILD_TEXT:
            return Rejected(RejectReason.NON_TEXT_CHANNEL)
        if not channel.topic or self.topic_keyword not in channel.topic:
            return Rejected(RejectReason.CHANNEL_NOT_ELIGIBLE)

        return Eligible(message=message, channel=channel)
