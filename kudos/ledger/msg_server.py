"""Message server: the state-mutating entry point called by the host."""

from __future__ import annotations

import logging

from kudos.context import Context
from kudos.core.logging import correlation_scope
from kudos.core.metrics import record_transfer
from kudos.errors import KudosError
from kudos.ledger.keeper import Keeper
from kudos.models.messages import MsgSendKudos, MsgSendKudosResponse

logger = logging.getLogger(__name__)


class MsgServer:
    def __init__(self, keeper: Keeper, *, address_prefix: str = "cosmos") -> None:
        self.keeper = keeper
        self.address_prefix = address_prefix

    def send_kudos(self, ctx: Context, msg: MsgSendKudos) -> MsgSendKudosResponse:
        with correlation_scope(
            block_time=ctx.block_time,
            sender=msg.from_address,
            msg_type="send_kudos",
        ):
            try:
                msg.validate_basic(
                    address_prefix=self.address_prefix,
                    max_comment_length=self.keeper.max_comment_length,
                )
                entry = self.keeper.send_kudos(
                    ctx,
                    msg.from_address,
                    msg.to_address,
                    msg.amount,
                    msg.comment,
                )
            except KudosError as exc:
                record_transfer(type(exc).__name__)
                logger.debug("Rejected send_kudos: %s", exc)
                raise

        record_transfer("ok", msg.amount)
        return MsgSendKudosResponse(history_id=entry.id)


__all__ = ["MsgServer"]
