import logging
import re

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from db import get_db_session
from enums.bot_entity import BotEntity
from enums.order_status import OrderStatus
from exceptions import OrderNotFoundException, UnknownOrderStatusException, OrderStoreException
from repositories.order import OrderRepository
from utils.html_escape import safe_html
from utils.localizator import Localizator
from utils.order_state_machine import OrderStateMachine

logger = logging.getLogger(__name__)

ORDER_ID_PATTERN = re.compile(r"#([a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12})", re.IGNORECASE)
STATUS_PATTERN = re.compile(r"статус=([а-яё]+)", re.IGNORECASE)


class OrderCommandDTO(BaseModel):
    order_id: str
    label: str  # status word exactly as typed
    status: OrderStatus | None = None  # None when the word is not recognized


class OrderCommandService:
    """
    Interprets operator chat messages of the form

        #755e4f83-48d4-4057-8ebf-144532ff9693 статус=выполнен

    A message missing either token is ordinary chat and gets no reply.
    """

    @staticmethod
    def parse(text: str | None) -> OrderCommandDTO | None:
        if not text:
            return None
        id_match = ORDER_ID_PATTERN.search(text)
        status_match = STATUS_PATTERN.search(text)
        if id_match is None or status_match is None:
            return None

        label = status_match.group(1)
        return OrderCommandDTO(
            order_id=id_match.group(1).lower(),
            label=label,
            status=OrderStateMachine.resolve_label(label),
        )

    @staticmethod
    def short_id(order_id: str) -> str:
        return order_id[:8]

    @staticmethod
    async def apply(command: OrderCommandDTO, operator_id: int | None = None) -> tuple[OrderStatus, OrderStatus]:
        """
        Set the order status requested by the command.

        The current status is read and then overwritten without a lock;
        only one operator may issue commands.

        Returns:
            (old_status, new_status)

        Raises:
            UnknownOrderStatusException: The status word is not recognized (store untouched)
            OrderNotFoundException: No order with this id
            OrderStoreException: Reading or writing the order store failed
        """
        if command.status is None:
            raise UnknownOrderStatusException(command.label, OrderStateMachine.ADVERTISED_LABELS)

        try:
            async with get_db_session() as session:
                old_status = await OrderRepository.get_status(command.order_id, session)
                if old_status is None:
                    raise OrderNotFoundException(command.order_id)

                OrderStateMachine.validate_and_log_transition(command.order_id, old_status, command.status,
                                                              operator_id=operator_id)
                if not await OrderRepository.update_status(command.order_id, command.status, session):
                    raise OrderNotFoundException(command.order_id)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"[OrderCommand] Store failure for order {command.order_id}: {e}")
            raise OrderStoreException("update_status", str(e)) from e

        return old_status, command.status

    @staticmethod
    async def handle(text: str | None, operator_id: int | None = None) -> str | None:
        """
        Process one operator message.

        Returns:
            Reply text, or None when the message is not a command
        """
        command = OrderCommandService.parse(text)
        if command is None:
            return None

        short_id = OrderCommandService.short_id(command.order_id)
        try:
            old_status, new_status = await OrderCommandService.apply(command, operator_id)
        except UnknownOrderStatusException as e:
            return Localizator.get_text(BotEntity.ADMIN, "unknown_status").format(
                label=safe_html(e.label), allowed=", ".join(e.allowed_labels))
        except OrderNotFoundException:
            return Localizator.get_text(BotEntity.ADMIN, "order_not_found").format(short_id=short_id)
        except OrderStoreException as e:
            return Localizator.get_text(BotEntity.ADMIN, "generic_error").format(error=safe_html(e.reason))

        return Localizator.get_text(BotEntity.ADMIN, "status_changed").format(
            short_id=short_id,
            old_label=Localizator.get_status_label(old_status),
            new_label=Localizator.get_status_label(new_status),
        )
