"""
Base class for intent handlers.
"""
import logging
from abc import ABC, abstractmethod
from typing import ClassVar, Optional

from ..config import AssistantConfig
from ..exceptions import GatewayError, InternalError
from ..gateway import DataGateway
from ..interaction import IntentType
from ..models import User
from ..schemas import AssistantResponse, RequestContext

logger = logging.getLogger(__name__)


class IntentHandler(ABC):
    """
    Answers one intent by reading from the gateway and formatting a digest.

    Store failures never leak partial data: they surface as InternalError.
    """

    intent: ClassVar[IntentType]

    def __init__(self, gateway: DataGateway, config: AssistantConfig):
        self.gateway = gateway
        self.config = config

    def handle(
        self,
        user: User,
        query: str,
        context: Optional[RequestContext] = None,
    ) -> AssistantResponse:
        """
        Answer ``query`` for ``user``.

        :param user: Resolved calling user
        :param query: Lower-cased query text
        :param context: Optional client context
        :raises InternalError: If any underlying query fails
        """
        try:
            return self.respond(user, query, context)
        except GatewayError as e:
            logger.error(f"{self.intent.value} handler failed for user {user.id}: {e}")
            raise InternalError("Internal server error") from e

    @abstractmethod
    def respond(
        self,
        user: User,
        query: str,
        context: Optional[RequestContext],
    ) -> AssistantResponse:
        """Build the response; may raise GatewayError."""
