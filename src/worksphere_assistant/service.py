import logging
from typing import Any, Callable, ContextManager, Dict, Optional

from .assembler import ResponseAssembler
from .config import AssistantConfig
from .exceptions import InternalError, InvalidRequestError, NotFoundError
from .gateway import DataGateway, SupabaseGateway
from .handlers import build_handlers
from .interaction import IntentRouter, IntentType
from .models import User
from .schemas import AssistantRequest, AssistantResponse

logger = logging.getLogger(__name__)

GatewayOpener = Callable[[], ContextManager[DataGateway]]

USER_COLUMNS = "*, organizations:organization_id (*), departments:department_id (*)"


class AssistantService:
    """
    Facade over the assistant: validation, user resolution, routing, handling.
    The ONLY entry point for the HTTP layer.
    """

    def __init__(
        self,
        config: AssistantConfig,
        open_gateway: GatewayOpener,
        router: Optional[IntentRouter] = None,
        assembler: Optional[ResponseAssembler] = None,
    ):
        """
        :param config: Service configuration
        :param open_gateway: Returns a context manager yielding a request-scoped
            gateway; it is entered once per request and always exited
        """
        self.config = config
        self._open_gateway = open_gateway
        self._router = router or IntentRouter()
        self._assembler = assembler or ResponseAssembler()

    @classmethod
    def for_supabase(cls, config: AssistantConfig) -> "AssistantService":
        return cls(config, lambda: SupabaseGateway.connect(config))

    def answer(self, payload: Any) -> Dict[str, Any]:
        """
        Answer one decoded request body.

        :return: Wire response (``response``, optional ``actions``/``suggestions``)
        :raises InvalidRequestError: Bad body shape
        :raises NotFoundError: Unknown user
        :raises InternalError: Anything else; carries no internal detail
        """
        request = AssistantRequest.parse(payload)

        try:
            with self._open_gateway() as gateway:
                user = self._resolve_user(gateway, request)
                response = self._dispatch(gateway, user, request)
        except (InvalidRequestError, NotFoundError, InternalError):
            raise
        except Exception as e:
            logger.error(f"Unhandled assistant failure: {e}", exc_info=True)
            raise InternalError("Internal server error") from e

        return self._assembler.serialize(response)

    def _resolve_user(self, gateway: DataGateway, request: AssistantRequest) -> User:
        row = gateway.get_by_id("users", request.user_id, USER_COLUMNS)
        if row is None:
            logger.warning(f"Assistant query for unknown user {request.user_id}")
            raise NotFoundError("User not found")

        user = User.from_row(row)
        if user.organization_id != request.organization_id:
            logger.warning(
                f"User {user.id} sent organization {request.organization_id}, "
                f"belongs to {user.organization_id}"
            )
        return user

    def _dispatch(
        self,
        gateway: DataGateway,
        user: User,
        request: AssistantRequest,
    ) -> AssistantResponse:
        lowered = request.query.lower()
        intent = self._router.route(lowered)
        logger.info(f"Assistant query - User: {user.id}, Intent: {intent.name}")

        if intent is IntentType.UNKNOWN:
            return self._assembler.fallback(request.query)

        handler = build_handlers(gateway, self.config)[intent]
        return handler.handle(user, lowered, request.context)
