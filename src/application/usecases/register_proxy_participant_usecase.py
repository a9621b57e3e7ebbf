"""Use case for registering a procuration requester or volunteer."""

from src.application.dtos.proxy_matching_dto import (
    ParticipantOutputItem,
    RegisterParticipantInputDto,
    RegisterParticipantOutputDto,
)
from src.common.logging import get_logger
from src.domain.entities import ProxyParticipant
from src.domain.repositories.proxy_participant_repository import (
    ProxyParticipantRepository,
)
from src.domain.services.interfaces.admin_notification_service import (
    IAdminNotificationService,
)
from src.domain.services.proxy_participant_validator import (
    ProxyParticipantValidator,
)


logger = get_logger(__name__)


class RegisterProxyParticipantUseCase:
    """Registers a person who needs, or offers to hold, a voting mandate.

    The participant is stored pending and enabled. The organizing team is then
    told about the new registration; that announcement is best effort and a
    failure there never undoes the registration.
    """

    def __init__(
        self,
        participant_repository: ProxyParticipantRepository,
        admin_notification_service: IAdminNotificationService | None = None,
        validator: ProxyParticipantValidator | None = None,
    ):
        """Initialize the use case.

        Args:
            participant_repository: Participant repository implementation
            admin_notification_service: Team notifier, optional
            validator: Field validator (a default instance if omitted)
        """
        self.participant_repo = participant_repository
        self.admin_notification_service = admin_notification_service
        self.validator = validator or ProxyParticipantValidator()

    async def execute(
        self, input_dto: RegisterParticipantInputDto
    ) -> RegisterParticipantOutputDto:
        """Validate and store a new participant.

        Raises:
            ValidationError: Invalid field values
            StoreError: The insert failed
        """
        fields = self.validator.validate(input_dto.fields)
        created = await self.participant_repo.create(
            ProxyParticipant.from_fields(input_dto.type, fields)
        )
        logger.info(
            "Proxy participant registered",
            participant_id=str(created.id),
            type=created.type.value,
        )

        team_notified = False
        if self.admin_notification_service is not None:
            try:
                await self.admin_notification_service.notify_registration(created)
                team_notified = True
            except Exception as e:
                logger.warning(
                    f"Failed to notify the team about a registration: {e}",
                    participant_id=str(created.id),
                )

        return RegisterParticipantOutputDto(
            participant=ParticipantOutputItem.from_entity(created),
            team_notified=team_notified,
        )
