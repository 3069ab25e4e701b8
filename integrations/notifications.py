"""Best-effort notification of created projects."""

import logging
from dataclasses import dataclass

from integrations.base import BackendClient
from schemas.errors import StarterkitError
from schemas.project_metadata import ProjectMetadata

logger = logging.getLogger(__name__)

NOTIFY_ENDPOINT = "/packages/initialized"


@dataclass
class DeliveryReport:
    """Outcome of a notification attempt."""

    delivered: bool
    error: str | None = None


class NotificationClient:
    """Tells the backend a project was created.

    This is telemetry, not part of the project's correctness: ``notify``
    never raises, failures come back as an undelivered ``DeliveryReport``.
    """

    def __init__(self, backend: BackendClient):
        self.backend = backend

    def notify(self, metadata: ProjectMetadata) -> DeliveryReport:
        payload = {
            "projectName": metadata.name,
            "packageManager": metadata.package_manager,
        }
        if metadata.domain_name:
            payload["domainName"] = metadata.domain_name

        try:
            self.backend.send("POST", NOTIFY_ENDPOINT, json_data=payload)
        except StarterkitError as e:
            logger.warning("Could not notify backend about %s: %s", metadata.name, e.message)
            return DeliveryReport(delivered=False, error=e.message)

        logger.debug("Backend notified about %s", metadata.name)
        return DeliveryReport(delivered=True)
