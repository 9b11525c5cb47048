import logging

from carebill.repositories.base import ClientRepository
from carebill.settings import settings

logger = logging.getLogger(__name__)


def get_client_repository() -> ClientRepository:
    from carebill.repositories.memory import InMemoryClientRepository, load_clients_file, sample_clients

    if settings.clients_file:
        logger.info("Using client directory: file=%s", settings.clients_file)
        return InMemoryClientRepository(load_clients_file(settings.clients_file))

    logger.info("Using client directory: bundled sample clients")
    return InMemoryClientRepository(sample_clients())
