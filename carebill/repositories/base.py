from abc import ABC, abstractmethod

from carebill.models.client import Client


class ClientRepository(ABC):
    """Read-only client directory."""

    @abstractmethod
    def get_by_id(self, client_id: str) -> Client | None: ...

    @abstractmethod
    def list_all(self) -> list[Client]: ...

    @abstractmethod
    def list_active(self) -> list[Client]: ...
