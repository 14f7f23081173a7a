"""Application context for in-process service management.

Provides a centralized way to access the ledger without any outer surface.
Import pipelines and test suites build one context per client.
"""

from typing import Optional

from pfledger.config.logging_config import setup_logging
from pfledger.config.settings import Settings, set_settings, get_settings
from pfledger.domain.models import Client
from pfledger.services import LedgerService


class AppContext:
    """
    Application context owning the client and its services.

    This is the main entry point for callers that want a configured ledger
    without wiring settings, logging and services themselves.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize application context.

        Args:
            settings: Optional settings. If not provided, uses the global ones.
        """
        self._settings = settings
        self._client: Optional[Client] = None
        self._initialized = False

        # Service instances (lazy initialized)
        self._ledger_service: Optional[LedgerService] = None

    def initialize(self, client: Optional[Client] = None) -> None:
        """
        Initialize or reinitialize the context, optionally around an existing client.

        Args:
            client: Client to manage. A new empty client is created if not provided.
        """
        if self._settings is not None:
            set_settings(self._settings)
        setup_logging()

        self._client = client or Client()
        self._ledger_service = None
        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    @property
    def settings(self) -> Settings:
        return get_settings()

    @property
    def client(self) -> Client:
        """Get the managed client."""
        if self._client is None:
            raise RuntimeError("AppContext is not initialized")
        return self._client

    @property
    def ledger(self) -> LedgerService:
        """Get the LedgerService instance."""
        if self._ledger_service is None:
            self._ledger_service = LedgerService(client=self.client)
        return self._ledger_service


# Global application context (singleton)
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: AppContext) -> None:
    """Set the global application context."""
    global _app_context
    _app_context = context
