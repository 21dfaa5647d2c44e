"""Base DAO with Supabase client connection."""

from typing import Generic, TypeVar

from pydantic import BaseModel
from supabase import Client, create_client

from swimsectors.config import get_settings

T = TypeVar("T", bound=BaseModel)


class IdentityResolutionError(RuntimeError):
    """Raised when a newly inserted row comes back without an id."""


class SupabaseClient:
    """Singleton Supabase client manager."""

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """Get or create the Supabase client."""
        if cls._instance is None:
            settings = get_settings()

            if not settings.supabase_url or settings.supabase_key is None:
                raise RuntimeError(
                    "SUPABASE_URL and SUPABASE_KEY environment variables must be set"
                )

            cls._instance = create_client(
                settings.supabase_url, settings.supabase_key.get_secret_value()
            )

        return cls._instance

    @classmethod
    def set_client(cls, client: Client) -> None:
        """Install an already-built client (useful for testing)."""
        cls._instance = client

    @classmethod
    def reset(cls) -> None:
        """Reset the client (useful for testing)."""
        cls._instance = None


class BaseDAO(Generic[T]):
    """Base Data Access Object with common operations."""

    table_name: str
    model_class: type[T]

    def __init__(self, client: Client | None = None):
        """Initialize the DAO.

        Args:
            client: Supabase client. If not provided, uses the singleton.
        """
        self.client = client or SupabaseClient.get_client()

    @property
    def table(self):
        """Get the table reference."""
        return self.client.table(self.table_name)

    def get_by_id(self, id: int) -> T | None:
        """Get a single record by ID, or None if not found."""
        result = self.table.select("*").eq("id", id).execute()

        if not result.data:
            return None

        return self._to_model(result.data[0])

    def create(self, model: T) -> T:
        """Insert a record and return it with its ID populated.

        Raises:
            IdentityResolutionError: If the database did not return an id
        """
        result = self.table.insert(self._to_db(model)).execute()

        if not result.data or result.data[0].get("id") is None:
            raise IdentityResolutionError(
                f"Can't determine id of newly inserted {self.model_class.__name__}"
            )

        return self._to_model(result.data[0])

    def _to_model(self, row: dict) -> T:
        """Convert a database row to a model instance.

        Override this method for custom mapping logic.
        """
        return self.model_class(**row)

    def _to_db(self, model: T) -> dict:
        """Convert a model instance to a database row.

        Override this method for custom mapping logic.
        """
        return model.model_dump(mode="json", exclude_none=True)
