"""Base class shared by the v1, v2 and website API clients."""

from typing import ClassVar, Generic, Type, TypeVar

from .client import ApiClient, ApiClientBuilder

C = TypeVar("C", bound="BaseClient")


class ClientBuilder(ApiClientBuilder, Generic[C]):
    """An :class:`ApiClientBuilder` preset with a family's default base URL."""

    def __init__(self, client_class: Type[C]):
        super().__init__()
        self._client_class = client_class
        self.api_base_url(client_class.DEFAULT_API_BASE_URL)

    def build(self) -> C:  # type: ignore[override]
        return self._client_class(super().build())


class BaseClient:
    """
    Client for one Exercism API family.

    Subclasses set ``DEFAULT_API_BASE_URL`` and add endpoint methods that go
    through :attr:`api_client`.
    """

    DEFAULT_API_BASE_URL: ClassVar[str] = ""

    def __init__(self, api_client: ApiClient):
        self.api_client = api_client

    @classmethod
    def builder(cls: Type[C]) -> ClientBuilder[C]:
        return ClientBuilder(cls)

    @classmethod
    def new(cls: Type[C]) -> C:
        """Anonymous client using the default base URL and retry policy."""
        return cls.builder().build()

    @property
    def api_base_url(self) -> str:
        return self.api_client.api_base_url

    async def aclose(self) -> None:
        await self.api_client.aclose()

    async def __aenter__(self: C) -> C:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(api_base_url={self.api_base_url!r})"
