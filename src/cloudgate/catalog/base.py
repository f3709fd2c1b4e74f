"""Catalog model and the base class for catalog operations.

The catalog is a static tree built once at start-up:
Provider -> Service -> Category -> Operation. Providers, services and
categories are plain descriptive entries; operations additionally know how
to run the requests the interface builds for them.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict, Field

from cloudgate.models.messages import ResultMessage
from cloudgate.models.requests import GatewayRequest
from cloudgate.workflow.exceptions import UnsupportedRequestError

if TYPE_CHECKING:
    from cloudgate.aws.codepipeline import PipelineGateway

logger: Final = logging.getLogger(__name__)

COMING_SOON_SUFFIX: Final[str] = " (Coming Soon)"


class OperationKind(str, Enum):
    """Kinds of operations, each with its own navigation flow."""

    PIPELINE_APPROVALS = "pipeline_approvals"
    PIPELINE_STATUS = "pipeline_status"
    START_PIPELINE = "start_pipeline"


class CatalogEntry(BaseModel):
    """Descriptive metadata shared by every catalog node.

    Attributes:
        id: Stable identifier.
        name: Display name.
        description: One-line description shown next to the name.
        available: Whether the entry can be selected. Unavailable entries are
            listed as coming soon and ignore Enter.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable identifier")
    name: str = Field(..., min_length=1, description="Display name")
    description: str = Field(default="", description="One-line description")
    available: bool = Field(default=True, description="Whether the entry can be selected")

    @property
    def label(self) -> str:
        """Display name, marked when the entry is not available yet."""
        return self.name if self.available else f"{self.name}{COMING_SOON_SUFFIX}"


class BaseOperation(ABC):
    """Base class for all catalog operations.

    An operation advertises its metadata and runs the requests built for
    it against a gateway, returning exactly one result message.

    Example:
        >>> class PingOperation(BaseOperation):
        ...     @property
        ...     def name(self) -> str:
        ...         return "Ping"
        ...
        ...     @property
        ...     def description(self) -> str:
        ...         return "Check connectivity"
        ...
        ...     @property
        ...     def kind(self) -> OperationKind:
        ...         return OperationKind.PIPELINE_STATUS
        ...
        ...     async def execute(self, gateway, request):
        ...         return PipelineStatusLoaded()
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Operation name as listed in the operation menu."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Operation description for the operation menu."""
        ...

    @property
    @abstractmethod
    def kind(self) -> OperationKind:
        """Navigation flow the operation uses."""
        ...

    @property
    def visible_to_users(self) -> bool:
        """Whether this operation should be listed in the interface.

        Returns:
            True if the operation should appear in menus, False when hidden.
        """
        return True

    @property
    def entry(self) -> CatalogEntry:
        """Catalog entry describing this operation."""
        return CatalogEntry(
            id=self.kind.value,
            name=self.name,
            description=self.description,
        )

    @abstractmethod
    async def execute(self, gateway: "PipelineGateway", request: GatewayRequest) -> ResultMessage:
        """Run one request against the gateway.

        Args:
            gateway: Gateway bound to the request's profile and region.
            request: Request variant built for this operation.

        Returns:
            The result message describing the outcome.

        Raises:
            UnsupportedRequestError: If the request variant is not handled.
            AWSError: If the gateway call fails.
        """
        ...

    def unsupported(self, request: GatewayRequest) -> UnsupportedRequestError:
        """Build the error raised for a request variant the operation cannot run."""
        return UnsupportedRequestError(self.name, type(request).__name__)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class Category(BaseModel):
    """A group of operations within a service."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    entry: CatalogEntry
    operations: tuple[BaseOperation, ...] = ()
    visible_to_users: bool = True

    def visible_operations(self) -> list[BaseOperation]:
        """Operations listed in the operation menu, in registration order."""
        return [op for op in self.operations if op.visible_to_users]


class Service(BaseModel):
    """A cloud service offered by a provider."""

    model_config = ConfigDict(frozen=True)

    entry: CatalogEntry
    categories: tuple[Category, ...] = ()

    def visible_categories(self) -> list[Category]:
        """Categories listed in the category menu, in registration order."""
        return [category for category in self.categories if category.visible_to_users]

    def find_operation(
        self,
        kind: OperationKind,
        *,
        include_hidden: bool = False,
        category_id: str | None = None,
    ) -> BaseOperation | None:
        """Find the first operation of a kind across this service's categories.

        Args:
            kind: Operation kind to look for.
            include_hidden: Also search hidden categories and operations.
                Defaults to False.
            category_id: Only search the category with this id. Defaults to
                None (every category).

        Returns:
            The matching operation, or None.
        """
        categories = self.categories if include_hidden else tuple(self.visible_categories())
        for category in categories:
            if category_id is not None and category.entry.id != category_id:
                continue
            for operation in category.operations:
                if operation.kind is kind and (include_hidden or operation.visible_to_users):
                    return operation
        return None


class Provider(BaseModel):
    """A cloud provider."""

    model_config = ConfigDict(frozen=True)

    entry: CatalogEntry
    services: tuple[Service, ...] = ()


class Catalog(BaseModel):
    """The static Provider -> Service -> Category -> Operation tree."""

    model_config = ConfigDict(frozen=True)

    providers: tuple[Provider, ...] = ()

    def find_provider(self, provider_id: str) -> Provider | None:
        """Find a provider by id."""
        return next((p for p in self.providers if p.entry.id == provider_id), None)

    def find_service(self, provider_id: str, service_id: str) -> Service | None:
        """Find a service of a provider by id."""
        provider = self.find_provider(provider_id)
        if provider is None:
            return None
        return next((s for s in provider.services if s.entry.id == service_id), None)
