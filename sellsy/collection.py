"""
Collection accessors.

A Collection is bound to one API module ("Document", "Staffs", ...) and turns
attribute calls into API calls:

    client.document().getList({"limit": 10})
    # -> client.request_api({"method": "Document.getList", "params": {"limit": 10}})

There is one generic proxy for every module; ApiModule only enumerates the
module names the API is known to expose.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

if TYPE_CHECKING:
    from sellsy.client import SellsyClient


logger = logging.getLogger(__name__)


class ApiModule(str, Enum):
    """Known API modules. The member name, lower-cased, is the client accessor."""

    ACCOUNT_DATA = "Accountdatas"
    ACCOUNT_PREFS = "AccountPrefs"
    PURCHASE = "Purchase"
    AGENDA = "Agenda"
    ANNOTATIONS = "Annotations"
    CATALOGUE = "Catalogue"
    CUSTOM_FIELDS = "CustomFields"
    CLIENT = "Client"
    STAFFS = "Staffs"
    PEOPLES = "Peoples"
    DOCUMENT = "Document"
    MAILS = "Mails"
    EVENT = "Event"
    EXPENSE = "Expense"
    OPPORTUNITIES = "Opportunities"
    PROSPECTS = "Prospects"
    SMART_TAGS = "SmartTags"
    STAT = "Stat"
    STOCK = "Stock"
    SUPPORT = "Support"
    TIME_TRACKING = "Timetracking"

    @property
    def accessor_name(self) -> str:
        return self.name.lower()

    @classmethod
    def from_accessor(cls, accessor_name: str) -> Optional["ApiModule"]:
        """Look a module up by its accessor name (e.g. "smart_tags")."""
        return cls.__members__.get(accessor_name.upper())


def module_name_of(module: "str | ApiModule") -> str:
    if isinstance(module, ApiModule):
        return module.value
    return str(module)


class Collection:
    """
    Proxy for the methods of one API module.

    Any public attribute is an API method of the module. It takes the call
    parameters as a mapping, as keyword arguments, or both (merged, keywords
    win).
    """

    def __init__(self, client: "SellsyClient", module_name: "str | ApiModule") -> None:
        self._client = client
        self._module_name = module_name_of(module_name)

    @property
    def module_name(self) -> str:
        return self._module_name

    @property
    def client(self) -> "SellsyClient":
        return self._client

    def call(
        self,
        method_name: str,
        params: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Call `<module>.<method_name>` on the bound client."""
        merged: dict[str, Any] = dict(params or {})
        merged.update(kwargs)
        method = f"{self._module_name}.{method_name}"
        logger.debug(f"Dispatching {method} through collection")
        return self._client.request_api({"method": method, "params": merged})

    def __getattr__(self, method_name: str) -> Callable[..., dict[str, Any]]:
        if method_name.startswith("_"):
            raise AttributeError(method_name)

        def invoke(params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> dict[str, Any]:
            return self.call(method_name, params, **kwargs)

        invoke.__name__ = method_name
        invoke.__qualname__ = f"{self._module_name}.{method_name}"
        return invoke

    def __repr__(self) -> str:
        return f"Collection(module={self._module_name!r})"


class CollectionGenerator:
    """Factory the client uses to build collection accessors."""

    collection_class: type[Collection] = Collection

    def get_collection(self, client: "SellsyClient", module_name: "str | ApiModule") -> Collection:
        return self.collection_class(client, module_name)
