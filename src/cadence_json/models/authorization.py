"""Authorization descriptors attached to reference types."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class EntitlementKind(Enum):
    ENTITLEMENT = "Entitlement"
    ENTITLEMENT_MAP = "EntitlementMap"


class AuthorizationKind(Enum):
    UNAUTHORIZED = "Unauthorized"
    ENTITLEMENT_MAP = "EntitlementMapAuthorization"
    CONJUNCTION = "EntitlementConjunctionSet"
    DISJUNCTION = "EntitlementDisjunctionSet"


@dataclass(frozen=True)
class Entitlement:
    """A reference to an entitlement or entitlement map by type id."""

    kind: EntitlementKind
    type_id: str

    def __post_init__(self):
        if not isinstance(self.kind, EntitlementKind):
            object.__setattr__(self, "kind", EntitlementKind(self.kind))


@dataclass(frozen=True)
class Authorization:
    """
    Access qualifier of a reference type.

    Unauthorized may omit its entitlements (None); every other kind
    carries a tuple of entitlement references.
    """

    kind: AuthorizationKind
    entitlements: Optional[Tuple[Entitlement, ...]] = None

    def __post_init__(self):
        if not isinstance(self.kind, AuthorizationKind):
            object.__setattr__(self, "kind", AuthorizationKind(self.kind))
        if self.entitlements is not None:
            object.__setattr__(self, "entitlements", tuple(self.entitlements))
        elif self.kind != AuthorizationKind.UNAUTHORIZED:
            raise ValueError(f"{self.kind.value} requires entitlements")

    @classmethod
    def unauthorized(cls) -> "Authorization":
        return cls(AuthorizationKind.UNAUTHORIZED)

    @property
    def is_authorized(self) -> bool:
        return self.kind != AuthorizationKind.UNAUTHORIZED
