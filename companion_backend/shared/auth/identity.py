"""Caller identity and entitlements passed explicitly into every operation"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """
    Authenticated caller as seen by the companion operations

    Attributes:
        user_id: Identity provider user id, None for anonymous callers
        plans: Subscription plan keys the caller holds (e.g. 'pro')
        features: Feature flags granted to the caller (e.g. '3_companion_limit')
        token: Bearer token presented with the request, if any
    """
    user_id: Optional[str] = None
    plans: FrozenSet[str] = field(default_factory=frozenset)
    features: FrozenSet[str] = field(default_factory=frozenset)
    token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    def has(self, plan: Optional[str] = None, feature: Optional[str] = None) -> bool:
        """
        Entitlement check

        Exactly one of plan or feature is expected; passing neither returns False.
        """
        if plan is not None:
            return plan in self.plans
        if feature is not None:
            return feature in self.features
        return False

    def get_token(self, template: Optional[str] = None) -> Optional[str]:
        """
        Return a bearer token usable against the data store

        The token presented by the caller is already issued for the store, so
        the template only matters for logging.
        """
        if not self.token:
            logger.debug(f"No token available for template {template!r}")
            return None
        return self.token

    @classmethod
    def anonymous(cls) -> 'AuthContext':
        return cls()

    @classmethod
    def from_user(cls, user: Any, token: Optional[str] = None) -> 'AuthContext':
        """
        Build a context from a Supabase Auth user

        Plans and features are read from app_metadata, which only the service
        role can write:
            {"plan": "pro", "features": ["10_companion_limit"]}
        A list under "plans" is accepted as well.
        """
        app_metadata: Dict[str, Any] = getattr(user, 'app_metadata', None) or {}

        plans = set(_as_strings(app_metadata.get('plans')))
        if app_metadata.get('plan'):
            plans.add(str(app_metadata['plan']))

        return cls(
            user_id=getattr(user, 'id', None),
            plans=frozenset(plans),
            features=frozenset(_as_strings(app_metadata.get('features'))),
            token=token,
        )


def _as_strings(value: Any) -> Iterable[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]
