"""Request Context — identity data shared by handlers once a caller is authenticated.

Invariants:
    - RequestContext is built by the authentication layer, never by handlers
    - token_data.role is the caller's primary role; `roles` may add more
    - has_any_role() is the single role check used by route guards

Design Decisions:
    - Frozen dataclasses, not Pydantic: these never cross the HTTP boundary as input
    - Token verification and role assignment live outside this service
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from orderdesk.core.domain_types import Role, UserId


@dataclass(frozen=True)
class TokenPayload:
    """Claims the service relies on after token verification."""
    id: UserId
    email: str
    role: str


@dataclass(frozen=True)
class JwtPayload:
    """Registered JWT claims as decoded by the authentication layer."""
    sub: str
    email: str
    iat: int | None = None
    exp: int | None = None


@dataclass(frozen=True)
class AuthenticationInfo:
    """Diagnostic info reported by an authentication strategy."""
    info: object | str | list[str | None] | None = None


@dataclass(frozen=True)
class RedisChannels:
    """Event/response channel pair for request-scoped pub/sub replies."""
    event_channel: str
    response_channel: str


@dataclass(frozen=True)
class RequestContext:
    """Per-request identity: token claims plus optional resolved user."""
    token_data: TokenPayload
    token: str
    current_user: object | None = None
    roles: tuple[str, ...] = field(default_factory=tuple)
    allowed_roles: tuple[str, ...] = field(default_factory=tuple)
    redis_data: RedisChannels | None = None

    @property
    def user_role(self) -> str:
        return self.token_data.role

    def has_any_role(self, allowed: Iterable[Role | str]) -> bool:
        held = {self.token_data.role, *self.roles}
        return any(Role(r).value in held for r in allowed)
