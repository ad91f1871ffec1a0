"""
apps.organizations.state
~~~~~~~~~~~~~~~~~~~~~~~~
Per-session "current organization" holder.

One :class:`OrganizationState` lives for one user session.  Views and the
topology page subscribe to it; any mutation that can change the list of
available organisations calls :meth:`OrganizationState.initialize` (or
:meth:`notify`) afterwards so subscribers refresh.
"""
from __future__ import annotations

from typing import Callable

import structlog

from apps.organizations.services import org_service
from apps.organizations.services.org_service import OrganizationSummary

logger = structlog.get_logger(__name__)

Listener = Callable[["OrganizationState"], None]

#: Session key under which the selected organisation id is persisted.
SESSION_KEY = "current_organization_id"


class OrganizationState:
    """Observable selection state over ``get_available_organizations``."""

    def __init__(self) -> None:
        self.available_organizations: list[OrganizationSummary] = []
        self.current_organization: OrganizationSummary | None = None
        self._listeners: list[Listener] = []

    def initialize(self, user_id) -> bool:
        """
        Reload the organisations available to *user_id*.

        Keeps the current selection when it is still available, otherwise
        selects the first available organisation (or none).  A failed load
        leaves the state untouched and does not notify.

        Returns:
            ``True`` iff the list was reloaded.
        """
        result = org_service.get_available_organizations(requester_id=user_id)
        if not result.success or result.data is None:
            logger.warning("organization_state_load_failed", user_id=str(user_id), message=result.message)
            return False

        self.available_organizations = list(result.data)

        if self.current_organization is not None:
            refreshed = self._find(self.current_organization.id)
            self.current_organization = refreshed

        if self.current_organization is None and self.available_organizations:
            self.current_organization = self.available_organizations[0]

        self.notify()
        return True

    def set_organization(self, organization: OrganizationSummary) -> None:
        self.current_organization = organization
        self.notify()

    def select(self, org_id) -> bool:
        """Select an available organisation by id; ``False`` if it is not available."""
        match = self._find(org_id)
        if match is None:
            return False
        self.set_organization(match)
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Session persistence
    # ------------------------------------------------------------------

    @classmethod
    def from_session(cls, session, user_id) -> "OrganizationState":
        """Rebuild the state for a request, restoring the stored selection."""
        state = cls()
        stored = session.get(SESSION_KEY)
        if state.initialize(user_id) and stored:
            state.select(stored)
        return state

    def save_to_session(self, session) -> None:
        if self.current_organization is None:
            session.pop(SESSION_KEY, None)
        else:
            session[SESSION_KEY] = str(self.current_organization.id)

    def _find(self, org_id) -> OrganizationSummary | None:
        key = str(org_id)
        return next((o for o in self.available_organizations if str(o.id) == key), None)
