"""
Step repository for database access.

Wizard answers live in the organizations table, in a single JSON column
"result" keyed by step ({"step1": {...}, "step2": {...}}).
"""

from typing import Optional, Any

from shared.repository import BaseRepository
from .models import MainResult

ORGANIZATIONS_TABLE = "organizations"


class StepRepository(BaseRepository[MainResult]):
    """
    Repository for per-organization wizard results.

    Note: This repository does NOT check who is asking. Callers are
    responsible for scoping access to an organization.
    """

    def get_result(self, organization_id: str) -> Optional[dict[str, Any]]:
        """
        Get the raw saved result of an organization.

        Returns:
            The result mapping ({} when nothing is saved yet), or None if
            the organization does not exist.
        """
        rows = (
            self._db.table(ORGANIZATIONS_TABLE)
            .select("id, result")
            .eq("id", organization_id)
            .execute()
        )
        if not rows.data:
            return None
        return rows.data[0].get("result") or {}

    def save_step(
        self,
        organization_id: str,
        step_key: str,
        payload: dict[str, Any],
    ) -> Optional[dict[str, Any]]:
        """
        Store one step's payload, keeping the other steps as they are.

        Returns:
            The updated organization row, or None if it does not exist.
        """
        current = self.get_result(organization_id)
        if current is None:
            return None

        merged = {**current, step_key: payload}
        rows = (
            self._db.table(ORGANIZATIONS_TABLE)
            .update({"result": merged})
            .eq("id", organization_id)
            .execute()
        )
        if not rows.data:
            return None
        return rows.data[0]
