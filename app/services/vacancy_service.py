# ==============================================================================
# VACANCY SERVICE - Careers Page
# ==============================================================================

from __future__ import annotations

from typing import List

from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.services.base_service import BaseService, Row


class VacancyService(BaseService):
    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, "vacancies", "Vacancy not found")

    async def list_open(self) -> List[Row]:
        """Active vacancies, newest first, with the career title."""
        result = await self._adapter.execute(
            "SELECT v.*, c.title AS career_title FROM vacancies v "
            "LEFT JOIN careers c ON v.career_id = c.id "
            "WHERE v.is_active = $1 ORDER BY v.created_at DESC",
            [True],
        )
        return result.rows
