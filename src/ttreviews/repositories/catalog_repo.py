"""Published equipment and player repositories."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ttreviews.db.models.catalog import EquipmentRow, PlayerRow
from ttreviews.repositories.base import BaseRepository


class _SluggedRepository(BaseRepository):
    async def get(self, row_id: str):
        return await self.get_by_id("id", row_id)

    async def get_by_slug(self, slug: str):
        return await self.get_by_id("slug", slug)

    async def slugs_like(self, base_slug: str) -> set[str]:
        """Return existing slugs equal to ``base_slug`` or suffixed from it."""
        stmt = select(self.model_class.slug).where(
            (self.model_class.slug == base_slug)
            | self.model_class.slug.like(f"{base_slug}-%")
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())


class EquipmentRepository(_SluggedRepository):
    id_prefix = "eq_"

    def __init__(self, session: AsyncSession):
        super().__init__(session, EquipmentRow)


class PlayerRepository(_SluggedRepository):
    id_prefix = "pl_"

    def __init__(self, session: AsyncSession):
        super().__init__(session, PlayerRow)
