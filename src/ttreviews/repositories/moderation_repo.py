"""Moderator approval log and Discord moderator repositories."""

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ttreviews.db.models.moderation import DiscordModeratorRow, ModeratorApprovalRow
from ttreviews.models.enums import ModerationAction
from ttreviews.repositories.base import BaseRepository


class ModeratorApprovalRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ModeratorApprovalRow)

    async def has_approved(self, submission_type: str, submission_id: str, moderator_id: str) -> bool:
        stmt = select(ModeratorApprovalRow.id).where(
            ModeratorApprovalRow.submission_type == submission_type,
            ModeratorApprovalRow.submission_id == submission_id,
            ModeratorApprovalRow.moderator_id == moderator_id,
            ModeratorApprovalRow.action == ModerationAction.APPROVED,
        )
        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None

    async def count_approvers(self, submission_type: str, submission_id: str) -> int:
        """Count distinct moderators holding an approval for the submission."""
        stmt = select(func.count(distinct(ModeratorApprovalRow.moderator_id))).where(
            ModeratorApprovalRow.submission_type == submission_type,
            ModeratorApprovalRow.submission_id == submission_id,
            ModeratorApprovalRow.action == ModerationAction.APPROVED,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def list_for_submission(self, submission_type: str, submission_id: str) -> list[ModeratorApprovalRow]:
        stmt = (
            select(ModeratorApprovalRow)
            .where(
                ModeratorApprovalRow.submission_type == submission_type,
                ModeratorApprovalRow.submission_id == submission_id,
            )
            .order_by(ModeratorApprovalRow.created_at.asc(), ModeratorApprovalRow.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class DiscordModeratorRepository(BaseRepository):
    id_prefix = "dmod_"

    def __init__(self, session: AsyncSession):
        super().__init__(session, DiscordModeratorRow)

    async def get_by_discord_user(self, discord_user_id: str) -> DiscordModeratorRow | None:
        return await self.get_by_id("discord_user_id", discord_user_id)
