# caminho: timeline_app/infrastructure/repositories/timeline_repository.py
# Funções:
# - TimelineRepositoryImpl: timelines (recurso raiz)
# - GestaoRepositoryImpl: gestões de uma timeline
# - MemberRepositoryImpl: membros de uma gestão
# - PermissionRepositoryImpl: concessões explícitas (admin x timeline)
#
# Cada operação faz commit próprio: sequências (cascatas, reordenação) não são
# transacionais.

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from timeline_app.domain.timelines.entities import Gestao, Member, Permission, Timeline
from timeline_app.domain.timelines.repositories import (
    GestaoRepository,
    MemberRepository,
    PermissionRepository,
    TimelineRepository,
)
from timeline_app.infrastructure.db.models import GestaoModel, MemberModel, PermissionModel, TimelineModel
from timeline_app.infrastructure.db.utils import try_commit


def _to_domain_timeline(model: TimelineModel) -> Timeline:
    return Timeline(
        id=model.id,
        name=model.name,
        slug=model.slug,
        description=model.description,
        owner_id=model.owner_id,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_domain_gestao(model: GestaoModel) -> Gestao:
    return Gestao(
        id=model.id,
        timeline_id=model.timeline_id,
        period=model.period,
        start_active=model.start_active,
        display_order=model.display_order,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_domain_member(model: MemberModel) -> Member:
    return Member(
        id=model.id,
        gestao_id=model.gestao_id,
        name=model.name,
        role=model.role,
        photo_url=model.photo_url,
        display_order=model.display_order,
    )


def _to_domain_permission(model: PermissionModel) -> Permission:
    return Permission(
        id=model.id,
        admin_id=model.admin_id,
        timeline_id=model.timeline_id,
        can_edit=model.can_edit,
        can_delete=model.can_delete,
    )


async def _apply_values(session: AsyncSession, model, values: dict) -> None:
    for key, value in values.items():
        setattr(model, key, value)
    await session.flush()
    await try_commit(session)
    await session.refresh(model)


class TimelineRepositoryImpl(TimelineRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, timeline: Timeline) -> Timeline:
        model = TimelineModel(
            name=timeline.name,
            slug=timeline.slug,
            description=timeline.description,
            owner_id=timeline.owner_id,
        )
        self._session.add(model)
        await self._session.flush()
        await try_commit(self._session)
        await self._session.refresh(model)
        return _to_domain_timeline(model)

    async def get_by_id(self, timeline_id: int) -> Optional[Timeline]:
        model = await self._session.get(TimelineModel, timeline_id)
        return _to_domain_timeline(model) if model else None

    async def get_by_slug(self, slug: str) -> Optional[Timeline]:
        stmt = select(TimelineModel).where(TimelineModel.slug == slug)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain_timeline(model) if model else None

    async def list(self, offset: int, limit: int, ids: Sequence[int] | None = None) -> Sequence[Timeline]:
        stmt = select(TimelineModel).order_by(TimelineModel.id)
        if ids is not None:
            if not ids:
                return []
            stmt = stmt.where(TimelineModel.id.in_(list(ids)))
        stmt = stmt.offset(offset).limit(limit)
        result = await self._session.execute(stmt)
        return [_to_domain_timeline(model) for model in result.scalars().all()]

    async def list_ids_by_owner(self, owner_id: int) -> Sequence[int]:
        stmt = select(TimelineModel.id).where(TimelineModel.owner_id == owner_id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, timeline_id: int, **values) -> Optional[Timeline]:
        model = await self._session.get(TimelineModel, timeline_id)
        if model is None:
            return None
        await _apply_values(self._session, model, values)
        return _to_domain_timeline(model)

    async def remove(self, timeline_id: int) -> bool:
        stmt = delete(TimelineModel).where(TimelineModel.id == timeline_id)
        result = await self._session.execute(stmt)
        await try_commit(self._session)
        return result.rowcount > 0


class GestaoRepositoryImpl(GestaoRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, gestao: Gestao) -> Gestao:
        model = GestaoModel(
            timeline_id=gestao.timeline_id,
            period=gestao.period,
            start_active=gestao.start_active,
            display_order=gestao.display_order,
        )
        self._session.add(model)
        await self._session.flush()
        await try_commit(self._session)
        await self._session.refresh(model)
        return _to_domain_gestao(model)

    async def get_by_id(self, gestao_id: int) -> Optional[Gestao]:
        model = await self._session.get(GestaoModel, gestao_id)
        return _to_domain_gestao(model) if model else None

    async def list_by_timeline(self, timeline_id: int) -> Sequence[Gestao]:
        stmt = (
            select(GestaoModel)
            .where(GestaoModel.timeline_id == timeline_id)
            .order_by(GestaoModel.display_order, GestaoModel.period, GestaoModel.id)
        )
        result = await self._session.execute(stmt)
        return [_to_domain_gestao(model) for model in result.scalars().all()]

    async def count_by_timeline(self, timeline_id: int) -> int:
        stmt = select(func.count(GestaoModel.id)).where(GestaoModel.timeline_id == timeline_id)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def update(self, gestao_id: int, **values) -> Optional[Gestao]:
        model = await self._session.get(GestaoModel, gestao_id)
        if model is None:
            return None
        await _apply_values(self._session, model, values)
        return _to_domain_gestao(model)

    async def clear_start_active(self, timeline_id: int) -> None:
        stmt = (
            update(GestaoModel)
            .where(GestaoModel.timeline_id == timeline_id, GestaoModel.start_active.is_(True))
            .values(start_active=False)
            .execution_options(synchronize_session='fetch')
        )
        await self._session.execute(stmt)
        await try_commit(self._session)

    async def set_display_order(self, gestao_id: int, timeline_id: int, display_order: int) -> bool:
        stmt = (
            update(GestaoModel)
            .where(GestaoModel.id == gestao_id, GestaoModel.timeline_id == timeline_id)
            .values(display_order=display_order)
            .execution_options(synchronize_session='fetch')
        )
        result = await self._session.execute(stmt)
        await try_commit(self._session)
        return result.rowcount > 0

    async def remove(self, gestao_id: int) -> bool:
        stmt = delete(GestaoModel).where(GestaoModel.id == gestao_id)
        result = await self._session.execute(stmt)
        await try_commit(self._session)
        return result.rowcount > 0


class MemberRepositoryImpl(MemberRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, member: Member) -> Member:
        model = MemberModel(
            gestao_id=member.gestao_id,
            name=member.name,
            role=member.role,
            photo_url=member.photo_url,
            display_order=member.display_order,
        )
        self._session.add(model)
        await self._session.flush()
        await try_commit(self._session)
        await self._session.refresh(model)
        return _to_domain_member(model)

    async def get_by_id(self, member_id: int) -> Optional[Member]:
        model = await self._session.get(MemberModel, member_id)
        return _to_domain_member(model) if model else None

    async def list_by_gestao(self, gestao_id: int) -> Sequence[Member]:
        stmt = (
            select(MemberModel)
            .where(MemberModel.gestao_id == gestao_id)
            .order_by(MemberModel.display_order, MemberModel.id)
        )
        result = await self._session.execute(stmt)
        return [_to_domain_member(model) for model in result.scalars().all()]

    async def count_by_gestao(self, gestao_id: int) -> int:
        stmt = select(func.count(MemberModel.id)).where(MemberModel.gestao_id == gestao_id)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def update(self, member_id: int, **values) -> Optional[Member]:
        model = await self._session.get(MemberModel, member_id)
        if model is None:
            return None
        await _apply_values(self._session, model, values)
        return _to_domain_member(model)

    async def set_display_order(self, member_id: int, gestao_id: int, display_order: int) -> bool:
        stmt = (
            update(MemberModel)
            .where(MemberModel.id == member_id, MemberModel.gestao_id == gestao_id)
            .values(display_order=display_order)
            .execution_options(synchronize_session='fetch')
        )
        result = await self._session.execute(stmt)
        await try_commit(self._session)
        return result.rowcount > 0

    async def remove(self, member_id: int) -> bool:
        stmt = delete(MemberModel).where(MemberModel.id == member_id)
        result = await self._session.execute(stmt)
        await try_commit(self._session)
        return result.rowcount > 0

    async def remove_by_gestao(self, gestao_id: int) -> int:
        stmt = delete(MemberModel).where(MemberModel.gestao_id == gestao_id)
        result = await self._session.execute(stmt)
        await try_commit(self._session)
        return result.rowcount


class PermissionRepositoryImpl(PermissionRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get_model(self, admin_id: int, timeline_id: int) -> Optional[PermissionModel]:
        stmt = select(PermissionModel).where(
            PermissionModel.admin_id == admin_id,
            PermissionModel.timeline_id == timeline_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, admin_id: int, timeline_id: int) -> Optional[Permission]:
        model = await self._get_model(admin_id, timeline_id)
        return _to_domain_permission(model) if model else None

    async def upsert(self, permission: Permission) -> Permission:
        model = await self._get_model(permission.admin_id, permission.timeline_id)
        if model is None:
            model = PermissionModel(
                admin_id=permission.admin_id,
                timeline_id=permission.timeline_id,
                can_edit=permission.can_edit,
                can_delete=permission.can_delete,
            )
            self._session.add(model)
        else:
            model.can_edit = permission.can_edit
            model.can_delete = permission.can_delete
        await self._session.flush()
        await try_commit(self._session)
        await self._session.refresh(model)
        return _to_domain_permission(model)

    async def remove(self, admin_id: int, timeline_id: int) -> bool:
        stmt = delete(PermissionModel).where(
            PermissionModel.admin_id == admin_id,
            PermissionModel.timeline_id == timeline_id,
        )
        result = await self._session.execute(stmt)
        await try_commit(self._session)
        return result.rowcount > 0

    async def list_by_timeline(self, timeline_id: int) -> Sequence[Permission]:
        stmt = select(PermissionModel).where(PermissionModel.timeline_id == timeline_id).order_by(PermissionModel.admin_id)
        result = await self._session.execute(stmt)
        return [_to_domain_permission(model) for model in result.scalars().all()]

    async def list_timeline_ids_by_admin(self, admin_id: int) -> Sequence[int]:
        stmt = select(PermissionModel.timeline_id).where(PermissionModel.admin_id == admin_id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def remove_by_timeline(self, timeline_id: int) -> int:
        stmt = delete(PermissionModel).where(PermissionModel.timeline_id == timeline_id)
        result = await self._session.execute(stmt)
        await try_commit(self._session)
        return result.rowcount

    async def remove_by_admin(self, admin_id: int) -> int:
        stmt = delete(PermissionModel).where(PermissionModel.admin_id == admin_id)
        result = await self._session.execute(stmt)
        await try_commit(self._session)
        return result.rowcount
