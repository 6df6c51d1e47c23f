"""Persistence layer for the user directory."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import case, delete, exists, select
from sqlalchemy.orm import Session

from campus_notify.domain.entities import NotificationType, Role, User
from campus_notify.infrastructure.models import (
    DeliveryModel,
    NotificationModel,
    NotificationPreferenceModel,
    UserModel,
)
from campus_notify.utils import ensure_app_naive_datetime, ensure_app_timezone

_BULK = {"synchronize_session": False}


class UserRepository:
    """Provide directory lookups and role mutations for :class:`User` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter(UserModel.email == email).first()
        return self._to_entity(model) if model else None

    def list_for_management(self, skip: int = 0, limit: int = 100) -> Sequence[User]:
        role_order = case(
            (UserModel.role == Role.OWNER, 0),
            (UserModel.role == Role.ADMIN, 1),
            else_=2,
        )
        query = (
            self.session.query(UserModel)
            .order_by(role_order, UserModel.created_at.desc(), UserModel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def count_by_role(self, role: Role) -> int:
        return self.session.query(UserModel).filter(UserModel.role == role).count()

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)
        self.session.add(model)
        self.session.flush()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_role(self, user_id: int, role: Role) -> User:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        model.role = role
        self.session.add(model)
        self.session.flush()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: int) -> None:
        """Remove the user together with every row that depends on it."""

        self.session.flush()
        authored = select(NotificationModel.id).where(NotificationModel.created_by == user_id)
        self.session.execute(
            delete(DeliveryModel).where(
                (DeliveryModel.user_id == user_id)
                | DeliveryModel.notification_id.in_(authored)
            ),
            execution_options=_BULK,
        )
        self.session.execute(
            delete(NotificationModel).where(NotificationModel.created_by == user_id),
            execution_options=_BULK,
        )
        self.session.execute(
            delete(NotificationPreferenceModel).where(
                NotificationPreferenceModel.user_id == user_id
            ),
            execution_options=_BULK,
        )
        self.session.execute(
            delete(UserModel).where(UserModel.id == user_id), execution_options=_BULK
        )
        self.session.expire_all()

    def list_audience_ids(
        self,
        *,
        branches: Iterable[str] | None = None,
        semesters: Iterable[int] | None = None,
        years: Iterable[int] | None = None,
        user_ids: Iterable[int] | None = None,
        active_only: bool = True,
        exclude_opted_out_of: NotificationType | None = None,
    ) -> set[int]:
        """Return ids of users matching every supplied dimension.

        ``None`` leaves a dimension unrestricted. Users who disabled
        ``exclude_opted_out_of`` are dropped in the same statement.
        """

        query = select(UserModel.id)
        if active_only:
            query = query.where(UserModel.is_active.is_(True))
        if branches is not None:
            query = query.where(UserModel.branch_id.in_(list(branches)))
        if semesters is not None:
            query = query.where(UserModel.semester.in_(list(semesters)))
        if years is not None:
            query = query.where(UserModel.year.in_(list(years)))
        if user_ids is not None:
            query = query.where(UserModel.id.in_(list(user_ids)))
        if exclude_opted_out_of is not None:
            opted_out = exists().where(
                NotificationPreferenceModel.user_id == UserModel.id,
                NotificationPreferenceModel.notification_type == exclude_opted_out_of,
                NotificationPreferenceModel.enabled.is_(False),
            )
            query = query.where(~opted_out)
        return set(self.session.scalars(query).all())

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email
        model.role = user.role
        model.branch_id = user.branch_id
        model.year = user.year
        model.semester = user.semester
        model.is_active = user.is_active

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=Role(model.role),
            branch_id=model.branch_id,
            year=model.year,
            semester=model.semester,
            is_active=model.is_active,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["UserRepository"]
