"""
Identity service for employees.

Keeps the employee directory in memory, mirrored to the record store, and
enforces who may create, change or remove identities:

- only administrators create employees or change other employees
- any employee may change or remove themselves, but only administrators
  change permission levels
- the last administrator can be neither demoted nor removed

Every attempt, allowed or denied, is written to the audit log.
"""

import logging
import threading
from pathlib import Path
from uuid import uuid4

from pydantic import ValidationError

from aeroprod.core.config import Settings
from aeroprod.core.logging import get_audit_logger
from aeroprod.core.security import get_password_hash, verify_password
from aeroprod.domain.production.entities import Employee
from aeroprod.domain.production.repositories.record_store import RecordStore
from aeroprod.domain.production.value_objects.enums import PermissionLevel
from aeroprod.domain.shared.exceptions import (
    DuplicateEmployeeError,
    EmployeeNotFoundError,
    LastAdminProtectedError,
    PermissionDeniedError,
)
from aeroprod.infrastructure.persistence.json_lines_store import JsonLinesStore

from ..dtos.employee_dtos import EmployeeCreate, EmployeeUpdate

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_ID = "admin"
SYSTEM_ACTOR = "system"


class IdentityService:
    def __init__(
        self,
        store: RecordStore,
        audit_log_path: Path,
        collection: str = "users",
        default_admin_username: str = "admin",
        default_admin_password: str = "admin123",
    ) -> None:
        self._store = store
        self._collection = collection
        self._employees: dict[str, Employee] = {}
        self._invalid_records = 0
        self._lock = threading.RLock()
        self._audit = get_audit_logger(audit_log_path)
        self._load()
        self._ensure_admin(default_admin_username, default_admin_password)

    @classmethod
    def from_settings(cls, settings: Settings) -> "IdentityService":
        return cls(
            store=JsonLinesStore(settings.DATA_DIR),
            audit_log_path=settings.audit_log_path,
            collection=settings.USERS_STORE,
            default_admin_username=settings.DEFAULT_ADMIN_USERNAME,
            default_admin_password=settings.DEFAULT_ADMIN_PASSWORD,
        )

    def _load(self) -> None:
        for record in self._store.load_all(self._collection) or []:
            try:
                employee = Employee.model_validate(record)
            except ValidationError:
                self._invalid_records += 1
                logger.warning("Skipping invalid employee record %r", record.get("id"))
                continue
            self._employees[employee.id] = employee
        logger.info("Loaded %d employees", len(self._employees))

    def _ensure_admin(self, username: str, password: str) -> None:
        """Create the default administrator when the directory has none."""
        if self._admin_count() > 0 or self._find_by_username(username) is not None:
            return
        admin_id = DEFAULT_ADMIN_ID if DEFAULT_ADMIN_ID not in self._employees else uuid4().hex
        admin = Employee(
            id=admin_id,
            name="Administrator",
            username=username,
            password_hash=get_password_hash(password),
            permission_level=PermissionLevel.ADMIN,
        )
        self._store.append_one(self._collection, admin.model_dump(mode="json"))
        self._employees[admin.id] = admin
        logger.warning("Created default administrator %r; change its password", username)

    def _persist_all(self) -> None:
        self._store.replace_all(
            self._collection,
            [e.model_dump(mode="json") for e in self._employees.values()],
        )

    def _commit(self, new_state: dict[str, Employee]) -> None:
        previous = self._employees
        self._employees = new_state
        try:
            self._persist_all()
        except Exception:
            self._employees = previous
            logger.exception("Failed to persist employees, changes rolled back")
            raise

    def _audit_event(self, action: str, actor: str, target: str, **extra: str) -> None:
        fields = [f"action:{action}", f"actor:{actor}", f"target:{target}"]
        fields.extend(f"{key}:{value}" for key, value in extra.items())
        self._audit.info(" | ".join(fields))

    def _find_by_username(self, username: str) -> Employee | None:
        return next((e for e in self._employees.values() if e.username == username), None)

    def _find(self, employee_id: str) -> Employee:
        employee = self._employees.get(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    def _admin_count(self) -> int:
        return sum(1 for e in self._employees.values() if e.is_admin)

    def _authorize(self, actor_id: str, target_id: str, action: str) -> Employee:
        """Resolve the actor and check it may act on ``target_id``."""
        actor = self._find(actor_id)
        if actor.id != target_id and not actor.is_admin:
            self._audit_event(f"{action.upper()}_DENIED", actor_id, target_id)
            raise PermissionDeniedError(actor_id, f"{action} employee {target_id}")
        return actor

    @property
    def corrupted_records(self) -> int:
        return self._store.skipped_records.get(self._collection, 0) + self._invalid_records

    # ─────────────────────────────────
    # Registration and lookup
    # ─────────────────────────────────
    def register(self, request: EmployeeCreate, actor_id: str = SYSTEM_ACTOR) -> Employee:
        """
        Register an employee without an authorization check.

        Raises:
            DuplicateEmployeeError: If the id or username is taken
        """
        with self._lock:
            if request.id in self._employees:
                raise DuplicateEmployeeError("id", request.id)
            if self._find_by_username(request.username) is not None:
                raise DuplicateEmployeeError("username", request.username)
            employee = Employee(
                id=request.id,
                name=request.name,
                phone=request.phone,
                address=request.address,
                username=request.username,
                password_hash=get_password_hash(request.password),
                permission_level=request.permission_level,
            )
            self._commit({**self._employees, employee.id: employee})
            self._audit_event(
                "REGISTER",
                actor_id,
                employee.id,
                username=employee.username,
                level=employee.permission_level.value,
            )
        logger.info("Registered employee %s (%s)", employee.id, employee.permission_level.value)
        return employee.model_copy()

    def register_by_actor(self, request: EmployeeCreate, actor_id: str) -> Employee:
        """
        Register an employee on behalf of ``actor_id``, who must be an administrator.

        Raises:
            EmployeeNotFoundError: If the actor does not exist
            PermissionDeniedError: If the actor is not an administrator
        """
        with self._lock:
            actor = self._find(actor_id)
            if not actor.is_admin:
                self._audit_event("REGISTER_DENIED", actor_id, request.id)
                raise PermissionDeniedError(actor_id, "register employees")
            return self.register(request, actor_id=actor_id)

    def authenticate(self, username: str, password: str) -> Employee | None:
        with self._lock:
            employee = self._find_by_username(username)
        if employee is None or not verify_password(password, employee.password_hash):
            logger.info("Failed login for %r", username)
            return None
        return employee.model_copy()

    def list_users(self) -> list[Employee]:
        with self._lock:
            return [e.model_copy() for e in self._employees.values()]

    def get_user(self, employee_id: str) -> Employee:
        with self._lock:
            return self._find(employee_id).model_copy()

    # ─────────────────────────────────
    # Changes
    # ─────────────────────────────────
    def update_user(self, employee_id: str, updates: EmployeeUpdate, actor_id: str) -> Employee:
        """
        Change an employee's details on behalf of ``actor_id``.

        Raises:
            EmployeeNotFoundError: If the employee or the actor does not exist
            PermissionDeniedError: If a non-admin actor changes someone else or
                changes a permission level, their own included
            DuplicateEmployeeError: If the new username is taken
            LastAdminProtectedError: If the last administrator would be demoted
        """
        with self._lock:
            current = self._find(employee_id)
            actor = self._authorize(actor_id, employee_id, "update")
            changes = updates.changes()

            new_level = changes.get("permission_level", current.permission_level)
            if new_level is not current.permission_level and not actor.is_admin:
                self._audit_event("UPDATE_DENIED", actor_id, employee_id, level=new_level.value)
                raise PermissionDeniedError(actor_id, "change permission levels")
            if current.is_admin and new_level is not PermissionLevel.ADMIN:
                if self._admin_count() <= 1:
                    raise LastAdminProtectedError(employee_id, "demote")

            new_username = changes.get("username")
            if new_username and new_username != current.username:
                if self._find_by_username(new_username) is not None:
                    raise DuplicateEmployeeError("username", new_username)

            password = changes.pop("password", None)
            if password is not None:
                changes["password_hash"] = get_password_hash(password)

            updated = current.model_copy(deep=True)
            for field, value in changes.items():
                setattr(updated, field, value)
            updated.mark_updated()
            self._commit({**self._employees, employee_id: updated})
            self._audit_event(
                "UPDATE",
                actor_id,
                employee_id,
                username=updated.username,
                level=updated.permission_level.value,
            )
        logger.info("Employee %s updated by %s", employee_id, actor_id)
        return updated.model_copy()

    def delete_user(self, employee_id: str, actor_id: str) -> None:
        """
        Remove an employee on behalf of ``actor_id``.

        Raises:
            EmployeeNotFoundError: If the employee or the actor does not exist
            PermissionDeniedError: If a non-admin actor removes someone else
            LastAdminProtectedError: If the target is the last administrator
        """
        with self._lock:
            target = self._find(employee_id)
            self._authorize(actor_id, employee_id, "delete")
            if target.is_admin and self._admin_count() <= 1:
                raise LastAdminProtectedError(employee_id, "delete")
            self._commit({k: v for k, v in self._employees.items() if k != employee_id})
            self._audit_event(
                "DELETE",
                actor_id,
                employee_id,
                username=target.username,
                level=target.permission_level.value,
            )
        logger.info("Employee %s deleted by %s", employee_id, actor_id)
