"""Employee roster CRUD."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from ..models import Employee, new_id
from .store import DEFAULT_DB_PATH, STORAGE_KEYS, KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STAFF: tuple[Employee, ...] = (
    Employee("1", "Shaun Dubuisson", "manager", True),
    Employee("2", "Sarah Williams", "employee", True),
    Employee("3", "David Chen", "employee", True),
    Employee("4", "Emily Rodriguez", "employee", True),
    Employee("5", "James Thompson", "employee", True),
)

_ROLES = ("employee", "manager")


class StaffDB:
    """Manages the stored employee roster."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._store = KeyValueStore(db_path)

    def close(self) -> None:
        self._store.close()

    def get_employees(self) -> list[Employee]:
        raw = self._store.load(STORAGE_KEYS["employees"])
        if raw is None:
            return [replace(e) for e in DEFAULT_STAFF]
        try:
            return [Employee.from_dict(d) for d in raw]
        except (KeyError, TypeError, ValueError):
            logger.warning("Stored roster is malformed; using defaults")
            return [replace(e) for e in DEFAULT_STAFF]

    def _save(self, employees: list[Employee]) -> None:
        self._store.save(STORAGE_KEYS["employees"], [e.to_dict() for e in employees])

    def active_employees(self) -> list[Employee]:
        return [e for e in self.get_employees() if e.active]

    def add_employee(self, name: str, role: str = "employee") -> Employee:
        name = name.strip()
        if not name:
            raise ValueError("Employee name must not be empty")
        if role not in _ROLES:
            raise ValueError(f"Unknown role: {role!r}")
        employee = Employee(id=new_id("emp"), name=name, role=role, active=True)
        self._save([*self.get_employees(), employee])
        return employee

    def toggle_active(self, employee_id: str) -> Employee:
        employee = self._get(employee_id)
        return self.update_employee(employee_id, active=not employee.active)

    def update_employee(self, employee_id: str, **changes) -> Employee:
        if "role" in changes and changes["role"] not in _ROLES:
            raise ValueError(f"Unknown role: {changes['role']!r}")
        employees = self.get_employees()
        for idx, emp in enumerate(employees):
            if emp.id == employee_id:
                employees[idx] = replace(emp, **changes)
                self._save(employees)
                return employees[idx]
        raise ValueError(f"Unknown employee: {employee_id}")

    def delete_employee(self, employee_id: str) -> bool:
        employees = self.get_employees()
        remaining = [e for e in employees if e.id != employee_id]
        if len(remaining) == len(employees):
            return False
        self._save(remaining)
        return True

    def _get(self, employee_id: str) -> Employee:
        for emp in self.get_employees():
            if emp.id == employee_id:
                return emp
        raise ValueError(f"Unknown employee: {employee_id}")
