from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): the service layer depends on this interface, not on a concrete database.
    Implementations raise DataUnavailableError when the store cannot be read.
    """

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create(self, *, name: str, phone_number: Optional[str] = None) -> str:
        raise NotImplementedError

    def update(self, employee_id: str, *, name: str, phone_number: Optional[str]) -> bool:
        raise NotImplementedError

    def set_active(self, employee_id: str, *, active: bool) -> bool:
        raise NotImplementedError
