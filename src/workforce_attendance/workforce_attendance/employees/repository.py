from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeDirectory(Protocol):
    """Giao diện tra cứu nhân viên.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def exists(self, employee_id: str) -> bool:
        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError
