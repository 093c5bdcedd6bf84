from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Nhân viên.

    Chỉ giữ những trường mà engine chấm công cần; hồ sơ nhân sự đầy đủ nằm ở module khác.
    """

    employee_id: str
    full_name: str
    location_id: Optional[str] = None
    is_active: bool = True
