from checkin_rewards.infrastructure.attendance.service.impl import AttendanceServiceImpl
from checkin_rewards.infrastructure.attendance.service.interface import AttendanceService

__all__ = ["AttendanceService", "AttendanceServiceImpl"]
