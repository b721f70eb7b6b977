"""ORM models used by the application infrastructure."""

from .cluster import ClusterModel, DepartmentModel, UserDepartmentModel
from .directory import NotificationStatusModel, NotificationTypeModel
from .notification import NotificationModel
from .notification_user import NotificationUserModel
from .role import RoleModel
from .user import UserModel

__all__ = [
    "ClusterModel",
    "DepartmentModel",
    "UserDepartmentModel",
    "NotificationStatusModel",
    "NotificationTypeModel",
    "NotificationModel",
    "NotificationUserModel",
    "RoleModel",
    "UserModel",
]
