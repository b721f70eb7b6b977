"""Repository implementations for infrastructure layer."""

from .cluster_repository import ClusterRepository
from .directory_repository import DirectoryRepository
from .notification_repository import NotificationRepository
from .notification_user_repository import NotificationUserRepository
from .role_repository import RoleRepository
from .user_repository import UserRepository

__all__ = [
    "ClusterRepository",
    "DirectoryRepository",
    "NotificationRepository",
    "NotificationUserRepository",
    "RoleRepository",
    "UserRepository",
]
