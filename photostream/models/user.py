"""
PynamoDB model for user display profiles
"""
from datetime import datetime, timezone
from typing import Dict, Optional, Any
from pynamodb.models import Model
from pynamodb.attributes import UnicodeAttribute, UTCDateTimeAttribute
from pynamodb.exceptions import DoesNotExist
from ..config import config
from ..logger import user_logger as logger
from ..error_handler import error_handler


class User(Model):
    """
    Display name and avatar for a client-generated user id

    Photos copy these values at upload time; nothing joins back to this table.
    """

    class Meta:
        table_name = config.user_table_name
        region = config.aws_region
        billing_mode = 'PAY_PER_REQUEST'

    user_id = UnicodeAttribute(hash_key=True)
    username = UnicodeAttribute()
    avatar = UnicodeAttribute(null=True)

    created_at = UTCDateTimeAttribute(default=lambda: datetime.now(timezone.utc))
    updated_at = UTCDateTimeAttribute(default=lambda: datetime.now(timezone.utc))

    def save(self, **kwargs):
        """Override save to update timestamp"""
        self.updated_at = datetime.now(timezone.utc)
        return super().save(**kwargs)

    @classmethod
    def get_user(cls, user_id: str) -> Optional['User']:
        try:
            return cls.get(user_id)
        except DoesNotExist:
            return None
        except Exception as e:
            raise error_handler.handle_dynamodb_error(e, 'get_user', cls.Meta.table_name) from e

    @classmethod
    def upsert(cls, user_id: str, username: str, avatar: Optional[str] = None) -> 'User':
        """
        Create or replace a profile, keeping the original created_at

        Raises:
            StoreError: If the write fails
        """
        existing = cls.get_user(user_id)

        user = cls(user_id=user_id, username=username, avatar=avatar)
        if existing is not None:
            user.created_at = existing.created_at

        try:
            user.save()
        except Exception as e:
            raise error_handler.handle_dynamodb_error(e, 'upsert_user', cls.Meta.table_name) from e

        logger.log_database_operation(
            table_name=cls.Meta.table_name,
            operation='update' if existing else 'create',
            user_id=user_id
        )
        return user

    def to_dict(self) -> Dict[str, Any]:
        return {
            'user_id': self.user_id,
            'username': self.username,
            'avatar': self.avatar,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }
