"""
PynamoDB model for Photo records
"""
from typing import Dict, List, Optional, Any
from pynamodb.models import Model
from pynamodb.attributes import UnicodeAttribute, NumberAttribute, UnicodeSetAttribute
from pynamodb.indexes import GlobalSecondaryIndex, AllProjection
from pynamodb.exceptions import DoesNotExist, UpdateError, DeleteError
from ..config import config
from ..constants import FeedConstants
from ..logger import photo_logger as logger
from ..error_handler import error_handler

CONDITIONAL_CHECK_FAILED = 'ConditionalCheckFailedException'


class FeedIndex(GlobalSecondaryIndex):
    """GSI giving the global reverse-chronological feed"""
    class Meta:
        index_name = FeedConstants.FEED_INDEX
        projection = AllProjection()

    feed_key = UnicodeAttribute(hash_key=True)
    created_at = NumberAttribute(range_key=True)


class UserPhotosIndex(GlobalSecondaryIndex):
    """GSI for querying all photos uploaded by one user"""
    class Meta:
        index_name = FeedConstants.USER_PHOTOS_INDEX
        projection = AllProjection()

    user_id = UnicodeAttribute(hash_key=True)
    created_at = NumberAttribute(range_key=True)


class Photo(Model):
    """
    Uploaded photo with its social metadata

    likes always equals the size of liked_by; both are only ever changed
    together by one update expression in toggle_like.
    """

    class Meta:
        table_name = config.photo_table_name
        region = config.aws_region
        billing_mode = 'PAY_PER_REQUEST'

    photo_id = UnicodeAttribute(hash_key=True)

    # Blob location
    image_url = UnicodeAttribute()
    storage_id = UnicodeAttribute()

    # Uploader, display fields copied at upload time
    user_id = UnicodeAttribute()
    username = UnicodeAttribute()
    user_avatar = UnicodeAttribute(null=True)

    # Likes; DynamoDB cannot store an empty set so "no likes" is an absent attribute
    likes = NumberAttribute(default=0)
    liked_by = UnicodeSetAttribute(null=True)

    # Milliseconds since epoch
    created_at = NumberAttribute()
    feed_key = UnicodeAttribute(default=FeedConstants.FEED_PARTITION)

    feed_index = FeedIndex()
    user_photos_index = UserPhotosIndex()

    @classmethod
    def create_photo(cls, photo_data: Dict[str, Any]) -> 'Photo':
        """
        Insert a new photo record

        Args:
            photo_data: photo_id, image_url, storage_id, user_id, username,
                created_at and optional user_avatar

        Returns:
            Created Photo instance

        Raises:
            StoreError: If the put fails
        """
        photo = cls(
            photo_id=photo_data['photo_id'],
            image_url=photo_data['image_url'],
            storage_id=photo_data['storage_id'],
            user_id=photo_data['user_id'],
            username=photo_data['username'],
            user_avatar=photo_data.get('user_avatar'),
            likes=0,
            created_at=photo_data['created_at'],
            feed_key=FeedConstants.FEED_PARTITION
        )

        try:
            # Never overwrite an existing record with a colliding id
            photo.save(condition=cls.photo_id.does_not_exist())
        except Exception as e:
            logger.log_database_operation(
                table_name=cls.Meta.table_name,
                operation='create',
                success=False,
                photo_id=photo.photo_id,
                error=str(e)
            )
            raise error_handler.handle_dynamodb_error(e, 'create_photo', cls.Meta.table_name) from e

        logger.log_database_operation(
            table_name=cls.Meta.table_name,
            operation='create',
            photo_id=photo.photo_id,
            user_id=photo.user_id
        )

        return photo

    @classmethod
    def get_photo(cls, photo_id: str) -> Optional['Photo']:
        """
        Get photo by ID

        Returns:
            Photo instance or None if not found
        """
        try:
            return cls.get(photo_id, consistent_read=True)
        except DoesNotExist:
            logger.debug("Photo not found", photo_id=photo_id)
            return None
        except Exception as e:
            raise error_handler.handle_dynamodb_error(e, 'get_photo', cls.Meta.table_name) from e

    @classmethod
    def query_feed(cls, limit: int, last_evaluated_key: Optional[Dict[str, Any]] = None) -> List['Photo']:
        """
        Newest-first slice of the global feed

        Args:
            limit: Maximum number of photos to read
            last_evaluated_key: Raw key of the last photo already served

        Returns:
            Photos ordered by created_at descending
        """
        try:
            results = cls.feed_index.query(
                FeedConstants.FEED_PARTITION,
                scan_index_forward=False,
                limit=limit,
                last_evaluated_key=last_evaluated_key
            )
            photos = list(results)
        except Exception as e:
            raise error_handler.handle_dynamodb_error(e, 'query_feed', cls.Meta.table_name) from e

        logger.log_database_operation(
            table_name=cls.Meta.table_name,
            operation='query_feed',
            count=len(photos),
            continued=last_evaluated_key is not None
        )
        return photos

    @classmethod
    def get_user_photos(cls, user_id: str) -> List['Photo']:
        """
        All photos uploaded by a user, newest first (unbounded)
        """
        try:
            photos = list(cls.user_photos_index.query(user_id, scan_index_forward=False))
        except Exception as e:
            raise error_handler.handle_dynamodb_error(e, 'get_user_photos', cls.Meta.table_name) from e

        logger.log_database_operation(
            table_name=cls.Meta.table_name,
            operation='query_user_photos',
            user_id=user_id,
            count=len(photos)
        )
        return photos

    def add_like(self, user_id: str) -> bool:
        """
        Atomically add user_id to liked_by and increment likes

        Returns:
            False if the record is gone or user_id was already a liker
        """
        return self._conditional_update(
            actions=[Photo.liked_by.add({user_id}), Photo.likes.add(1)],
            condition=Photo.photo_id.exists() & ~Photo.liked_by.contains(user_id),
            operation='add_like'
        )

    def remove_like(self, user_id: str) -> bool:
        """
        Atomically remove user_id from liked_by and decrement likes

        Returns:
            False if the record is gone or user_id was not a liker
        """
        return self._conditional_update(
            actions=[Photo.liked_by.delete({user_id}), Photo.likes.add(-1)],
            condition=Photo.photo_id.exists() & Photo.liked_by.contains(user_id),
            operation='remove_like'
        )

    def _conditional_update(self, actions, condition, operation: str) -> bool:
        try:
            self.update(actions=actions, condition=condition)
        except UpdateError as e:
            if e.cause_response_code == CONDITIONAL_CHECK_FAILED:
                logger.info("Conditional update lost a race",
                            photo_id=self.photo_id,
                            operation=operation)
                return False
            raise error_handler.handle_dynamodb_error(e, operation, self.Meta.table_name) from e

        logger.log_database_operation(
            table_name=self.Meta.table_name,
            operation=operation,
            photo_id=self.photo_id,
            likes=self.likes
        )
        return True

    def delete_owned(self, user_id: str) -> bool:
        """
        Delete the record only while it still belongs to user_id

        Returns:
            False if the record was already gone
        """
        try:
            self.delete(condition=Photo.user_id == user_id)
        except DeleteError as e:
            if e.cause_response_code == CONDITIONAL_CHECK_FAILED:
                return False
            logger.log_database_operation(
                table_name=self.Meta.table_name,
                operation='delete',
                success=False,
                photo_id=self.photo_id,
                error=str(e)
            )
            raise error_handler.handle_dynamodb_error(e, 'delete_photo', self.Meta.table_name) from e

        logger.log_database_operation(
            table_name=self.Meta.table_name,
            operation='delete',
            photo_id=self.photo_id,
            user_id=user_id
        )
        return True

    def feed_position(self) -> Dict[str, Any]:
        """Raw DynamoDB start key for continuing the feed after this photo"""
        return {
            'photo_id': {'S': self.photo_id},
            'feed_key': {'S': self.feed_key or FeedConstants.FEED_PARTITION},
            'created_at': {'N': str(self.created_at)}
        }

    def has_liked(self, user_id: str) -> bool:
        return user_id in (self.liked_by or set())

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert photo to dictionary representation

        liked_by is returned as a sorted list so responses are stable
        """
        return {
            'photo_id': self.photo_id,
            'image_url': self.image_url,
            'storage_id': self.storage_id,
            'user_id': self.user_id,
            'username': self.username,
            'user_avatar': self.user_avatar,
            'likes': int(self.likes or 0),
            'liked_by': sorted(self.liked_by or []),
            'created_at': int(self.created_at)
        }
