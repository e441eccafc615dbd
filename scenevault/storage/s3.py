"""
S3 asset storage backend
Implements StorageBackend for AWS S3 (or compatible services) with pre-signed URLs
"""

import boto3
from botocore.exceptions import ClientError
from typing import Optional
from uuid import UUID
import logging

from scenevault.config import settings
from scenevault.storage.base import StorageBackend, UploadTarget

logger = logging.getLogger(__name__)


class S3Storage(StorageBackend):
    """S3 asset storage, keys laid out as assets/<storage_id>"""

    def __init__(
        self,
        bucket_name: str = None,
        aws_access_key_id: str = None,
        aws_secret_access_key: str = None,
        region_name: str = None,
        endpoint_url: str = None,
        client=None
    ):
        """
        Initialize S3 storage backend

        Args:
            bucket_name: S3 bucket name
            aws_access_key_id: AWS access key (optional, uses env/IAM if not provided)
            aws_secret_access_key: AWS secret key (optional)
            region_name: AWS region (optional)
            endpoint_url: Custom S3 endpoint (for MinIO, DigitalOcean Spaces, etc.)
            client: Pre-built boto3 client (skips client creation and bucket check)
        """
        self.bucket_name = bucket_name or settings.S3_BUCKET_NAME

        if client is not None:
            self.s3_client = client
            return

        s3_config = {}
        if aws_access_key_id:
            s3_config['aws_access_key_id'] = aws_access_key_id
        if aws_secret_access_key:
            s3_config['aws_secret_access_key'] = aws_secret_access_key
        if region_name:
            s3_config['region_name'] = region_name
        if endpoint_url:
            s3_config['endpoint_url'] = endpoint_url

        self.s3_client = boto3.client('s3', **s3_config)

        # Verify bucket exists
        try:
            self.s3_client.head_bucket(Bucket=self.bucket_name)
            logger.info(f"Connected to S3 bucket: {self.bucket_name}")
        except ClientError as e:
            logger.error(f"S3 bucket {self.bucket_name} not accessible: {e}")
            raise

    def _get_asset_key(self, storage_id: str) -> str:
        return f"assets/{storage_id}"

    def generate_upload_target(self, user_id: UUID, expires_in: int = 3600) -> UploadTarget:
        """Pre-signed put_object URL for a freshly allocated key"""
        storage_id = self.new_storage_id()

        try:
            upload_url = self.s3_client.generate_presigned_url(
                'put_object',
                Params={
                    'Bucket': self.bucket_name,
                    'Key': self._get_asset_key(storage_id)
                },
                ExpiresIn=expires_in
            )
        except ClientError as e:
            logger.error(f"Failed to generate upload URL: {e}")
            raise

        logger.info(f"Issued S3 upload target {storage_id} for user {user_id}")
        return UploadTarget(upload_url=upload_url, storage_id=storage_id, expires_in=expires_in)

    def save(
        self,
        storage_id: str,
        content: bytes,
        content_type: Optional[str] = None,
        exclusive: bool = False
    ) -> str:
        """Single put_object; exclusive writes are conditional (If-None-Match: *)"""
        extra_args = {}
        if content_type:
            extra_args['ContentType'] = content_type
        if exclusive:
            extra_args['IfNoneMatch'] = '*'

        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=self._get_asset_key(storage_id),
                Body=content,
                **extra_args
            )
            logger.info(f"Uploaded asset to S3: {storage_id}")
            return storage_id
        except ClientError as e:
            if exclusive and e.response['Error']['Code'] in ('PreconditionFailed', '412'):
                raise FileExistsError(f"Asset already exists: {storage_id}")
            logger.error(f"Failed to upload to S3: {e}")
            raise

    def get_url(self, storage_id: str, expires_in: int = 3600) -> Optional[str]:
        """Pre-signed get_object URL, None when the object does not exist"""
        if not self.exists(storage_id):
            return None

        try:
            return self.s3_client.generate_presigned_url(
                'get_object',
                Params={
                    'Bucket': self.bucket_name,
                    'Key': self._get_asset_key(storage_id)
                },
                ExpiresIn=expires_in
            )
        except ClientError as e:
            logger.error(f"Failed to generate pre-signed URL: {e}")
            raise

    def exists(self, storage_id: str) -> bool:
        try:
            self.s3_client.head_object(
                Bucket=self.bucket_name,
                Key=self._get_asset_key(storage_id)
            )
            return True
        except ClientError as e:
            if e.response['Error']['Code'] in ('404', 'NoSuchKey', 'NotFound'):
                return False
            raise
