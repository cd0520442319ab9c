"""
S3-backed template source.

Lets email templates live in a bucket so they can be updated without a
redeploy. Fetched templates are cached in memory with a TTL.
"""

import logging
import os
import time
from typing import Dict, Optional, Tuple

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..domain.exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)

# Configure S3 client with timeouts to prevent infinite hangs
s3_config = Config(
    retries={
        'max_attempts': 1,  # 1 attempt total (no retries)
        'mode': 'standard'
    },
    connect_timeout=10,
    read_timeout=30
)

# Initialize S3 client at module level (thread-safe, reused)
s3_client = boto3.client('s3', config=s3_config)

# Configuration from environment variables
TEMPLATE_BUCKET = os.environ.get('TEMPLATE_BUCKET')
TEMPLATE_KEY_PREFIX = os.environ.get('TEMPLATE_KEY_PREFIX', 'templates/')

# Cache TTL in seconds (default: 5 minutes)
CACHE_TTL_SECONDS = int(os.environ.get('TEMPLATE_CACHE_TTL', '300'))

# Module-level cache: {s3_uri: (template_content, timestamp)}
_template_cache: Dict[str, Tuple[str, float]] = {}

_NOT_FOUND_CODES = ('NoSuchKey', 'NoSuchBucket', '404')


class S3TemplateSource:
    """
    Templates stored under a key prefix in an S3 bucket.

    Example:
        >>> source = S3TemplateSource(bucket="my-templates")
        >>> email.using_embedded_template("welcome.html", model, source=source)
    """

    def __init__(
        self,
        bucket: Optional[str] = None,
        key_prefix: Optional[str] = None,
        use_cache: bool = True
    ):
        self.bucket = bucket or TEMPLATE_BUCKET
        self.key_prefix = TEMPLATE_KEY_PREFIX if key_prefix is None else key_prefix
        self.use_cache = use_cache

    def read_text(self, path: str) -> str:
        """
        Load a template from S3, using the cache when still fresh.

        Args:
            path: Template path relative to the key prefix

        Returns:
            str: Template content

        Raises:
            ResourceNotFoundError: If no bucket is configured or the object is missing
            ClientError: For any other S3 failure
        """
        if not self.bucket:
            logger.error("TEMPLATE_BUCKET not configured, cannot load template from S3")
            raise ResourceNotFoundError(path, "S3 (no bucket configured)")

        key = f"{self.key_prefix}{path}"
        uri = f"s3://{self.bucket}/{key}"
        current_time = time.time()

        if self.use_cache and uri in _template_cache:
            cached_content, cached_time = _template_cache[uri]
            age_seconds = current_time - cached_time
            if age_seconds < CACHE_TTL_SECONDS:
                logger.info(
                    f"Using cached template: {uri} "
                    f"(age: {int(age_seconds)}s, TTL: {CACHE_TTL_SECONDS}s)"
                )
                return cached_content
            logger.info(f"Cache expired for template: {uri}, reloading...")

        logger.info(f"Loading template from S3: {uri}")

        try:
            response = s3_client.get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code', '')
            if error_code in _NOT_FOUND_CODES:
                logger.error(f"Template not found in S3: {uri} ({error_code})")
                raise ResourceNotFoundError(path, f"s3://{self.bucket}")
            logger.error(f"Failed to fetch template from S3 {uri}: {e}")
            raise

        content = response['Body'].read().decode('utf-8')
        logger.info(f"Loaded template from S3: {len(content)} characters")

        if self.use_cache:
            _template_cache[uri] = (content, current_time)

        return content

    def __repr__(self) -> str:
        return f"S3TemplateSource(bucket={self.bucket!r}, key_prefix={self.key_prefix!r})"


def clear_cache() -> None:
    """
    Clear the template cache.

    Useful for testing or forcing a reload from S3.
    """
    _template_cache.clear()
    logger.info("Template cache cleared")
