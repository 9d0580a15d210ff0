# ABOUTME: S3 storage for CloudFormation template artifacts
# ABOUTME: Creates the template bucket on demand and uploads single templates or directories

"""Template upload and bucket management."""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .cf_exceptions import BucketError, UploadError
from .validators import is_template_file

logger = logging.getLogger(__name__)

# S3 rejects an explicit LocationConstraint for us-east-1
DEFAULT_BUCKET_REGION = "us-east-1"


def template_url(bucket: str, region: str, key: str) -> str:
    """HTTPS URL CloudFormation reads an uploaded template from."""
    return f"https://{bucket}.s3.{region}.amazonaws.com/{key}"


@dataclass
class UploadResult:
    """Keys written to the bucket and files that failed, keyed by file name."""

    uploaded: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors


class TemplateStore:
    """Uploads templates to the deployment bucket."""

    def __init__(self, session: boto3.Session, bucket: str, region: str, on_upload: Callable = None):
        """
        Initialize template store.

        Args:
            session: boto3 session to build the S3 client from
            bucket: Target bucket name
            region: Region the bucket is created in when missing
            on_upload: Optional callback receiving (key, url) after each upload
        """
        self.session = session
        self.bucket = bucket
        self.region = region
        self.on_upload = on_upload
        self._s3_client = None

    @property
    def s3_client(self):
        """Lazy-loaded S3 client."""
        if not self._s3_client:
            self._s3_client = self.session.client("s3", region_name=self.region)
        return self._s3_client

    def ensure_bucket(self) -> bool:
        """Create the bucket if it does not exist. Returns True when it was created."""
        try:
            self.s3_client.head_bucket(Bucket=self.bucket)
            return False
        except ClientError as e:
            logger.debug("head_bucket %s failed: %s", self.bucket, e)

        params = {"Bucket": self.bucket}
        if self.region != DEFAULT_BUCKET_REGION:
            params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
        try:
            self.s3_client.create_bucket(**params)
        except ClientError as e:
            raise UploadError(f"Could not create bucket {self.bucket}: {e.response['Error']['Message']}")
        return True

    def upload(self, path: str | Path) -> UploadResult:
        """Upload a template file or every template in a directory."""
        path = Path(path)
        self.ensure_bucket()

        if path.is_dir():
            return self.upload_directory(path)

        result = UploadResult()
        try:
            result.uploaded.append(self.upload_template(path))
        except (ClientError, BotoCoreError, OSError) as e:
            result.errors[path.name] = str(e)
        return result

    def upload_template(self, path: str | Path) -> str:
        """Upload one template under its file name and return the key."""
        path = Path(path)
        key = path.name
        self.s3_client.put_object(Bucket=self.bucket, Key=key, Body=path.read_bytes())
        logger.debug("Uploaded %s to s3://%s/%s", path, self.bucket, key)
        if self.on_upload:
            self.on_upload(key, f"s3://{self.bucket}/{key}")
        return key

    def upload_directory(self, directory: str | Path, max_workers: int = 8) -> UploadResult:
        """
        Upload the .yml/.yaml files directly inside ``directory``.

        Uploads run concurrently with no ordering guarantee. Every failure is
        recorded on the result rather than aborting the remaining uploads.
        """
        templates = sorted(p for p in Path(directory).iterdir() if is_template_file(p))
        result = UploadResult()
        if not templates:
            return result

        with ThreadPoolExecutor(max_workers=min(max_workers, len(templates))) as executor:
            futures = {executor.submit(self.upload_template, template): template for template in templates}
            for future in as_completed(futures):
                template = futures[future]
                try:
                    result.uploaded.append(future.result())
                except (ClientError, BotoCoreError, OSError) as e:
                    logger.debug("Upload of %s failed: %s", template, e)
                    result.errors[template.name] = str(e)

        return result

    def delete_bucket(self) -> int:
        """Remove every object version in the bucket, then the bucket. Returns the number of objects removed."""
        removed = 0
        try:
            paginator = self.s3_client.get_paginator("list_object_versions")
            for page in paginator.paginate(Bucket=self.bucket):
                objects = [
                    _object_identifier(item) for item in page.get("Versions", []) + page.get("DeleteMarkers", [])
                ]
                if objects:
                    self.s3_client.delete_objects(Bucket=self.bucket, Delete={"Objects": objects, "Quiet": True})
                    removed += len(objects)
            self.s3_client.delete_bucket(Bucket=self.bucket)
        except ClientError as e:
            raise BucketError(f"Could not delete bucket {self.bucket}: {e.response['Error']['Message']}")
        return removed


def _object_identifier(item: dict) -> dict[str, str]:
    # Objects written before versioning was enabled report the literal version "null"
    identifier = {"Key": item["Key"]}
    if item.get("VersionId") and item["VersionId"] != "null":
        identifier["VersionId"] = item["VersionId"]
    return identifier
