import boto3
import json
import logging
from typing import Iterator, Optional
from botocore.exceptions import BotoCoreError, ClientError

# Configure global logger
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class S3Handler:
    def __init__(self, bucket_name, region_name="us-east-1", client=None):
        self.bucket_name = bucket_name
        self.s3 = client or boto3.client("s3", region_name=region_name)
        logger.info(f"S3Handler initialized for bucket: {self.bucket_name} in region: {region_name}")

    def put_json(self, key: str, data: dict):
        """Uploads a JSON object to the specified S3 bucket/key."""
        try:
            logger.info(f"Uploading object to s3://{self.bucket_name}/{key}")
            response = self.s3.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=json.dumps(data),
                ContentType="application/json",
                ServerSideEncryption="AES256"
            )
            status_code = response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)
            if status_code != 200:
                logger.warning(f"Upload returned status code {status_code}")
            return response

        except ClientError as e:
            logger.error(f"AWS ClientError uploading to S3: {e}", exc_info=True)
            raise RuntimeError(f"Failed to upload {key} to bucket {self.bucket_name}") from e
        except BotoCoreError as e:
            logger.error(f"Could not reach S3 uploading {key}: {e}")
            raise RuntimeError(f"Failed to upload {key} to bucket {self.bucket_name}") from e

    def get_json(self, key: str) -> Optional[dict]:
        """Downloads and returns a JSON object from S3, or None when the key is absent."""
        try:
            response = self.s3.get_object(Bucket=self.bucket_name, Key=key)
            content = response["Body"].read().decode("utf-8")
            return json.loads(content)

        except ClientError as e:
            if e.response["Error"]["Code"] in ("NoSuchKey", "404"):
                logger.warning(f"Object not found: s3://{self.bucket_name}/{key}")
                return None
            logger.error(f"AWS ClientError downloading from S3: {e}", exc_info=True)
            raise RuntimeError(f"Failed to retrieve {key} from bucket {self.bucket_name}") from e
        except BotoCoreError as e:
            logger.error(f"Could not reach S3 downloading {key}: {e}")
            raise RuntimeError(f"Failed to retrieve {key} from bucket {self.bucket_name}") from e
        except ValueError as e:
            logger.error(f"Object s3://{self.bucket_name}/{key} is not valid JSON: {e}")
            raise RuntimeError(f"Corrupt JSON object {key} in bucket {self.bucket_name}") from e

    def delete(self, key: str):
        try:
            logger.info(f"Deleting s3://{self.bucket_name}/{key}")
            self.s3.delete_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            logger.error(f"AWS ClientError deleting from S3: {e}", exc_info=True)
            raise RuntimeError(f"Failed to delete {key} from bucket {self.bucket_name}") from e
        except BotoCoreError as e:
            logger.error(f"Could not reach S3 deleting {key}: {e}")
            raise RuntimeError(f"Failed to delete {key} from bucket {self.bucket_name}") from e

    def list_keys(self, prefix: str) -> Iterator[str]:
        """Yields every key under ``prefix``, following continuation tokens."""
        try:
            paginator = self.s3.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=prefix):
                for obj in page.get("Contents", []) or []:
                    yield obj["Key"]
        except ClientError as e:
            logger.error(f"AWS ClientError listing s3://{self.bucket_name}/{prefix}: {e}", exc_info=True)
            raise RuntimeError(f"Failed to list {prefix} in bucket {self.bucket_name}") from e
        except BotoCoreError as e:
            logger.error(f"Could not reach S3 listing {prefix}: {e}")
            raise RuntimeError(f"Failed to list {prefix} in bucket {self.bucket_name}") from e
